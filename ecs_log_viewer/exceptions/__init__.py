# Base exception class
from .base import LogViewerError

from .domain_exceptions import (
    ValidationError,
    LogConfigurationError,
    NotFoundError,
    ConnectionError,
    RetryableError,
    QueryFailedError,
)

__all__ = [
    # Base exception
    "LogViewerError",

    # Domain exceptions (alphabetically ordered)
    "ConnectionError",
    "LogConfigurationError",
    "NotFoundError",
    "QueryFailedError",
    "RetryableError",
    "ValidationError",
]
