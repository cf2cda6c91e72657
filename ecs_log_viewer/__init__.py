__version__ = "1.0.0"

from .config import LogViewerConfig
from .exceptions import (
    ConnectionError,
    LogConfigurationError,
    LogViewerError,
    NotFoundError,
    QueryFailedError,
    RetryableError,
    ValidationError,
)
from .models import (
    # ECS resources
    Cluster,
    TaskDefinitionFamily,
    TaskDefinitionRef,
    TaskDefinition,
    ContainerSpec,
    LogConfiguration,
    # Queries and results
    OutputFormat,
    QueryStatus,
    ResultField,
    LogQuery,
    QueryExecution,
    LogStream,
    LogEvent,
)
from .core import (
    AwsClientGateway,
    create_client_gateway,
)
from .handlers.ecs import EcsReadApi
from .handlers.logs import (
    LogsReadApi,
    QueryExecutor,
    StreamRetriever,
)
from .utils import build_console_url, build_query, parse_duration
from .writers import write_events, write_results
from .app import LogViewerApp

__all__ = [
    # Configuration
    "LogViewerConfig",

    # Exceptions
    "ConnectionError",
    "LogConfigurationError",
    "LogViewerError",
    "NotFoundError",
    "QueryFailedError",
    "RetryableError",
    "ValidationError",

    # ECS resources
    "Cluster",
    "TaskDefinitionFamily",
    "TaskDefinitionRef",
    "TaskDefinition",
    "ContainerSpec",
    "LogConfiguration",

    # Queries and results
    "OutputFormat",
    "QueryStatus",
    "ResultField",
    "LogQuery",
    "QueryExecution",
    "LogStream",
    "LogEvent",

    # Gateway
    "AwsClientGateway",
    "create_client_gateway",

    # Handlers
    "EcsReadApi",
    "LogsReadApi",
    "QueryExecutor",
    "StreamRetriever",

    # Helpers
    "build_console_url",
    "build_query",
    "parse_duration",
    "write_events",
    "write_results",

    # Application
    "LogViewerApp",
]
