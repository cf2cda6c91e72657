"""
CloudWatch Logs retrieval.

Exports:
- LogsReadApi: raw stream, event and Logs Insights operations
- QueryExecutor: submits a query and polls it to a terminal status
- StreamRetriever: merges events from all streams sharing a prefix
"""

from .executor import QueryExecutor
from .queries import LogsReadApi
from .streams import StreamRetriever

__all__ = [
    "LogsReadApi",
    "QueryExecutor",
    "StreamRetriever",
]
