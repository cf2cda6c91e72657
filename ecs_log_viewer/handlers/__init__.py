"""
Handler Layer for ECS Log Viewer

Read-only handlers over the two AWS services involved:
- ecs: locate a container's task definition and log configuration
- logs: fetch the container's logs, via Logs Insights or directly from streams

Architecture:
handlers/ (this layer) -> core/ (infrastructure) -> AWS
handlers/ (this layer) <- models/ (domain models)
"""

from .ecs.queries import EcsReadApi
from .logs.executor import QueryExecutor
from .logs.queries import LogsReadApi
from .logs.streams import StreamRetriever

__all__ = [
    'EcsReadApi',
    'LogsReadApi',
    'QueryExecutor',
    'StreamRetriever',
]
