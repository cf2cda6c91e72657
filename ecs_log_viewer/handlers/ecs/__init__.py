"""
ECS resource discovery.

Exports:
- EcsReadApi: list/describe operations for clusters, tasks and task definitions
"""

from .queries import EcsReadApi

__all__ = [
    "EcsReadApi",
]
