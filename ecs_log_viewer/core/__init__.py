"""
Core infrastructure components for AWS calls.

This module contains the foundational components used across all handlers:
- AwsClientGateway: Thin wrapper over boto3 service clients
- Pager: cursor-based pagination helpers
"""

from .client_gateway import AwsClientGateway, create_client_gateway, map_aws_error
from .pagination import iter_items, iter_pages, page_fetcher, paginate, paginate_call

__all__ = [
    "AwsClientGateway",
    "create_client_gateway",
    "map_aws_error",
    "iter_items",
    "iter_pages",
    "page_fetcher",
    "paginate",
    "paginate_call",
]
