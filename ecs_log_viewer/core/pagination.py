"""
Cursor-based pagination for AWS list APIs.

Every list-style call (clusters, tasks, families, task definitions, log
streams, log events) is driven through `iter_pages`:

    fetch_page(cursor) -> (items, next_cursor)

Pages are requested lazily, so a caller that needs only the first few items
can stop early without exhausting the remote list. Paging ends when the
service returns no cursor, or returns a cursor that was already sent:
GetLogEvents keeps handing back the same forward token once the head of the
stream is reached, so a present token alone does not mean more pages exist,
and no cursor is ever requested twice.

Errors from `fetch_page` propagate immediately; `paginate` therefore never
returns a partial result.
"""

import logging
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar('T')

Cursor = Optional[Any]
FetchPage = Callable[[Cursor], Tuple[Sequence[T], Cursor]]

logger = logging.getLogger(__name__)


def iter_pages(fetch_page: FetchPage, initial_cursor: Cursor = None) -> Iterator[List[T]]:
    """Yield each page's items, requesting pages on demand.

    Args:
        fetch_page: Callable taking a cursor (None for the first page) and
            returning (items, next_cursor)
        initial_cursor: Cursor for the first request

    Yields:
        List of items of one page
    """
    cursor = initial_cursor
    # list, not set: cursors are not always hashable
    consumed = [cursor]
    page_number = 0
    while True:
        items, next_cursor = fetch_page(cursor)
        page_number += 1
        yield list(items or [])

        if not next_cursor:
            break
        if next_cursor in consumed:
            logger.debug(f"Cursor repeated after page {page_number}, stopping")
            break
        consumed.append(next_cursor)
        cursor = next_cursor


def iter_items(fetch_page: FetchPage, initial_cursor: Cursor = None) -> Iterator[T]:
    """Yield items across pages in service order."""
    for page in iter_pages(fetch_page, initial_cursor):
        yield from page


def paginate(fetch_page: FetchPage, initial_cursor: Cursor = None) -> List[T]:
    """Concatenate all pages' items, preserving order."""
    return list(iter_items(fetch_page, initial_cursor))


def page_fetcher(
    gateway,
    operation: str,
    items_key: str,
    token_key: str = 'nextToken',
    request_token_key: str = 'nextToken',
    **params
) -> FetchPage:
    """
    Build a `fetch_page` callable for a gateway operation.

    Args:
        gateway: AwsClientGateway to call
        operation: AWS operation name, e.g. 'ListClusters'
        items_key: Response key holding the page items, e.g. 'clusterArns'
        token_key: Response key holding the next cursor
        request_token_key: Request parameter that carries the cursor
        **params: Fixed request parameters

    Example:
        fetch = page_fetcher(gateway, 'GetLogEvents', 'events',
                             token_key='nextForwardToken',
                             logGroupName=group, logStreamName=stream,
                             startFromHead=True)
        events = paginate(fetch)
    """
    def fetch_page(cursor: Cursor):
        request = dict(params)
        if cursor:
            request[request_token_key] = cursor
        response = gateway.call(operation, **request)
        return response.get(items_key, []), response.get(token_key)

    return fetch_page


def paginate_call(
    gateway,
    operation: str,
    items_key: str,
    token_key: str = 'nextToken',
    request_token_key: str = 'nextToken',
    **params
) -> List[Any]:
    """Paginate a gateway operation eagerly."""
    return paginate(page_fetcher(gateway, operation, items_key, token_key, request_token_key, **params))
