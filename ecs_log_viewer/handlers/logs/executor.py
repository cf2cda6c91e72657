"""
Logs Insights query execution.

A query moves through

    Scheduled -> Running* -> Complete | Failed

Once submitted, GetQueryResults is polled on a fixed interval until a
terminal status is observed. Rows are taken only from the single Complete
response; nothing is accumulated across polls. There is no iteration cap
and no internal timeout: callers that need a deadline wrap the whole call.
"""

import logging
import time
from datetime import datetime
from typing import Callable

from ...exceptions import QueryFailedError
from ...models import QueryExecution, QueryStatus, rows_from_api

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


class QueryExecutor:
    """Drives one Logs Insights query from submission to a terminal state."""

    def __init__(
        self,
        logs_api,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            logs_api: LogsReadApi (anything with start_query/get_query_results)
            poll_interval_seconds: Wait between polls
            sleep: Blocking wait function, injectable for tests
        """
        self.logs_api = logs_api
        self.poll_interval_seconds = poll_interval_seconds
        self.sleep = sleep

    def submit(self, log_group: str, query_string: str, start_time: datetime, end_time: datetime) -> QueryExecution:
        """Start the query and return its execution state."""
        query_id = self.logs_api.start_query(log_group, query_string, start_time, end_time)
        return QueryExecution(query_id=query_id, log_group=log_group)

    def poll(self, execution: QueryExecution) -> QueryExecution:
        """Observe the query once and record the result on `execution`."""
        response = self.logs_api.get_query_results(execution.query_id)
        status = QueryStatus.parse(response.get('status'))
        rows = rows_from_api(response.get('results', [])) if status is QueryStatus.COMPLETE else []
        execution.record_poll(status, rows, response.get('statistics', {}))
        logger.debug(f"Query {execution.query_id} status: {status.value}")
        return execution

    def wait(self, execution: QueryExecution) -> QueryExecution:
        """
        Poll until the query reaches a terminal status.

        Raises:
            QueryFailedError: If the query ends Failed, Cancelled or Timeout
        """
        while True:
            self.poll(execution)

            if execution.status is QueryStatus.COMPLETE:
                logger.debug(f"Query {execution.query_id} returned {len(execution.rows)} rows after {execution.polls} polls")
                return execution

            if execution.status.is_failure:
                raise QueryFailedError(execution.query_id, execution.status.value, execution.statistics)

            self.sleep(self.poll_interval_seconds)

    def run(self, log_group: str, query_string: str, start_time: datetime, end_time: datetime) -> QueryExecution:
        """Submit a query and wait for it to complete."""
        execution = self.submit(log_group, query_string, start_time, end_time)
        return self.wait(execution)
