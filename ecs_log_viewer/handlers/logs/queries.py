"""
CloudWatch Logs Read API

Raw read operations on CloudWatch Logs:
- DescribeLogStreams ordered by most recent event
- GetLogEvents from the head of a stream, following forward tokens
- StartQuery / GetQueryResults for Logs Insights

Query polling lives in QueryExecutor; multi-stream merging lives in
StreamRetriever.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from ...config import LogViewerConfig
from ...core import create_client_gateway, iter_items, page_fetcher
from ...models import LogEvent, LogStream, ResultRow
from ...utils import to_epoch_seconds, to_utc
from .executor import QueryExecutor

logger = logging.getLogger(__name__)


class LogsReadApi:
    """Read-only API for CloudWatch Logs."""

    def __init__(self, config: LogViewerConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_client_gateway(config, "logs")

    def iter_log_streams(self, log_group: str, prefix: str = "") -> Iterator[LogStream]:
        """
        Yield log streams whose name starts with `prefix`, most recent first.

        CloudWatch Logs Operation: DescribeLogStreams (orderBy=LastEventTime, descending)

        The service refuses a name prefix together with event-time ordering,
        so the prefix is applied here while keeping the service's order.
        """
        fetch_page = page_fetcher(
            self.gateway, 'DescribeLogStreams', 'logStreams',
            logGroupName=log_group,
            orderBy='LastEventTime',
            descending=True
        )
        for stream in iter_items(fetch_page):
            if stream.get('logStreamName', '').startswith(prefix):
                yield LogStream.from_api(stream)

    def list_log_streams(self, log_group: str, prefix: str = "") -> List[LogStream]:
        """List matching log streams, most recent first."""
        streams = list(self.iter_log_streams(log_group, prefix))
        logger.debug(f"Found {len(streams)} log streams in {log_group} with prefix {prefix!r}")
        return streams

    def iter_log_events(
        self,
        log_group: str,
        stream_name: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None
    ) -> Iterator[LogEvent]:
        """
        Yield a stream's events from the head forward.

        CloudWatch Logs Operation: GetLogEvents (startFromHead=True)

        Paging stops once the forward token repeats.
        """
        params: Dict[str, Any] = {
            'logGroupName': log_group,
            'logStreamName': stream_name,
            'startFromHead': True,
        }
        if start_time:
            params['startTime'] = int(to_utc(start_time).timestamp() * 1000)
        if end_time:
            params['endTime'] = int(to_utc(end_time).timestamp() * 1000)

        fetch_page = page_fetcher(
            self.gateway, 'GetLogEvents', 'events',
            token_key='nextForwardToken',
            **params
        )
        for event in iter_items(fetch_page):
            yield LogEvent.from_api(event, stream_name)

    def get_log_events(
        self,
        log_group: str,
        stream_name: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None
    ) -> List[LogEvent]:
        """Fetch all events of one stream; any failed page aborts the call."""
        return list(self.iter_log_events(log_group, stream_name, start_time, end_time))

    def start_query(self, log_group: str, query_string: str, start_time: datetime, end_time: datetime) -> str:
        """
        Submit a Logs Insights query.

        CloudWatch Logs Operation: StartQuery

        Returns:
            Query identifier
        """
        response = self.gateway.call(
            'StartQuery',
            resource_id=log_group,
            logGroupName=log_group,
            queryString=query_string,
            startTime=to_epoch_seconds(start_time),
            endTime=to_epoch_seconds(end_time)
        )
        query_id = response['queryId']
        logger.debug(f"Started query {query_id} on {log_group}")
        return query_id

    def get_query_results(self, query_id: str) -> Dict[str, Any]:
        """
        Fetch the current status and results of a query.

        CloudWatch Logs Operation: GetQueryResults

        Returns:
            Raw response with 'status', 'results' and 'statistics'
        """
        return self.gateway.call('GetQueryResults', resource_id=query_id, queryId=query_id)

    def query_logs(self, log_group: str, query_string: str, start_time: datetime, end_time: datetime) -> List[ResultRow]:
        """Run a query to completion using the configured poll interval."""
        executor = QueryExecutor(self, poll_interval_seconds=self.config.poll_interval_seconds)
        return executor.run(log_group, query_string, start_time, end_time).rows
