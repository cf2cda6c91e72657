"""
Direct log retrieval across streams.

Reads every stream matching a prefix from its head and merges the events
into one chronological list. Streams are fetched one after another; a
stream that cannot be read is logged and skipped so the remaining streams
are still shown.
"""

import logging
from datetime import datetime
from typing import List, Optional, TextIO

from ...exceptions import LogViewerError
from ...models import LogEvent
from ...writers import write_events

logger = logging.getLogger(__name__)


class StreamRetriever:
    """Merge events from all streams sharing a name prefix."""

    def __init__(self, logs_api):
        self.logs_api = logs_api

    def retrieve(
        self,
        log_group: str,
        prefix: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None
    ) -> List[LogEvent]:
        """
        Fetch and merge events of every stream whose name starts with `prefix`.

        Args:
            log_group: Log group name
            prefix: Stream name prefix
            start_time: Optional lower bound on event time
            end_time: Optional upper bound on event time

        Returns:
            Events sorted ascending by timestamp; ties keep fetch order

        Raises:
            LogViewerError: If the streams cannot be listed
        """
        streams = self.logs_api.list_log_streams(log_group, prefix)
        if not streams:
            logger.info(f"No log streams in {log_group} start with {prefix!r}")
            return []

        events: List[LogEvent] = []
        for stream in streams:
            try:
                stream_events = self.logs_api.get_log_events(log_group, stream.name, start_time, end_time)
            except LogViewerError as e:
                logger.warning(f"Skipping log stream {stream.name}: {e}")
                continue
            logger.debug(f"Read {len(stream_events)} events from {stream.name}")
            events.extend(stream_events)

        # sorted() is stable
        return sorted(events, key=lambda event: event.timestamp)

    def retrieve_to(
        self,
        sink: TextIO,
        log_group: str,
        prefix: str,
        user_timezone: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None
    ) -> int:
        """Retrieve merged events and print them to `sink`.

        Returns:
            Number of events written
        """
        events = self.retrieve(log_group, prefix, start_time, end_time)
        write_events(sink, events, user_timezone)
        return len(events)
