"""
Log Query and Result Models

Models for both data paths:
- Logs Insights: LogQuery -> QueryExecution -> rows of ResultField
- Direct retrieval: LogStream -> LogEvent
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ValidationError
from ..utils import build_query
from .base import EpochMillisMixin

# Record pointer returned by Logs Insights; never rendered.
PTR_FIELD = "@ptr"


class OutputFormat(str, Enum):
    """Supported result encodings."""
    SIMPLE = "simple"
    CSV = "csv"
    JSON = "json"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value) -> 'OutputFormat':
        """Parse a format name, rejecting anything outside simple/csv/json."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"unsupported output format: {value}", {'output_format': value}) from None


class QueryStatus(str, Enum):
    """Logs Insights query status values."""
    SCHEDULED = "Scheduled"
    RUNNING = "Running"
    COMPLETE = "Complete"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
    TIMEOUT = "Timeout"
    UNKNOWN = "Unknown"

    @property
    def is_terminal(self) -> bool:
        return self in (QueryStatus.COMPLETE, QueryStatus.FAILED, QueryStatus.CANCELLED, QueryStatus.TIMEOUT)

    @property
    def is_failure(self) -> bool:
        return self.is_terminal and self is not QueryStatus.COMPLETE

    @classmethod
    def parse(cls, value: Optional[str]) -> 'QueryStatus':
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class ResultField(BaseModel):
    """One (field, value) pair of a Logs Insights result row."""

    field: str = Field(..., description="Field name, e.g. '@message'")
    value: Optional[str] = Field(None, description="Field value; None when absent")

    model_config = ConfigDict(frozen=True)

    @property
    def is_pointer(self) -> bool:
        return self.field == PTR_FIELD

    @classmethod
    def from_api(cls, result_field: Mapping[str, Any]) -> 'ResultField':
        return cls(field=result_field.get('field', ''), value=result_field.get('value'))


# A row keeps the field order of the service response.
ResultRow = List[ResultField]


def rows_from_api(results: Sequence[Sequence[Mapping[str, Any]]]) -> List[ResultRow]:
    """Convert the `results` block of GetQueryResults into rows."""
    return [[ResultField.from_api(field) for field in row] for row in results]


class LogQuery(BaseModel):
    """
    An immutable Logs Insights query request.

    Produces exactly one query string.
    """

    fields: List[str] = Field(default_factory=lambda: ["@message"], description="Fields to select, in order")
    stream_prefix: str = Field(..., description="Log stream name prefix")
    filter_pattern: str = Field("", description="Optional @message filter")

    model_config = ConfigDict(frozen=True)

    @property
    def query_string(self) -> str:
        return build_query(self.fields, self.stream_prefix, self.filter_pattern)


class QueryExecution(BaseModel):
    """
    State of a submitted Logs Insights query.

    Status only moves forward; once a terminal status is recorded the
    execution cannot be updated again.
    """

    query_id: str = Field(..., description="Identifier returned by StartQuery")
    log_group: str = Field(..., description="Queried log group")
    status: QueryStatus = Field(QueryStatus.SCHEDULED, description="Last observed status")
    rows: List[ResultRow] = Field(default_factory=list, description="Rows of the terminal response")
    statistics: Dict[str, Any] = Field(default_factory=dict, description="Last reported statistics")
    polls: int = Field(0, description="Number of GetQueryResults calls made")

    def record_poll(self, status: QueryStatus, rows: List[ResultRow], statistics: Dict[str, Any]) -> None:
        """Record one GetQueryResults observation."""
        if self.status.is_terminal:
            raise ValidationError(
                f"Query {self.query_id} already reached {self.status.value}",
                {'query_id': self.query_id, 'status': self.status.value}
            )
        self.polls += 1
        self.status = status
        self.statistics = dict(statistics or {})
        # Rows are only kept from the terminal Complete response.
        self.rows = list(rows) if status is QueryStatus.COMPLETE else []


class LogStream(EpochMillisMixin, BaseModel):
    """A log stream as listed by DescribeLogStreams."""

    name: str = Field(..., description="Log stream name")
    last_event_time: Optional[datetime] = Field(None, description="Timestamp of the most recent event")

    def label(self) -> str:
        return self.name

    @classmethod
    def from_api(cls, log_stream: Mapping[str, Any]) -> 'LogStream':
        return cls(
            name=log_stream['logStreamName'],
            last_event_time=log_stream.get('lastEventTimestamp'),
        )


class LogEvent(EpochMillisMixin, BaseModel):
    """A single event read directly from a log stream."""

    timestamp: datetime = Field(..., description="Event time (UTC)")
    stream_name: str = Field(..., description="Stream the event came from")
    message: str = Field("", description="Raw event message")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_api(cls, event: Mapping[str, Any], stream_name: str) -> 'LogEvent':
        return cls(
            timestamp=event['timestamp'],
            stream_name=stream_name,
            message=event.get('message') or '',
        )
