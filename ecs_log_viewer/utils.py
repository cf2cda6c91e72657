"""
ECS Log Viewer Utilities

Pure helpers shared by the handlers, writers and CLI:
- Query building (Logs Insights query strings)
- Console deep links
- Duration parsing (strings such as '24h' or '1h30m')
- Timestamp conversion and formatting

None of these functions perform I/O.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence
from urllib.parse import quote_plus
from zoneinfo import ZoneInfo

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Query Building Utilities
# =============================================================================

def escape_filter_value(value: str) -> str:
    """Escape a value for use inside a single-quoted Logs Insights literal.

    Only single quotes are escaped (with a backslash).
    """
    return value.replace("'", "\\'")


def build_query(fields: Sequence[str], stream_prefix: str, filter_pattern: str = "") -> str:
    """Build a Logs Insights query string.

    The stream prefix is matched with a slash-delimited pattern; the optional
    message filter is a single-quoted literal.

    Args:
        fields: Field names to select, in order
        stream_prefix: Log stream name prefix
        filter_pattern: Optional text the @message field must match

    Returns:
        Query string

    Example:
        >>> build_query(["@message"], "web", "boom")
        "fields @message | filter @logStream like /web/ | filter @message like 'boom'"
    """
    query = f"fields {', '.join(fields)} | filter @logStream like /{stream_prefix}/"

    if filter_pattern:
        query += f" | filter @message like '{escape_filter_value(filter_pattern)}'"

    return query


# =============================================================================
# Console Deep Links
# =============================================================================

CONSOLE_URL_TEMPLATE = (
    "{region}.console.aws.amazon.com/cloudwatch/home?region={region}"
    "#logsV2:logs-insights$3FqueryDetail$3D~(end~0~start~-{seconds}~timeType~'RELATIVE"
    "~tz~'UTC~unit~'seconds~editorString~'{query}~source~(~'{log_group})~lang~'CWLI)"
)


def build_console_url(region: str, log_group: str, query: str, duration: timedelta) -> str:
    """Build a CloudWatch Logs Insights console URL (without scheme).

    The query and log group are encoded like form values: spaces become '+'
    and every other reserved character is percent-encoded.

    Args:
        region: AWS region
        log_group: Log group to query
        query: Logs Insights query string
        duration: Relative lookback window

    Returns:
        URL string starting with the regional console host
    """
    return CONSOLE_URL_TEMPLATE.format(
        region=region,
        seconds=int(duration.total_seconds()),
        query=quote_plus(query, safe=''),
        log_group=quote_plus(log_group, safe=''),
    )


# =============================================================================
# Duration Parsing
# =============================================================================

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|h|m|s)")

_UNIT_SECONDS = {
    'h': 3600.0,
    'm': 60.0,
    's': 1.0,
    'ms': 0.001,
}


def parse_duration(value: str) -> timedelta:
    """Parse a duration string made of unit-suffixed numbers.

    Accepts a sequence of decimal numbers with units 'h', 'm', 's' or 'ms'
    (e.g. '24h', '1h30m', '1.5h', '90s'), or '0'.

    Raises:
        ValidationError: If the string is not a valid duration
    """
    text = (value or "").strip()
    if text == "0":
        return timedelta(0)

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if not text or position != len(text):
        raise ValidationError(f"invalid duration: {value!r}", {'duration': value})

    return timedelta(seconds=total)


# =============================================================================
# Timestamp Utilities
# =============================================================================

def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_user_timezone(dt: datetime, user_tz: Optional[str] = None) -> datetime:
    """Convert a datetime to the user's timezone for display.

    Returns the datetime unchanged when no timezone is configured.
    """
    if dt is None or user_tz is None:
        return dt
    return dt.astimezone(ZoneInfo(user_tz))


def to_epoch_seconds(dt: datetime) -> int:
    """Epoch seconds as expected by StartQuery."""
    return int(to_utc(dt).timestamp())


def format_timestamp(dt: datetime, user_tz: Optional[str] = None) -> str:
    """Format a datetime as RFC 3339 with second precision.

    UTC is rendered with a 'Z' suffix.
    """
    display = to_user_timezone(to_utc(dt), user_tz)
    text = display.isoformat(timespec='seconds')
    if text.endswith('+00:00'):
        text = text[:-6] + 'Z'
    return text


def time_range(duration: timedelta, end_time: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Return (start, end) covering `duration` up to `end_time` (default: now)."""
    end = to_utc(end_time) if end_time else datetime.now(timezone.utc)
    return end - duration, end
