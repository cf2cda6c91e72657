"""
Base Model Components and Mixins

## Selectable

Resources offered in an interactive menu (task definition families, task
definitions, clusters, containers) share one capability: they expose a
display label. `Selectable` is a structural protocol, so any object with a
`label()` method qualifies without inheriting from a common base class.

## EpochMillisMixin

CloudWatch Logs reports timestamps as integer milliseconds since the epoch.
The mixin registers a `'*'` before-validator through Pydantic's MRO scan, so
every `datetime` field of an inheriting model accepts epoch milliseconds and
turns them into timezone-aware UTC datetimes:

```python
class LogEvent(EpochMillisMixin, BaseModel):
    timestamp: datetime

LogEvent(timestamp=1739664000000).timestamp
# datetime(2025, 2, 16, 0, 0, tzinfo=timezone.utc)
```

Naive datetimes are assumed to already be in UTC.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Protocol, Union, get_args, get_origin, runtime_checkable

from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)


@runtime_checkable
class Selectable(Protocol):
    """Anything that can be offered in a selection menu."""

    def label(self) -> str:
        ...


def _is_datetime_annotation(annotation) -> bool:
    if annotation is datetime:
        return True
    # Optional[datetime]
    if get_origin(annotation) is Union:
        return datetime in get_args(annotation)
    return False


class EpochMillisMixin(BaseModel):
    """Mixin accepting epoch milliseconds for every datetime field."""

    @field_validator('*', mode='before')
    @classmethod
    def validate_epoch_millis(cls, v, info):
        """
        Convert epoch milliseconds and naive datetimes to aware UTC datetimes.

        Non-datetime fields are returned unchanged.
        """
        field = cls.model_fields.get(info.field_name)
        if field is None or not _is_datetime_annotation(field.annotation):
            return v

        if v is None:
            return v
        if isinstance(v, bool):
            raise ValueError(f"Invalid timestamp for {info.field_name}: {v!r}")
        if isinstance(v, (int, float)):
            return millis_to_datetime(v)
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


def millis_to_datetime(millis: Optional[Union[int, float]]) -> Optional[datetime]:
    """Convert epoch milliseconds to an aware UTC datetime."""
    if millis is None:
        return None
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
