# Base protocol and mixins
from .base import (
    EpochMillisMixin,
    Selectable,
    millis_to_datetime,
)

# ECS resource models
from .domain_models import (
    Cluster,
    TaskDefinitionFamily,
    TaskDefinitionRef,
    TaskDefinition,
    ContainerSpec,
    LogConfiguration,
)

# Log query and result models
from .log_models import (
    PTR_FIELD,
    OutputFormat,
    QueryStatus,
    ResultField,
    ResultRow,
    rows_from_api,
    LogQuery,
    QueryExecution,
    LogStream,
    LogEvent,
)

__all__ = [
    # Base
    "EpochMillisMixin",
    "Selectable",
    "millis_to_datetime",

    # ECS resources
    "Cluster",
    "TaskDefinitionFamily",
    "TaskDefinitionRef",
    "TaskDefinition",
    "ContainerSpec",
    "LogConfiguration",

    # Queries and results
    "PTR_FIELD",
    "OutputFormat",
    "QueryStatus",
    "ResultField",
    "ResultRow",
    "rows_from_api",
    "LogQuery",
    "QueryExecution",
    "LogStream",
    "LogEvent",
]
