import os
from datetime import timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..exceptions import ValidationError
from ..models import OutputFormat
from ..utils import parse_duration

# Load environment variables from .env file if it exists
load_dotenv()


class LogViewerConfig(BaseModel):
    """Configuration for AWS access, query execution and output rendering."""

    # AWS credentials and location
    profile_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_PROFILE"),
        description="AWS shared-config profile name"
    )

    region_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
        description="AWS region where the ECS clusters are located"
    )

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("ECS_LOG_VIEWER_ENDPOINT_URL"),
        description="Endpoint URL override (for local development)"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts botocore makes for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Query settings
    poll_interval_seconds: float = Field(
        default=1.0,
        description="Interval between GetQueryResults polls"
    )

    duration: timedelta = Field(
        default_factory=lambda: parse_duration(os.getenv("ECS_LOG_VIEWER_DURATION", "24h")),
        description="How far back from now to fetch logs"
    )

    fields: List[str] = Field(
        default_factory=lambda: ["@message"],
        description="Log fields to select"
    )

    filter_pattern: str = Field(
        default="",
        description="Text the @message field must match"
    )

    # Output settings
    output_format: str = Field(
        default=OutputFormat.SIMPLE.value,
        description="Output format (simple, csv, json)"
    )

    write_header: bool = Field(
        default=True,
        description="Write a header row in csv output"
    )

    user_timezone: Optional[str] = Field(
        default_factory=lambda: os.getenv("ECS_LOG_VIEWER_TIMEZONE"),
        description="Timezone used to display event timestamps (UTC if unset)"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("ECS_LOG_VIEWER_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging"
    )

    @field_validator('output_format')
    @classmethod
    def validate_output_format(cls, v):
        """Validate output format selection."""
        if v not in OutputFormat.values():
            raise ValueError(f"invalid format: {v}")
        return v

    @field_validator('fields')
    @classmethod
    def validate_fields(cls, v):
        """Strip field names and reject an empty selection."""
        fields = [field.strip() for field in v if field and field.strip()]
        if not fields:
            raise ValueError("At least one log field must be selected")
        return fields

    @field_validator('poll_interval_seconds')
    @classmethod
    def validate_poll_interval(cls, v):
        if v <= 0:
            raise ValueError("Poll interval must be positive")
        return v

    @field_validator('duration', mode='before')
    @classmethod
    def validate_duration(cls, v):
        """Accept duration strings such as '24h' or '1h30m'."""
        if isinstance(v, str):
            try:
                return parse_duration(v)
            except ValidationError as e:
                raise ValueError(e.message) from None
        return v

    @field_validator('user_timezone')
    @classmethod
    def validate_timezone(cls, v):
        """Validate timezone string."""
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Invalid timezone: {v}. Please use a valid IANA timezone identifier.") from None
        return v

    @model_validator(mode='after')
    def validate_simple_format_fields(self):
        """The simple format prints a single value per line."""
        if self.output_format == OutputFormat.SIMPLE.value and len(self.fields) != 1:
            raise ValueError("simple format can only be used when exactly one field is selected")
        return self

    @classmethod
    def from_env(cls) -> 'LogViewerConfig':
        """Create configuration from environment variables.

        Returns:
            LogViewerConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:4566") -> 'LogViewerConfig':
        """Create configuration for a local AWS emulator.

        Args:
            endpoint_url: Emulator endpoint

        Returns:
            LogViewerConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
