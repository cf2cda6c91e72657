"""
Domain Models for ECS Resources

Organized by domain:
1. Resource identifiers returned by ECS list APIs
2. Task definitions and container specs
3. Log configuration extracted from a container spec

ECS identifiers are retrieved fresh per invocation; none of these models is
persisted.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import LogConfigurationError

AWSLOGS_DRIVER = "awslogs"
AWSLOGS_KEY_PREFIX = "awslogs-"
GROUP_KEY = "group"
STREAM_PREFIX_KEY = "stream-prefix"


# =============================================================================
# Resource Identifiers
# =============================================================================

class Cluster(BaseModel):
    """An ECS cluster, identified by its ARN."""

    arn: str = Field(..., description="Cluster ARN")

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.arn.rsplit("/", 1)[-1]

    def label(self) -> str:
        return self.arn


class TaskDefinitionFamily(BaseModel):
    """A task definition family name."""

    name: str = Field(..., description="Family name")

    model_config = ConfigDict(frozen=True)

    def label(self) -> str:
        return self.name


class TaskDefinitionRef(BaseModel):
    """A task definition ARN as returned by ListTaskDefinitions."""

    arn: str = Field(..., description="Task definition ARN")

    model_config = ConfigDict(frozen=True)

    def label(self) -> str:
        return self.arn


# =============================================================================
# Task Definitions and Containers
# =============================================================================

class ContainerSpec(BaseModel):
    """
    The part of a container definition relevant to log retrieval.

    Only the container name and its log configuration are kept.
    """

    name: str = Field(..., description="Container name")
    log_driver: Optional[str] = Field(None, description="Log driver, e.g. 'awslogs'")
    log_options: Dict[str, str] = Field(default_factory=dict, description="Log driver options")

    model_config = ConfigDict(frozen=True)

    def label(self) -> str:
        return self.name

    @classmethod
    def from_api(cls, container_definition: Mapping[str, Any]) -> 'ContainerSpec':
        """Build from a `containerDefinitions` entry of DescribeTaskDefinition."""
        log_configuration = container_definition.get('logConfiguration') or {}
        return cls(
            name=container_definition.get('name') or '<Unnamed>',
            log_driver=log_configuration.get('logDriver'),
            log_options=log_configuration.get('options') or {},
        )


class TaskDefinition(BaseModel):
    """A described task definition revision."""

    arn: str = Field(..., description="Task definition ARN")
    family: str = Field(..., description="Family name")
    revision: int = Field(..., description="Revision number")
    containers: List[ContainerSpec] = Field(default_factory=list, description="Container specs")

    def label(self) -> str:
        return self.arn

    @classmethod
    def from_api(cls, task_definition: Mapping[str, Any]) -> 'TaskDefinition':
        """Build from the `taskDefinition` block of DescribeTaskDefinition."""
        return cls(
            arn=task_definition['taskDefinitionArn'],
            family=task_definition['family'],
            revision=task_definition['revision'],
            containers=[
                ContainerSpec.from_api(container)
                for container in task_definition.get('containerDefinitions', [])
            ],
        )


# =============================================================================
# Log Configuration
# =============================================================================

class LogConfiguration(BaseModel):
    """
    Where a container's logs live in CloudWatch Logs.

    The awslogs driver names streams `<stream-prefix>/<container-name>/<task-id>`,
    so the stream-name prefix of a container includes its name when known.
    """

    group: str = Field(..., description="Log group name")
    stream_prefix: str = Field(..., description="Configured stream prefix")
    container_name: Optional[str] = Field(None, description="Container the configuration belongs to")

    model_config = ConfigDict(frozen=True)

    @property
    def stream_name_prefix(self) -> str:
        if self.container_name:
            return f"{self.stream_prefix}/{self.container_name}"
        return self.stream_prefix

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, str],
        key_prefix: str = AWSLOGS_KEY_PREFIX,
        container_name: Optional[str] = None
    ) -> 'LogConfiguration':
        """
        Extract the group and stream prefix from a log options mapping.

        Args:
            options: Log driver options
            key_prefix: Prefix of the option keys ('awslogs-' for ECS, '' for bare keys)
            container_name: Container the options belong to

        Raises:
            LogConfigurationError: If either key is missing
        """
        group_key = f"{key_prefix}{GROUP_KEY}"
        prefix_key = f"{key_prefix}{STREAM_PREFIX_KEY}"

        if group_key not in options:
            raise LogConfigurationError(
                f"{group_key} not set in log configuration",
                container_name=container_name,
                missing_key=group_key,
            )
        if prefix_key not in options:
            raise LogConfigurationError(
                f"{prefix_key} not set in log configuration",
                container_name=container_name,
                missing_key=prefix_key,
            )

        return cls(
            group=options[group_key],
            stream_prefix=options[prefix_key],
            container_name=container_name,
        )

    @classmethod
    def from_container(cls, container: ContainerSpec) -> 'LogConfiguration':
        """
        Extract the log configuration of an awslogs container.

        Raises:
            LogConfigurationError: If the container does not use awslogs or
                lacks the group/stream-prefix options
        """
        if container.log_driver != AWSLOGS_DRIVER:
            raise LogConfigurationError(
                f"container {container.name} does not use the {AWSLOGS_DRIVER} log driver",
                container_name=container.name,
            )
        return cls.from_options(container.log_options, container_name=container.name)
