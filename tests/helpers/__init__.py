"""Builders shared across the unit tests."""

from typing import Dict, List, Optional

from ecs_log_viewer.models import ResultField


def register_task_definition(client, family: str, containers: List[Dict]) -> Dict:
    """Register a task definition with the given container definitions."""
    response = client.register_task_definition(
        family=family,
        containerDefinitions=containers,
    )
    return response["taskDefinition"]


def awslogs_container(name: str, group: str = "/ecs/app", stream_prefix: Optional[str] = "web") -> Dict:
    """Container definition using the awslogs driver."""
    options = {"awslogs-group": group, "awslogs-region": "us-east-1"}
    if stream_prefix is not None:
        options["awslogs-stream-prefix"] = stream_prefix
    return {
        "name": name,
        "image": "nginx:latest",
        "memory": 128,
        "logConfiguration": {"logDriver": "awslogs", "options": options},
    }


def make_row(*pairs) -> List[ResultField]:
    """Build a result row from (field, value) pairs."""
    return [ResultField(field=field, value=value) for field, value in pairs]


def api_row(*pairs) -> List[Dict[str, str]]:
    """Build a GetQueryResults row from (field, value) pairs."""
    return [{"field": field, "value": value} for field, value in pairs]
