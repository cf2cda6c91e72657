"""
Tests for EcsReadApi (handlers/ecs/queries.py)

Listing and describing run against moto; flows moto does not model
(running tasks, sorted revision lookups) use a scripted gateway.
"""

from unittest.mock import call, patch

import pytest

from ecs_log_viewer.exceptions import NotFoundError
from ecs_log_viewer.handlers.ecs import EcsReadApi
from ecs_log_viewer.models import (
    Cluster,
    ContainerSpec,
    TaskDefinition,
    TaskDefinitionFamily,
    TaskDefinitionRef,
)
from tests.helpers import awslogs_container, register_task_definition


@pytest.fixture
def ecs_api(config, ecs_client):
    """EcsReadApi backed by moto."""
    return EcsReadApi(config)


@pytest.fixture
def scripted_api(config, mock_gateway):
    """EcsReadApi whose gateway responses are scripted per test."""
    with patch('ecs_log_viewer.handlers.ecs.queries.create_client_gateway', return_value=mock_gateway):
        api = EcsReadApi(config)
    return api


class TestEcsReadApiWithMoto:
    """Discovery against moto's ECS backend."""

    def test_list_clusters(self, ecs_api, ecs_client):
        ecs_client.create_cluster(clusterName="prod")
        ecs_client.create_cluster(clusterName="staging")

        clusters = ecs_api.list_clusters()

        assert sorted(cluster.name for cluster in clusters) == ["prod", "staging"]
        assert all(isinstance(cluster, Cluster) for cluster in clusters)

    def test_list_task_definitions_by_family(self, ecs_api, ecs_client):
        register_task_definition(ecs_client, "api", [awslogs_container("web")])
        register_task_definition(ecs_client, "api", [awslogs_container("web")])
        register_task_definition(ecs_client, "worker", [awslogs_container("job")])

        refs = ecs_api.list_task_definitions(family_prefix="api")

        assert len(refs) == 2
        assert all(":task-definition/api:" in ref.arn for ref in refs)

    def test_describe_task_definition(self, ecs_api, ecs_client):
        registered = register_task_definition(
            ecs_client, "api",
            [awslogs_container("web", group="/ecs/api", stream_prefix="ecs"), {"name": "sidecar", "image": "busybox", "memory": 64}]
        )

        task_definition = ecs_api.describe_task_definition(registered["taskDefinitionArn"])

        assert isinstance(task_definition, TaskDefinition)
        assert task_definition.family == "api"
        assert [container.name for container in task_definition.containers] == ["web", "sidecar"]
        web = task_definition.containers[0]
        assert web.log_driver == "awslogs"
        assert web.log_options["awslogs-group"] == "/ecs/api"
        assert web.log_options["awslogs-stream-prefix"] == "ecs"

    def test_find_container(self, ecs_api, ecs_client):
        registered = register_task_definition(ecs_client, "api", [awslogs_container("web"), awslogs_container("nginx")])
        task_definition = ecs_api.describe_task_definition(registered["taskDefinitionArn"])

        assert EcsReadApi.find_container(task_definition, "nginx").name == "nginx"

        with pytest.raises(NotFoundError, match="Cannot find container: db"):
            EcsReadApi.find_container(task_definition, "db")


class TestEcsReadApiScripted:
    """Discovery flows driven through a scripted gateway."""

    def test_describe_latest_task_definition(self, scripted_api, mock_gateway):
        mock_gateway.call.side_effect = [
            {"taskDefinitionArns": ["arn:aws:ecs:us-east-1:123456789012:task-definition/api:5"]},
            {"taskDefinition": {
                "taskDefinitionArn": "arn:aws:ecs:us-east-1:123456789012:task-definition/api:5",
                "family": "api",
                "revision": 5,
                "containerDefinitions": [{"name": "web"}],
            }},
        ]

        task_definition = scripted_api.describe_latest_task_definition(TaskDefinitionFamily(name="api"))

        assert task_definition.revision == 5
        assert mock_gateway.call.call_args_list[0] == call(
            'ListTaskDefinitions',
            resource_id='api',
            familyPrefix='api',
            sort='DESC',
            maxResults=1
        )
        assert mock_gateway.call.call_args_list[1].kwargs["taskDefinition"].endswith("api:5")

    def test_describe_latest_task_definition_missing(self, scripted_api, mock_gateway):
        mock_gateway.call.return_value = {"taskDefinitionArns": []}

        with pytest.raises(NotFoundError) as exc_info:
            scripted_api.describe_latest_task_definition(TaskDefinitionFamily(name="ghost"))

        assert exc_info.value.resource_name == "ghost"

    def test_list_task_definition_families(self, scripted_api, mock_gateway):
        mock_gateway.call.side_effect = [
            {"families": ["api"], "nextToken": "n1"},
            {"families": ["worker"]},
        ]

        families = scripted_api.list_task_definition_families()

        assert families == [TaskDefinitionFamily(name="api"), TaskDefinitionFamily(name="worker")]
        assert mock_gateway.call.call_args_list[1].kwargs == {"nextToken": "n1"}

    def test_list_running_tasks_paginates(self, scripted_api, mock_gateway):
        mock_gateway.call.side_effect = [
            {"taskArns": ["t1", "t2"], "nextToken": "n1"},
            {"taskArns": ["t3"]},
        ]

        assert scripted_api.list_running_tasks("prod") == ["t1", "t2", "t3"]
        first = mock_gateway.call.call_args_list[0]
        assert first.kwargs == {"cluster": "prod", "desiredStatus": "RUNNING"}

    def test_describe_tasks_batches(self, scripted_api, mock_gateway):
        task_arns = [f"task-{i}" for i in range(150)]
        mock_gateway.call.side_effect = lambda operation, **kwargs: {
            "tasks": [{"taskArn": arn} for arn in kwargs["tasks"]]
        }

        tasks = scripted_api.describe_tasks("prod", task_arns)

        assert len(tasks) == 150
        batch_sizes = [len(c.kwargs["tasks"]) for c in mock_gateway.call.call_args_list]
        assert batch_sizes == [100, 50]

    def test_task_definitions_for_cluster_unique_in_order(self, scripted_api, mock_gateway):
        mock_gateway.call.side_effect = [
            {"taskArns": ["t1", "t2", "t3"]},
            {"tasks": [
                {"taskArn": "t1", "taskDefinitionArn": "td/api:2"},
                {"taskArn": "t2", "taskDefinitionArn": "td/worker:1"},
                {"taskArn": "t3", "taskDefinitionArn": "td/api:2"},
            ]},
        ]

        refs = scripted_api.task_definitions_for_cluster("prod")

        assert refs == [TaskDefinitionRef(arn="td/api:2"), TaskDefinitionRef(arn="td/worker:1")]

    def test_task_definitions_for_cluster_without_tasks(self, scripted_api, mock_gateway):
        mock_gateway.call.return_value = {"taskArns": []}

        with pytest.raises(NotFoundError, match="no running tasks found in cluster prod"):
            scripted_api.task_definitions_for_cluster("prod")

    def test_find_container_exact_match_only(self):
        task_definition = TaskDefinition(
            arn="td/api:1", family="api", revision=1,
            containers=[ContainerSpec(name="web-proxy"), ContainerSpec(name="web")]
        )

        assert EcsReadApi.find_container(task_definition, "web").name == "web"
        with pytest.raises(NotFoundError):
            EcsReadApi.find_container(task_definition, "WEB")
