"""
ECS Read API

Resource discovery used to locate a container's log configuration:
- Clusters and their running tasks
- Task definition families and revisions
- Container specs within a task definition

List operations go through the Pager and return complete, order-preserving
results; any failed page aborts the whole call.
"""

import logging
from typing import Any, Dict, List, Optional

from ...config import LogViewerConfig
from ...core import create_client_gateway, paginate_call
from ...exceptions import NotFoundError
from ...models import (
    Cluster,
    ContainerSpec,
    TaskDefinition,
    TaskDefinitionFamily,
    TaskDefinitionRef,
)

logger = logging.getLogger(__name__)

# DescribeTasks accepts at most 100 task ARNs per request.
DESCRIBE_TASKS_BATCH_SIZE = 100


class EcsReadApi:
    """
    Read-only API over ECS list/describe operations.

    Every call constructs its own cursor state; nothing is cached between calls.
    """

    def __init__(self, config: LogViewerConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_client_gateway(config, "ecs")

    def list_clusters(self) -> List[Cluster]:
        """List all ECS clusters.

        ECS Operation: ListClusters (paginated)
        """
        arns = paginate_call(self.gateway, 'ListClusters', 'clusterArns')
        logger.debug(f"Found {len(arns)} clusters")
        return [Cluster(arn=arn) for arn in arns]

    def list_running_tasks(self, cluster: str) -> List[str]:
        """List the ARNs of running tasks in a cluster.

        ECS Operation: ListTasks with desiredStatus=RUNNING (paginated)
        """
        return paginate_call(
            self.gateway, 'ListTasks', 'taskArns',
            cluster=cluster,
            desiredStatus='RUNNING'
        )

    def describe_tasks(self, cluster: str, task_arns: List[str]) -> List[Dict[str, Any]]:
        """Describe tasks, batching requests to the API limit.

        Returns:
            Raw task descriptions in request order
        """
        tasks: List[Dict[str, Any]] = []
        for start in range(0, len(task_arns), DESCRIBE_TASKS_BATCH_SIZE):
            batch = task_arns[start:start + DESCRIBE_TASKS_BATCH_SIZE]
            response = self.gateway.call('DescribeTasks', resource_id=cluster, cluster=cluster, tasks=batch)
            tasks.extend(response.get('tasks', []))
        return tasks

    def task_definitions_for_cluster(self, cluster: str) -> List[TaskDefinitionRef]:
        """Unique task definitions of the running tasks in a cluster.

        Returned in first-seen order.

        Raises:
            NotFoundError: If the cluster has no running tasks
        """
        task_arns = self.list_running_tasks(cluster)
        if not task_arns:
            raise NotFoundError(
                f"no running tasks found in cluster {cluster}",
                resource_type='task',
                resource_name=cluster
            )

        seen = set()
        refs = []
        for task in self.describe_tasks(cluster, task_arns):
            arn = task.get('taskDefinitionArn')
            if arn and arn not in seen:
                seen.add(arn)
                refs.append(TaskDefinitionRef(arn=arn))
        return refs

    def list_task_definition_families(self) -> List[TaskDefinitionFamily]:
        """List task definition families.

        ECS Operation: ListTaskDefinitionFamilies (paginated)
        """
        families = paginate_call(self.gateway, 'ListTaskDefinitionFamilies', 'families')
        return [TaskDefinitionFamily(name=name) for name in families]

    def list_task_definitions(self, family_prefix: Optional[str] = None) -> List[TaskDefinitionRef]:
        """List task definition ARNs, optionally restricted to one family.

        ECS Operation: ListTaskDefinitions (paginated)
        """
        params = {}
        if family_prefix:
            params['familyPrefix'] = family_prefix
        arns = paginate_call(self.gateway, 'ListTaskDefinitions', 'taskDefinitionArns', **params)
        return [TaskDefinitionRef(arn=arn) for arn in arns]

    def describe_task_definition(self, task_definition: str) -> TaskDefinition:
        """Describe a task definition by ARN or family:revision.

        ECS Operation: DescribeTaskDefinition
        """
        response = self.gateway.call(
            'DescribeTaskDefinition',
            resource_id=task_definition,
            taskDefinition=task_definition
        )
        return TaskDefinition.from_api(response['taskDefinition'])

    def describe_latest_task_definition(self, family: TaskDefinitionFamily) -> TaskDefinition:
        """Describe the most recent revision of a family.

        ECS Operation: ListTaskDefinitions (sort=DESC, maxResults=1) + DescribeTaskDefinition

        Raises:
            NotFoundError: If the family has no task definitions
        """
        response = self.gateway.call(
            'ListTaskDefinitions',
            resource_id=family.name,
            familyPrefix=family.name,
            sort='DESC',
            maxResults=1
        )
        arns = response.get('taskDefinitionArns', [])
        if not arns:
            raise NotFoundError(
                f"no task definitions found for family {family.name}",
                resource_type='task_definition',
                resource_name=family.name
            )
        return self.describe_task_definition(arns[0])

    @staticmethod
    def find_container(task_definition: TaskDefinition, name: str) -> ContainerSpec:
        """Find a container spec by exact name.

        Raises:
            NotFoundError: If no container has that name
        """
        for container in task_definition.containers:
            if container.name == name:
                return container
        raise NotFoundError(
            f"Cannot find container: {name}",
            resource_type='container',
            resource_name=name
        )
