"""
Application layer.

Ties discovery, log-configuration extraction and retrieval together:

    task definition family -> latest revision -> container
        -> log group + stream prefix -> query / streams / console link

Interactive choices are delegated to a selector callable so the flow can
be driven without a terminal.
"""

import logging
import sys
import webbrowser
from typing import Callable, Optional, Sequence, TextIO, Tuple

from .config import LogViewerConfig
from .handlers.ecs import EcsReadApi
from .handlers.logs import LogsReadApi, StreamRetriever
from .models import (
    ContainerSpec,
    LogConfiguration,
    LogQuery,
    TaskDefinition,
    TaskDefinitionFamily,
)
from .selector import select_item
from .utils import build_console_url, format_timestamp, time_range
from .writers import write_results

logger = logging.getLogger(__name__)

Selector = Callable[[Sequence, str], object]


class LogViewerApp:
    """Locate a container's logs and deliver them to a sink."""

    def __init__(
        self,
        config: LogViewerConfig,
        ecs_api: Optional[EcsReadApi] = None,
        logs_api: Optional[LogsReadApi] = None,
        selector: Selector = select_item,
        open_browser: Callable[[str], bool] = webbrowser.open
    ):
        self.config = config
        self.ecs_api = ecs_api or EcsReadApi(config)
        self.logs_api = logs_api or LogsReadApi(config)
        self.selector = selector
        self.open_browser = open_browser

    def select_task_and_container(
        self,
        taskdef: Optional[str] = None,
        container: Optional[str] = None
    ) -> Tuple[TaskDefinition, ContainerSpec]:
        """Resolve the latest revision of a family and one of its containers.

        Prompts for whichever of family or container is not given.
        """
        if taskdef:
            family = TaskDefinitionFamily(name=taskdef)
        else:
            families = self.ecs_api.list_task_definition_families()
            family = self.selector(families, "Select Task Definition Family >")

        task_definition = self.ecs_api.describe_latest_task_definition(family)
        return task_definition, self._select_container(task_definition, container)

    def select_from_cluster(
        self,
        cluster: Optional[str] = None,
        container: Optional[str] = None
    ) -> Tuple[TaskDefinition, ContainerSpec]:
        """Resolve a container through the task definitions running in a cluster."""
        if not cluster:
            cluster = self.selector(self.ecs_api.list_clusters(), "Select Cluster >").arn

        refs = self.ecs_api.task_definitions_for_cluster(cluster)
        if len(refs) == 1:
            ref = refs[0]
        else:
            ref = self.selector(refs, "Select Task Definition >")

        task_definition = self.ecs_api.describe_task_definition(ref.arn)
        return task_definition, self._select_container(task_definition, container)

    def _select_container(self, task_definition: TaskDefinition, container: Optional[str]) -> ContainerSpec:
        if container:
            return self.ecs_api.find_container(task_definition, container)
        return self.selector(task_definition.containers, "Select Container Definition >")

    def run(
        self,
        taskdef: Optional[str] = None,
        container: Optional[str] = None,
        cluster: Optional[str] = None,
        output: Optional[str] = None,
        web: bool = False,
        stream: bool = False,
        sink: Optional[TextIO] = None
    ) -> int:
        """
        Fetch the selected container's logs.

        Args:
            taskdef: Task definition family; prompted when omitted
            container: Container name; prompted when omitted
            cluster: Discover the task definition from this cluster's running tasks
            output: File to write to instead of `sink`
            web: Open the Logs Insights console instead of fetching
            stream: Read streams directly instead of running a query
            sink: Text sink (default: stdout)

        Returns:
            Number of rows or events written
        """
        if cluster:
            _, container_spec = self.select_from_cluster(cluster, container)
        else:
            _, container_spec = self.select_task_and_container(taskdef, container)

        log_configuration = LogConfiguration.from_container(container_spec)
        log_group = log_configuration.group
        stream_prefix = log_configuration.stream_name_prefix

        start_time, end_time = time_range(self.config.duration)
        logger.info(f"Fetching logs from log group: {log_group}, stream prefix: {stream_prefix}")
        logger.info(f"Time range: {format_timestamp(start_time)} to {format_timestamp(end_time)}")

        query = LogQuery(
            fields=self.config.fields,
            stream_prefix=stream_prefix,
            filter_pattern=self.config.filter_pattern
        )

        if web:
            self.open_console(log_group, query.query_string)
            return 0

        if output:
            with open(output, "w", encoding="utf-8", newline="") as file:
                count = self._write(file, log_group, stream_prefix, query, start_time, end_time, stream)
            logger.info(f"Wrote results in {self._format_name(stream)} format to file: {output}")
            return count

        return self._write(sink or sys.stdout, log_group, stream_prefix, query, start_time, end_time, stream)

    def open_console(self, log_group: str, query_string: str) -> str:
        """Open the Logs Insights console with the query prefilled."""
        url = "https://" + build_console_url(
            self.logs_api.gateway.region_name,
            log_group,
            query_string,
            self.config.duration
        )
        logger.info(f"Opening AWS Console URL: {url}")
        if not self.open_browser(url):
            logger.warning("Could not launch a browser; open the URL above manually")
        return url

    def _write(self, sink, log_group, stream_prefix, query, start_time, end_time, stream) -> int:
        if stream:
            count = StreamRetriever(self.logs_api).retrieve_to(
                sink, log_group, stream_prefix,
                user_timezone=self.config.user_timezone,
                start_time=start_time,
                end_time=end_time
            )
            if count == 0:
                logger.info("No logs found in the specified time range")
            return count

        rows = self.logs_api.query_logs(log_group, query.query_string, start_time, end_time)
        if not rows:
            logger.info("No logs found in the specified time range")
            return 0

        write_results(sink, rows, self.config.output_format, self.config.write_header)
        return len(rows)

    def _format_name(self, stream: bool) -> str:
        return "event" if stream else self.config.output_format
