"""
Tests for domain and log models (models/)
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from ecs_log_viewer.exceptions import LogConfigurationError, ValidationError
from ecs_log_viewer.models import (
    Cluster,
    ContainerSpec,
    LogConfiguration,
    LogEvent,
    LogQuery,
    LogStream,
    OutputFormat,
    QueryExecution,
    QueryStatus,
    ResultField,
    Selectable,
    TaskDefinition,
    TaskDefinitionFamily,
    TaskDefinitionRef,
    millis_to_datetime,
    rows_from_api,
)


class TestSelectable:
    """Every menu model exposes a label."""

    @pytest.mark.parametrize("item,label", [
        (Cluster(arn="arn:aws:ecs:us-east-1:123456789012:cluster/prod"),
         "arn:aws:ecs:us-east-1:123456789012:cluster/prod"),
        (TaskDefinitionFamily(name="my-service"), "my-service"),
        (TaskDefinitionRef(arn="arn:aws:ecs:us-east-1:123456789012:task-definition/my-service:3"),
         "arn:aws:ecs:us-east-1:123456789012:task-definition/my-service:3"),
        (ContainerSpec(name="web"), "web"),
    ])
    def test_label(self, item, label):
        assert isinstance(item, Selectable)
        assert item.label() == label

    def test_cluster_name(self):
        cluster = Cluster(arn="arn:aws:ecs:us-east-1:123456789012:cluster/prod")

        assert cluster.name == "prod"


class TestTaskDefinition:
    """Test parsing of DescribeTaskDefinition responses."""

    def test_from_api(self):
        task_definition = TaskDefinition.from_api({
            "taskDefinitionArn": "arn:aws:ecs:us-east-1:123456789012:task-definition/svc:7",
            "family": "svc",
            "revision": 7,
            "containerDefinitions": [
                {
                    "name": "web",
                    "logConfiguration": {
                        "logDriver": "awslogs",
                        "options": {"awslogs-group": "/ecs/svc", "awslogs-stream-prefix": "ecs"},
                    },
                },
                {"name": "sidecar"},
            ],
        })

        assert task_definition.family == "svc"
        assert task_definition.revision == 7
        web, sidecar = task_definition.containers
        assert web.log_driver == "awslogs"
        assert web.log_options["awslogs-group"] == "/ecs/svc"
        assert sidecar.log_driver is None
        assert sidecar.log_options == {}

    def test_unnamed_container(self):
        assert ContainerSpec.from_api({}).name == "<Unnamed>"


class TestLogConfiguration:
    """Test extraction of log group and stream prefix."""

    def test_from_container(self):
        container = ContainerSpec(
            name="app",
            log_driver="awslogs",
            log_options={"awslogs-group": "/ecs/app", "awslogs-stream-prefix": "web"},
        )

        log_configuration = LogConfiguration.from_container(container)

        assert log_configuration.group == "/ecs/app"
        assert log_configuration.stream_prefix == "web"
        assert log_configuration.stream_name_prefix == "web/app"

    def test_from_bare_options(self):
        log_configuration = LogConfiguration.from_options({"group": "/ecs/app", "stream-prefix": "web"}, key_prefix="")

        assert log_configuration.group == "/ecs/app"
        assert log_configuration.stream_name_prefix == "web"

    def test_end_to_end_query(self):
        log_configuration = LogConfiguration.from_options({"group": "/ecs/app", "stream-prefix": "web"}, key_prefix="")

        query = LogQuery(fields=["@message"], stream_prefix=log_configuration.stream_name_prefix)
        filtered = LogQuery(fields=["@message"], stream_prefix=log_configuration.stream_name_prefix, filter_pattern="boom")

        assert query.query_string == "fields @message | filter @logStream like /web/"
        assert filtered.query_string == "fields @message | filter @logStream like /web/ | filter @message like 'boom'"

    @pytest.mark.parametrize("options,missing", [
        ({"awslogs-stream-prefix": "web"}, "awslogs-group"),
        ({"awslogs-group": "/ecs/app"}, "awslogs-stream-prefix"),
    ])
    def test_missing_key(self, options, missing):
        container = ContainerSpec(name="app", log_driver="awslogs", log_options=options)

        with pytest.raises(LogConfigurationError) as exc_info:
            LogConfiguration.from_container(container)

        assert exc_info.value.missing_key == missing
        assert exc_info.value.message == f"{missing} not set in log configuration"
        assert isinstance(exc_info.value, ValidationError)

    def test_non_awslogs_driver(self):
        container = ContainerSpec(name="app", log_driver="fluentd", log_options={})

        with pytest.raises(LogConfigurationError) as exc_info:
            LogConfiguration.from_container(container)

        assert exc_info.value.container_name == "app"

    def test_without_log_configuration(self):
        with pytest.raises(LogConfigurationError):
            LogConfiguration.from_container(ContainerSpec(name="app"))


class TestOutputFormat:
    """Test output format parsing."""

    @pytest.mark.parametrize("value", ["simple", "csv", "json"])
    def test_parse_valid(self, value):
        assert OutputFormat.parse(value).value == value

    def test_parse_enum_member(self):
        assert OutputFormat.parse(OutputFormat.CSV) is OutputFormat.CSV

    @pytest.mark.parametrize("value", ["xml", "", "CSV", None])
    def test_parse_invalid(self, value):
        with pytest.raises(ValidationError) as exc_info:
            OutputFormat.parse(value)

        assert "unsupported output format" in str(exc_info.value)


class TestQueryStatus:
    """Test query status classification."""

    def test_terminal_statuses(self):
        assert QueryStatus.COMPLETE.is_terminal
        assert not QueryStatus.COMPLETE.is_failure
        for status in (QueryStatus.FAILED, QueryStatus.CANCELLED, QueryStatus.TIMEOUT):
            assert status.is_terminal
            assert status.is_failure

    def test_non_terminal_statuses(self):
        for status in (QueryStatus.SCHEDULED, QueryStatus.RUNNING, QueryStatus.UNKNOWN):
            assert not status.is_terminal

    def test_parse_unknown(self):
        assert QueryStatus.parse("Whatever") is QueryStatus.UNKNOWN
        assert QueryStatus.parse(None) is QueryStatus.UNKNOWN
        assert QueryStatus.parse("Running") is QueryStatus.RUNNING


class TestQueryExecution:
    """Test query execution state transitions."""

    def test_rows_kept_only_on_complete(self):
        execution = QueryExecution(query_id="q-1", log_group="/ecs/app")
        row = [ResultField(field="@message", value="hello")]

        execution.record_poll(QueryStatus.RUNNING, [row], {"recordsMatched": 1.0})
        assert execution.rows == []
        assert execution.statistics == {"recordsMatched": 1.0}

        execution.record_poll(QueryStatus.COMPLETE, [row], {"recordsMatched": 1.0})
        assert execution.rows == [row]
        assert execution.polls == 2

    def test_terminal_state_is_final(self):
        execution = QueryExecution(query_id="q-1", log_group="/ecs/app")
        execution.record_poll(QueryStatus.FAILED, [], {})

        with pytest.raises(ValidationError):
            execution.record_poll(QueryStatus.COMPLETE, [], {})

        assert execution.status is QueryStatus.FAILED


class TestResultRows:
    """Test GetQueryResults row conversion."""

    def test_rows_from_api_keeps_order(self):
        rows = rows_from_api([
            [{"field": "@timestamp", "value": "2025-02-16 00:00:00.000"},
             {"field": "@message", "value": "hello"},
             {"field": "@ptr", "value": "CmQK"}],
        ])

        assert [field.field for field in rows[0]] == ["@timestamp", "@message", "@ptr"]
        assert rows[0][2].is_pointer
        assert not rows[0][1].is_pointer

    def test_missing_value(self):
        assert ResultField.from_api({"field": "@message"}).value is None


class TestEpochMillis:
    """Test epoch millisecond timestamps."""

    def test_millis_to_datetime(self):
        assert millis_to_datetime(1739664000000) == datetime(2025, 2, 16, tzinfo=timezone.utc)
        assert millis_to_datetime(None) is None

    def test_log_event_from_api(self):
        event = LogEvent.from_api({"timestamp": 1739664000500, "message": "hello"}, "web/app/1")

        assert event.timestamp == datetime(2025, 2, 16, 0, 0, 0, 500000, tzinfo=timezone.utc)
        assert event.stream_name == "web/app/1"
        assert event.message == "hello"

    def test_naive_datetime_becomes_utc(self):
        event = LogEvent(timestamp=datetime(2025, 2, 16), stream_name="s")

        assert event.timestamp.tzinfo == timezone.utc

    def test_log_stream_without_events(self):
        stream = LogStream.from_api({"logStreamName": "web/app/1"})

        assert stream.last_event_time is None
        assert stream.label() == "web/app/1"

    def test_bool_rejected(self):
        with pytest.raises(PydanticValidationError):
            LogEvent(timestamp=True, stream_name="s")
