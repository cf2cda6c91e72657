"""
Test configuration and fixtures for the ECS log viewer.

Provides a configuration that never touches real AWS credentials, moto-backed
clients for ECS discovery tests and a scripted gateway double.
"""

import os
from unittest.mock import Mock, patch

import boto3
import pytest
from moto import mock_aws

from ecs_log_viewer import LogViewerConfig


@pytest.fixture(autouse=True)
def aws_credentials():
    """Fake credentials so no test can reach a real account."""
    env = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "AWS_DEFAULT_REGION": "us-east-1",
    }
    with patch.dict(os.environ, env):
        os.environ.pop("AWS_PROFILE", None)
        os.environ.pop("ECS_LOG_VIEWER_DURATION", None)
        os.environ.pop("ECS_LOG_VIEWER_TIMEZONE", None)
        yield


@pytest.fixture
def config():
    """Log viewer configuration for testing."""
    return LogViewerConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,
        duration="1h",
        user_timezone=None,
        poll_interval_seconds=0.01
    )


@pytest.fixture
def mock_gateway():
    """Gateway double whose `call` is scripted per test."""
    gateway = Mock()
    gateway.region_name = "us-east-1"
    return gateway


@pytest.fixture
def ecs_client():
    """moto-backed ECS client."""
    with mock_aws():
        yield boto3.client("ecs", region_name="us-east-1")
