"""
Thin AWS Client Gateway

This module provides a lightweight wrapper around boto3 service clients
(ECS and CloudWatch Logs). The gateway:

1. Creates the boto3 session and client lazily from LogViewerConfig
2. Exposes raw API operations by their AWS name through `call()`
3. Maps botocore errors to the library's exception types, naming the
   operation that failed

Read APIs compose these raw calls with the Pager; the gateway itself never
paginates, retries or interprets responses.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore import xform_name
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import LogViewerConfig
from ..exceptions import (
    ConnectionError,
    LogViewerError,
    NotFoundError,
    RetryableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def map_aws_error(
    error: ClientError,
    operation: str,
    resource_id: Optional[str] = None
) -> LogViewerError:
    """Map an ECS/CloudWatch Logs ClientError to a domain-specific exception.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "StartQuery", "ListTasks")
        resource_id: Optional resource identifier for context

    Returns:
        Appropriate domain exception
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))

    context = operation
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code in ['ResourceNotFoundException', 'ClusterNotFoundException', 'ServiceNotFoundException']:
        return NotFoundError(
            f"Resource not found - {full_message}",
            resource_type=error_code.replace('NotFoundException', '').lower() or None,
            resource_name=resource_id,
            original_error=error
        )

    elif error_code in ['InvalidParameterException', 'InvalidParameterCombinationException',
                        'MalformedQueryException', 'InvalidOperationException', 'ValidationException']:
        return ValidationError(f"Invalid request - {full_message}", original_error=error)

    elif error_code in ['UnsupportedFeatureException', 'ClientException']:
        return ValidationError(f"Request rejected - {full_message}", original_error=error)

    elif error_code in ['ThrottlingException', 'LimitExceededException', 'RequestLimitExceeded',
                        'TooManyRequestsException', 'Throttling']:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif error_code in ['ServiceUnavailableException', 'ServerException', 'InternalFailure',
                        'InternalServerError', 'ServiceUnavailable']:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in ['AccessDeniedException', 'UnrecognizedClientException',
                        'InvalidSignatureException', 'IncompleteSignatureException']:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    elif error_code in ['ExpiredTokenException', 'ExpiredToken', 'TokenRefreshRequiredException']:
        return ConnectionError(f"Token expired - {full_message}", original_error=error)

    # Default to ConnectionError for unknown errors
    logger.warning(f"Unknown AWS error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"AWS operation failed - {full_message}", original_error=error)


class AwsClientGateway:
    """
    Thin gateway for one AWS service client.

    Key principles:
    - Expose native API operations and responses
    - Map errors consistently, always naming the operation
    - Leave pagination and response interpretation to the read APIs
    """

    def __init__(self, config: LogViewerConfig, service_name: str):
        """Initialize client gateway.

        Args:
            config: Log viewer configuration
            service_name: boto3 service name ('ecs' or 'logs')
        """
        self.config = config
        self.service_name = service_name
        self._session = None
        self._client = None

    @property
    def session(self):
        """Lazy initialization of the boto3 session."""
        if self._session is None:
            try:
                self._session = boto3.Session(
                    profile_name=self.config.profile_name,
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )
            except Exception as e:
                logger.error(f"Failed to create AWS session: {e}")
                raise ConnectionError(f"Unable to load AWS SDK config: {e}", e) from e
        return self._session

    @property
    def client(self):
        """
        Get the boto3 service client.

        Read APIs may use this directly for operations not covered by `call()`.
        """
        if self._client is None:
            try:
                client_kwargs: Dict[str, Any] = {}
                if self.config.endpoint_url:
                    client_kwargs['endpoint_url'] = self.config.endpoint_url

                client_kwargs['config'] = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )

                self._client = self.session.client(self.service_name, **client_kwargs)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to create {self.service_name} client: {e}")
                raise ConnectionError(f"Failed to create {self.service_name} client: {e}", e) from e
        return self._client

    @property
    def region_name(self) -> Optional[str]:
        """Region the client talks to (configured or resolved by boto3)."""
        if self.config.region_name:
            return self.config.region_name
        return self.client.meta.region_name

    def call(self, operation: str, resource_id: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        """
        Execute one API operation.

        Args:
            operation: AWS operation name, e.g. 'DescribeLogStreams'
            resource_id: Optional resource identifier for error context
            **kwargs: Request parameters passed to boto3 unchanged

        Returns:
            Raw API response

        Example:
            response = gateway.call(
                'GetLogEvents',
                logGroupName='/ecs/app',
                logStreamName='web/app/0123',
                startFromHead=True
            )
        """
        method = getattr(self.client, xform_name(operation))
        logger.debug(f"{self.service_name}.{operation} {kwargs}")
        try:
            return method(**kwargs)
        except ClientError as e:
            raise map_aws_error(e, operation, resource_id).for_operation(operation) from e
        except BotoCoreError as e:
            raise ConnectionError(f"{operation} failed: {e}", e).for_operation(operation) from e


def create_client_gateway(config: LogViewerConfig, service_name: str) -> AwsClientGateway:
    """
    Factory function to create an AwsClientGateway instance.

    Args:
        config: Log viewer configuration
        service_name: boto3 service name

    Returns:
        Configured AwsClientGateway instance
    """
    return AwsClientGateway(config, service_name)
