"""
Domain-Specific Exceptions for the ECS Log Viewer

All exceptions extend LogViewerError so a calling shell can catch one type
and decide the exit behavior.

Organized by category:
1. Configuration Errors
2. Resource Not Found Errors
3. Remote Call Errors
4. Query Failures
"""

from typing import Any, Dict, Optional

from .base import LogViewerError


# =============================================================================
# Configuration Errors
# =============================================================================

class ValidationError(LogViewerError):
    """Raised when configuration or request validation fails.

    Used for:
    - Unsupported output format selection
    - Selection menus with nothing to choose from
    - Malformed queries or parameters rejected by the service
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class LogConfigurationError(ValidationError):
    """Raised when a container's log configuration cannot be used.

    Used for:
    - Missing group or stream-prefix options
    - Containers without a log configuration or with a non-awslogs driver
    """

    def __init__(self, message: str, container_name: Optional[str] = None, missing_key: Optional[str] = None):
        self.container_name = container_name
        self.missing_key = missing_key
        errors = {}
        if container_name:
            errors['container_name'] = container_name
        if missing_key:
            errors['missing_key'] = missing_key
        super().__init__(message, errors)


# =============================================================================
# Resource Not Found Errors
# =============================================================================

class NotFoundError(LogViewerError):
    """Raised when an ECS resource is not found by exact name.

    Used for:
    - Container names missing from a task definition
    - Task definition families without registered revisions
    - Clusters without running tasks
    """

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_name: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize not found error.

        Args:
            message: Human-readable error message
            resource_type: Type of resource not found (e.g., 'container', 'task_definition')
            resource_name: Name of the resource not found
            original_error: The original exception that caused this error
        """
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = {}
        if resource_type:
            context['resource_type'] = resource_type
        if resource_name:
            context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


# =============================================================================
# Remote Call Errors
# =============================================================================

class ConnectionError(LogViewerError):
    """Raised when a call to ECS or CloudWatch Logs fails.

    Used for:
    - Authentication/authorization failures
    - Invalid endpoint configurations
    - Client construction failures
    - Service errors without a more specific mapping
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(LogViewerError):
    """Raised when a call fails due to throttling or temporary unavailability.

    The library never retries on its own; the type tells the caller that a
    later attempt may succeed.
    """

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)


# =============================================================================
# Query Failures
# =============================================================================

class QueryFailedError(LogViewerError):
    """Raised when a Logs Insights query reaches a failed terminal state.

    The statistics reported by the service are embedded in the message.
    """

    def __init__(self, query_id: str, status: str, statistics: Optional[Dict[str, Any]] = None):
        """Initialize query failure.

        Args:
            query_id: Identifier returned by StartQuery
            status: Terminal status reported by GetQueryResults
            statistics: Statistics block of the final GetQueryResults response
        """
        self.query_id = query_id
        self.status = status
        self.statistics = statistics or {}
        message = f"query {status.lower()}: {self.statistics}"
        context = {
            'query_id': query_id
        }
        super().__init__(message, None, context)
