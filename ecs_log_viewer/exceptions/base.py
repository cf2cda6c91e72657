"""
Base exception for the ECS log viewer.

Every failure the package raises, whether it is a bad selection, a missing
container, a rejected Logs Insights query or an unreachable endpoint,
derives from LogViewerError. Errors coming back from ECS or CloudWatch Logs
carry the AWS operation that failed in their context, so a message reads
like `Throttling - StartQuery: Rate exceeded (Context: operation=StartQuery)`
and a caller can branch on `error.operation` or `error.aws_error_code`.
"""

from typing import Any, Dict, Optional


class LogViewerError(Exception):
    """Base exception for all ECS log viewer errors.

    Attributes:
        message: Human-readable error message
        original_error: The botocore or parsing error behind this one (if any)
        context: Key/value details rendered after the message
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    @property
    def operation(self) -> Optional[str]:
        """AWS operation name (e.g. 'GetQueryResults') during which this error occurred."""
        return self.context.get('operation')

    @property
    def aws_error_code(self) -> Optional[str]:
        """Error code of the underlying ClientError, e.g. 'ThrottlingException'."""
        response = getattr(self.original_error, 'response', None) or {}
        return response.get('Error', {}).get('Code')

    def for_operation(self, operation: str) -> "LogViewerError":
        """Record the ECS/CloudWatch Logs operation this error came from.

        An operation already recorded is kept. Returns the error itself so it
        can be used inline: `raise map_aws_error(e, op).for_operation(op)`.
        """
        self.context.setdefault('operation', operation)
        return self

    def __str__(self) -> str:
        error_str = self.message
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            error_str += f" (Context: {context_str})"
        return error_str

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, original_error={self.original_error!r}, context={self.context!r})"
