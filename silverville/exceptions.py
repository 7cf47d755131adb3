"""
Exception hierarchy for silverville

Every error carries a request id, a UTC timestamp, optional context and a
message safe to show a player, and logs itself when created.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

import httpx

logger = logging.getLogger(__name__)


class SilverVilleError(Exception):
    """
    Base exception for all silverville errors

    Example:
        raise SilverVilleError(
            message="Failed to apply meal analysis",
            operation="apply_analysis",
            context={"analysis_id": "abc-123"}
        )
    """

    def __init__(
        self,
        message: str,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "Something went wrong. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for collaborator/UI consumption"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


def _merge_context(base: Dict[str, Any], kwargs: Dict[str, Any]) -> Dict[str, Any]:
    extra = kwargs.pop("context", None) or {}
    return {**base, **extra}


# ==========================================
# Validation Errors (caller input)
# ==========================================

class ValidationError(SilverVilleError):
    """
    Raised when a caller passes an argument outside the valid domain

    Examples:
    - Negative resource amount
    - Diet score outside [0, 10]
    - Quiz catalog with a malformed item

    Example:
        raise ValidationError(
            message="Amount cannot be negative",
            field="amount",
            value=-5
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context=_merge_context({"field": field, "value": value}, kwargs),
            **kwargs
        )


# ==========================================
# Device Capability Errors
# ==========================================

class CapabilityUnavailableError(SilverVilleError):
    """A device capability (pedometer, speech) is missing or not permitted"""

    def __init__(
        self,
        message: str,
        capability: Optional[str] = None,
        **kwargs
    ):
        self.capability = capability
        super().__init__(
            message=message,
            user_message=f"{capability or 'This feature'} is not available on this device.",
            context=_merge_context({"capability": capability}, kwargs),
            **kwargs
        )


# ==========================================
# External API Errors
# ==========================================

class ExternalAPIError(SilverVilleError):
    """
    Base class for external API failures
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        self.service = service
        self.status_code = status_code
        kwargs.setdefault(
            "user_message",
            f"We're having trouble connecting to {service or 'an external service'}. Local data will be used."
        )
        super().__init__(
            message=message,
            context=_merge_context({"service": service, "status_code": status_code}, kwargs),
            **kwargs
        )


class RemoteServiceError(ExternalAPIError):
    """SilverVille scoring/record service error"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("service", "SilverVille API")
        super().__init__(message=message, **kwargs)


# ==========================================
# Helper Functions
# ==========================================

def wrap_external_exception(
    error: Exception,
    operation: str,
    context: Optional[Dict[str, Any]] = None
) -> SilverVilleError:
    """
    Wrap external exceptions (httpx, decoding) into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        context: Additional context

    Returns:
        Appropriate SilverVilleError subclass

    Example:
        try:
            response = await client.get("/walk/quiz")
        except httpx.HTTPError as e:
            raise wrap_external_exception(e, operation="get_quiz_catalog")
    """
    if isinstance(error, SilverVilleError):
        return error

    if isinstance(error, httpx.TimeoutException):
        return RemoteServiceError(
            message=f"API request timed out: {str(error)}",
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, httpx.HTTPStatusError):
        return RemoteServiceError(
            message=f"API returned error: {error.response.status_code}",
            status_code=error.response.status_code,
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, httpx.HTTPError):
        return RemoteServiceError(
            message=f"API request failed: {str(error)}",
            operation=operation,
            context=context,
            cause=error
        )

    # Generic fallback
    return SilverVilleError(
        message=f"{operation} failed: {str(error)}",
        operation=operation,
        context=context,
        cause=error
    )
