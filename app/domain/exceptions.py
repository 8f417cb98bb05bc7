"""Domain exceptions for the OH+ back-office service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class BackofficeException(Exception):
    """Base exception for all back-office application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BackofficeException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(BackofficeException):
    """Raised when the caller is not signed in or the ID token is invalid."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(BackofficeException):
    """Raised when the user may not act on a document of another company."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'quotation', 'product').
            action: Optional action that was attempted (e.g. 'update').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "AUTHORIZATION_ERROR", details)


class ResourceNotFoundException(BackofficeException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'quotation', 'product').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidStateException(BackofficeException):
    """Raised when an operation does not apply to the document's current status."""

    def __init__(self, resource_type: str, resource_id: str, status: str, action: str) -> None:
        """Initialize with the document and the rejected action.

        Args:
            resource_type: Type of resource (e.g. 'quotation').
            resource_id: Document ID.
            status: Current status of the document.
            action: Action that was attempted (e.g. 'sign').
        """
        super().__init__(
            f"Cannot {action} {resource_type} in status {status!r}",
            "INVALID_STATE",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "status": status,
                "action": action,
            },
        )


class ExternalServiceException(BackofficeException):
    """Raised when a vendor API (CMS, Resend, storage bucket) fails or is unreachable."""

    def __init__(self, service: str, reason: str, status_code: int | None = None) -> None:
        """Initialize with service name and failure reason.

        Args:
            service: Short name of the remote service (e.g. 'cms').
            reason: Human-readable failure reason.
            status_code: Upstream HTTP status when one was received.
        """
        details: dict[str, Any] = {"service": service, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"{service} request failed: {reason}",
            "EXTERNAL_SERVICE_ERROR",
            details,
        )
