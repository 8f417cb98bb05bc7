"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AuthorizationException,
    BackofficeException,
    ExternalServiceException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.exceptions import StorageQuotaExceededError


def test_base_exception_default_error_code() -> None:
    """BackofficeException uses class name as error_code when not provided."""
    exc = BackofficeException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "BackofficeException"
    assert exc.details == {}


def test_to_dict() -> None:
    exc = BackofficeException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception_field() -> None:
    exc = ValidationException("Invalid status", field="status")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "status"}
    assert ValidationException("Bad").details == {}


def test_authorization_exception_message() -> None:
    exc = AuthorizationException("quotation", "update")
    assert exc.message == "Permission denied: update on quotation"
    assert exc.details == {"resource": "quotation", "action": "update"}


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("Quotation", "q1")
    assert exc.message == "Quotation not found: q1"
    assert exc.error_code == "RESOURCE_NOT_FOUND"


def test_invalid_state() -> None:
    exc = InvalidStateException("Quotation", "q1", "accepted", "sign")
    assert exc.message == "Cannot sign Quotation in status 'accepted'"
    assert exc.details["status"] == "accepted"


def test_external_service_status_code_is_optional() -> None:
    assert "status_code" not in ExternalServiceException("cms", "timeout").details
    assert ExternalServiceException("cms", "down", 503).details["status_code"] == 503


def test_storage_errors_are_backoffice_exceptions() -> None:
    exc = StorageQuotaExceededError(10, 5)
    assert isinstance(exc, BackofficeException)
    assert exc.error_code == "STORAGE_QUOTA_EXCEEDED"
