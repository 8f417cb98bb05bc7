"""Request context management using contextvars.

Holds request-scoped values that log records and services read without
threading them through every call: the request ID assigned by
RequestIDMiddleware and the signed-in user set by the auth dependency.

Usage:
    set_request_id("3f2c...")
    set_current_user(uid="abc", company_id="company-1")
    uid = get_current_user_id()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
_current_company_id: ContextVar[str | None] = ContextVar(
    "current_company_id", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    user_id: str | None
    company_id: str | None


def set_request_id(request_id: str | None) -> None:
    """Set the request ID for the current task (called by RequestIDMiddleware)."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _request_id.get()


def set_current_user(uid: str | None, company_id: str | None = None) -> None:
    """Set the signed-in user for this request.

    Raises:
        ValueError: If uid is empty while company_id is given.
    """
    if company_id and not uid:
        raise ValueError("uid is required when company_id is set")
    _current_user_id.set(uid)
    _current_company_id.set(company_id)


def clear_current_user() -> None:
    """Clear the signed-in user."""
    _current_user_id.set(None)
    _current_company_id.set(None)


def get_current_user_id() -> str | None:
    """Return the signed-in user's uid, or None when anonymous."""
    return _current_user_id.get()


def get_request_context() -> RequestContext:
    """Return an immutable snapshot of the request context."""
    return RequestContext(
        request_id=_request_id.get(),
        user_id=_current_user_id.get(),
        company_id=_current_company_id.get(),
    )
