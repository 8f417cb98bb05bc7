"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by application, infrastructure, and API layers. No business logic.
"""

from app.shared.context import (
    RequestContext,
    clear_current_user,
    get_current_user_id,
    get_request_context,
    get_request_id,
    set_current_user,
    set_request_id,
)

__all__ = [
    "RequestContext",
    "clear_current_user",
    "get_current_user_id",
    "get_request_context",
    "get_request_id",
    "set_current_user",
    "set_request_id",
]
