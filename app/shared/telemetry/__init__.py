"""Shared telemetry: logging setup with request context."""

from app.shared.telemetry.logging import RequestContextFilter, setup_logging

__all__ = [
    "setup_logging",
    "RequestContextFilter",
]
