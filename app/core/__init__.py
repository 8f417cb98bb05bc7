"""Core: config, limiter, lifespan and exception handlers.

Single place for settings and shared wiring.
"""

from app.core.config import get_settings

__all__ = ["get_settings"]
