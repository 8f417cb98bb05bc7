"""Vendor CMS client for LED billboard players."""

from app.infrastructure.external.cms.player_control import (
    CONFIGURATION_COMMANDS,
    PlayerControlClient,
)

__all__ = ["CONFIGURATION_COMMANDS", "PlayerControlClient"]
