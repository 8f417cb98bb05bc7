"""LED player device control through the vendor CMS API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.domain.exceptions import ExternalServiceException, ValidationException

logger = logging.getLogger(__name__)

CONFIGURATION_COMMANDS = ["volumeValue", "brightnessValue", "videoSourceValue", "timeValue"]


def _check_percent(value: int, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
        raise ValidationException(f"{field} must be an integer between 0 and 100", field=field)


def _check_players(player_ids: list[str]) -> None:
    if not player_ids or not all(p and p.strip() for p in player_ids):
        raise ValidationException("At least one player ID is required", field="player_ids")


class PlayerControlClient:
    """Forwards realtime-control and status calls to ``{base_url}/players/...``.

    Replies are returned as the vendor sends them. Results the vendor produces
    asynchronously are delivered to ``notice_url``.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        notice_url: str = "",
        timeout: float = 15.0,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._http = http_client
        self._notice_url = notice_url
        self._timeout = timeout

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base}/players/{path}"
        try:
            resp = await self._http.post(url, json=body, timeout=self._timeout)
        except httpx.HTTPError as e:
            logger.warning("CMS call %s failed: %s", path, e)
            raise ExternalServiceException("cms", str(e) or e.__class__.__name__) from e
        if resp.status_code >= 400:
            logger.warning("CMS call %s returned %s", path, resp.status_code)
            raise ExternalServiceException(
                "cms", resp.text[:200] or f"HTTP {resp.status_code}", resp.status_code
            )
        try:
            data = resp.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {"data": data}

    async def set_brightness(self, player_ids: list[str], value: int) -> dict[str, Any]:
        """Set screen brightness; 0 switches the player to automatic brightness."""
        _check_players(player_ids)
        _check_percent(value, "brightness")
        return await self._post(
            "realtime-control/brightness",
            {"playerIds": player_ids, "value": value, "noticeUrl": self._notice_url},
        )

    async def set_volume(self, player_ids: list[str], value: int) -> dict[str, Any]:
        _check_players(player_ids)
        _check_percent(value, "volume")
        return await self._post(
            "realtime-control/volume",
            {"playerIds": player_ids, "value": value, "noticeUrl": self._notice_url},
        )

    async def restart(self, player_ids: list[str]) -> dict[str, Any]:
        _check_players(player_ids)
        return await self._post(
            "realtime-control/restart",
            {"playerIds": player_ids, "noticeUrl": self._notice_url},
        )

    async def screenshot(self, player_ids: list[str]) -> str | None:
        """Request a screenshot; returns its URL when the vendor replies with one."""
        _check_players(player_ids)
        data = await self._post(
            "realtime-control/screenshot",
            {"playerIds": player_ids, "noticeUrl": self._notice_url},
        )
        return data.get("screenshotUrl") or data.get("url") or None

    async def pause_content(self, player_ids: list[str]) -> dict[str, Any]:
        _check_players(player_ids)
        return await self._post("solutions/cancel", {"playerIds": player_ids})

    async def player_info(
        self, player_ids: list[str], player_sns: list[str] | None = None
    ) -> dict[str, Any]:
        _check_players(player_ids)
        return await self._post(
            "status/player-info",
            {"playerIds": player_ids, "playerSns": player_sns or []},
        )

    async def configuration(
        self, player_ids: list[str], commands: list[str] | None = None
    ) -> dict[str, Any]:
        _check_players(player_ids)
        return await self._post(
            "status/configuration",
            {
                "playerIds": player_ids,
                "commands": commands or CONFIGURATION_COMMANDS,
                "noticeUrl": self._notice_url,
            },
        )
