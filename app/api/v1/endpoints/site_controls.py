"""LED site controls: brightness, volume, restart, screenshot and player status.

The player is looked up from the site (product); commands go to the vendor
CMS and its replies are passed back unchanged.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUserDep, get_player_control, get_product_service
from app.application.dtos.common import CurrentUser
from app.application.interfaces.services import IPlayerControl
from app.application.services import ProductService
from app.application.services.access import ensure_company_access
from app.core.limiter import limit_device_control
from app.domain.exceptions import ValidationException
from app.schemas.site_control import ControlResponse, LevelRequest, ScreenshotResponse

router = APIRouter()

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
PlayerControlDep = Annotated[IPlayerControl, Depends(get_player_control)]


async def _player_id(product_id: str, product_svc: ProductService, user: CurrentUser) -> str:
    product = await product_svc.get(product_id)
    ensure_company_access("site", product_id, product.company_id, user, "control")
    player_id = product.player_id or product.site_code
    if not player_id:
        raise ValidationException(
            f"Site {product_id} has no LED player configured", field="player_id"
        )
    return player_id


@router.post("/brightness", response_model=ControlResponse)
@limit_device_control
async def set_brightness(
    request: Request,
    product_id: str,
    body: LevelRequest,
    current_user: CurrentUserDep,
    product_svc: ProductServiceDep,
    players: PlayerControlDep,
):
    """Set screen brightness (0 switches to automatic)."""
    player_id = await _player_id(product_id, product_svc, current_user)
    result = await players.set_brightness([player_id], body.value)
    return ControlResponse(player_id=player_id, result=result)


@router.post("/volume", response_model=ControlResponse)
@limit_device_control
async def set_volume(
    request: Request,
    product_id: str,
    body: LevelRequest,
    current_user: CurrentUserDep,
    product_svc: ProductServiceDep,
    players: PlayerControlDep,
):
    player_id = await _player_id(product_id, product_svc, current_user)
    result = await players.set_volume([player_id], body.value)
    return ControlResponse(player_id=player_id, result=result)


@router.post("/restart", response_model=ControlResponse)
@limit_device_control
async def restart_player(
    request: Request,
    product_id: str,
    current_user: CurrentUserDep,
    product_svc: ProductServiceDep,
    players: PlayerControlDep,
):
    player_id = await _player_id(product_id, product_svc, current_user)
    return ControlResponse(player_id=player_id, result=await players.restart([player_id]))


@router.post("/screenshot", response_model=ScreenshotResponse)
@limit_device_control
async def take_screenshot(
    request: Request,
    product_id: str,
    current_user: CurrentUserDep,
    product_svc: ProductServiceDep,
    players: PlayerControlDep,
):
    """Ask the player for a screenshot; url is None while the vendor is still producing it."""
    player_id = await _player_id(product_id, product_svc, current_user)
    return ScreenshotResponse(player_id=player_id, url=await players.screenshot([player_id]))


@router.post("/pause", response_model=ControlResponse)
@limit_device_control
async def pause_content(
    request: Request,
    product_id: str,
    current_user: CurrentUserDep,
    product_svc: ProductServiceDep,
    players: PlayerControlDep,
):
    """Stop the content currently playing on the site."""
    player_id = await _player_id(product_id, product_svc, current_user)
    return ControlResponse(player_id=player_id, result=await players.pause_content([player_id]))


@router.get("/player-info", response_model=ControlResponse)
async def player_info(
    product_id: str,
    current_user: CurrentUserDep,
    product_svc: ProductServiceDep,
    players: PlayerControlDep,
):
    player_id = await _player_id(product_id, product_svc, current_user)
    return ControlResponse(player_id=player_id, result=await players.player_info([player_id]))


@router.get("/configuration", response_model=ControlResponse)
async def player_configuration(
    product_id: str,
    current_user: CurrentUserDep,
    product_svc: ProductServiceDep,
    players: PlayerControlDep,
):
    """Current volume, brightness, video source and time settings of the player."""
    player_id = await _player_id(product_id, product_svc, current_user)
    return ControlResponse(player_id=player_id, result=await players.configuration([player_id]))
