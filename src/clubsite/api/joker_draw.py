"""Joker draw endpoints."""

from fastapi import APIRouter, Depends, Request

from clubsite.api.dependencies import get_container, read_required_file, require_admin
from clubsite.api.schemas import (
    JokerDrawEntryOut,
    JokerDrawIn,
    JokerDrawOut,
    envelope,
    serialize,
)
from clubsite.containers import AppContainer
from clubsite.domain.content import JokerDrawState
from clubsite.services.joker_draw import JokerDrawService

router = APIRouter(prefix="/joker-draw", tags=["joker-draw"])


def _state(service: JokerDrawService, state: JokerDrawState) -> dict[str, object]:
    url = (
        service.winner_image_url(state.winner_image_path)
        if state.winner_image_path
        else None
    )
    return serialize(JokerDrawOut, state, winner_image_url=url)


@router.get("")
async def get_joker_draw(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the current jackpot and last winner, or null before the first draw."""
    service = container.joker_draw_service
    state = service.get_current()
    return envelope(_state(service, state) if state else None)


@router.put("", dependencies=[Depends(require_admin)])
async def update_joker_draw(
    payload: JokerDrawIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Record a new draw outcome."""
    service = container.joker_draw_service
    state = service.update(
        last_winner=payload.last_winner,
        last_win_amount=payload.last_win_amount,
        current_jackpot=payload.current_jackpot,
        winner_image_path=payload.winner_image_path,
    )
    return envelope(_state(service, state), "Joker draw updated")


@router.get("/history")
async def joker_draw_history(
    limit: int = 20, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return recent draw outcomes, newest first."""
    entries = container.joker_draw_service.list_history(limit)
    return envelope([serialize(JokerDrawEntryOut, entry) for entry in entries])


@router.post("/winner-image", status_code=201, dependencies=[Depends(require_admin)])
async def upload_winner_image(
    request: Request, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Upload a winner photo and return its path and public URL."""
    _, upload = await read_required_file(request)
    service = container.joker_draw_service
    path = service.upload_winner_image(upload)
    return envelope(
        {"path": path, "url": service.winner_image_url(path)},
        "Winner image uploaded",
    )
