"""Favorite listing routes."""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import get_caller
from app.core.database import get_session
from app.schemas import FavoriteBeerResponse
from app.tasting import favorites
from app.tasting.identity import Caller

router = APIRouter(tags=["favorites"])


@router.get("/events/{event_id}/favorites/me", response_model=list[UUID])
def my_event_favorites(
    event_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Ids of the beers the caller favorited in this event, newest first."""
    return favorites.list_event_favorites(session, caller, event_id)


@router.get("/favorites/mine", response_model=list[FavoriteBeerResponse])
def my_favorites(caller: Caller = Depends(get_caller), session: Session = Depends(get_session)):
    """
    All of the caller's favorites across events.

    Favorites in events the caller was removed from are left out.
    """
    return [
        FavoriteBeerResponse.build(summary)
        for summary in favorites.list_all_favorites(session, caller)
    ]
