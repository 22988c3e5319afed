"""Beer routes, including marking beers as favorites."""
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.core.auth import get_caller
from app.core.database import get_session
from app.schemas import BeerCreate, BeerResponse
from app.tasting import beers, favorites
from app.tasting.identity import Caller

router = APIRouter(prefix="/events/{event_id}/beers", tags=["beers"])


@router.get("", response_model=list[BeerResponse])
def list_beers(
    event_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Beers logged at the event, oldest first."""
    return [BeerResponse.build(beer) for beer in beers.list_beers(session, caller, event_id)]


@router.post("", response_model=BeerResponse, status_code=status.HTTP_201_CREATED)
def add_beer(
    event_id: UUID,
    payload: BeerCreate,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Log a beer at the event."""
    beer = beers.add_beer(
        session,
        caller,
        event_id,
        name=payload.name,
        brewery=payload.brewery,
        style=payload.style,
        abv=payload.abv,
    )
    return BeerResponse.build(beer)


@router.post("/{beer_id}/favorite", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def add_favorite(
    event_id: UUID,
    beer_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Mark a beer as a favorite. Repeating the call is harmless."""
    favorites.add_favorite(session, caller, event_id, beer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{beer_id}/favorite", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_favorite(
    event_id: UUID,
    beer_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Unmark a beer. Removing a mark that does not exist also succeeds."""
    favorites.remove_favorite(session, caller, event_id, beer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
