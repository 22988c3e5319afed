"""Beers logged at an event."""
import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import Session, select

from app.models import Event, EventBeer
from app.tasting.access import get_event, require_access
from app.tasting.errors import NotFoundError
from app.tasting.identity import Caller
from app.tasting.validation import clean_text, raise_if_errors

logger = logging.getLogger(__name__)

MAX_ABV = 100


def get_event_beer(session: Session, event: Event, beer_id: UUID) -> EventBeer:
    """
    Load a beer that belongs to the given event.

    A beer from another event is reported exactly like a missing one, so
    guessing ids does not reveal anything about unrelated events.
    """
    beer = session.get(EventBeer, beer_id)
    if not beer or beer.event_id != event.id:
        raise NotFoundError("Beer not found")
    return beer


def list_beers(session: Session, caller: Caller, event_id: UUID) -> list[EventBeer]:
    event = get_event(session, event_id)
    require_access(session, caller, event)
    return list(
        session.exec(
            select(EventBeer)
            .where(EventBeer.event_id == event.id)
            .order_by(EventBeer.created_utc)
        ).all()
    )


def add_beer(
    session: Session,
    caller: Caller,
    event_id: UUID,
    name: str | None,
    brewery: str | None = None,
    style: str | None = None,
    abv: float | None = None,
) -> EventBeer:
    """Log a beer at the event. Any participant may add beers."""
    event = get_event(session, event_id)
    require_access(session, caller, event)

    errors: dict[str, str] = {}
    cleaned_name = clean_text(name, "name", 200, errors, required=True)
    cleaned_brewery = clean_text(brewery, "brewery", 200, errors)
    cleaned_style = clean_text(style, "style", 100, errors)
    if abv is not None and not 0 <= abv <= MAX_ABV:
        errors["abv"] = f"Must be between 0 and {MAX_ABV}."
    raise_if_errors(errors)

    beer = EventBeer(
        event_id=event.id,
        name=cleaned_name,
        brewery=cleaned_brewery,
        style=cleaned_style,
        abv=abv,
        created_utc=datetime.now(UTC),
    )
    session.add(beer)
    session.commit()
    session.refresh(beer)

    logger.info(f"Beer {beer.id} added to event {event_id} by user {caller.user_id}")
    return beer
