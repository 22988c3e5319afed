"""Favorite ledger: idempotent (user, beer) marks.

Adding a favorite twice or removing an absent one both succeed. Listings
are filtered by the caller's current access to each event; a participant
who gets removed keeps their favorite rows but stops seeing them.
"""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models import BeerFavorite, Event, EventBeer, EventParticipant, EventStatus, ParticipantStatus
from app.tasting.access import get_event, require_access
from app.tasting.beers import get_event_beer
from app.tasting.identity import Caller

logger = logging.getLogger(__name__)


@dataclass
class FavoriteSummary:
    event_id: UUID
    event_name: str
    event_status: EventStatus
    beer_id: UUID
    beer_name: str
    brewery: str | None
    style: str | None
    abv: float | None
    favorited_utc: datetime


def _find_favorite(session: Session, user_id: UUID, beer_id: UUID) -> BeerFavorite | None:
    return session.exec(
        select(BeerFavorite)
        .where(BeerFavorite.user_id == user_id)
        .where(BeerFavorite.beer_id == beer_id)
    ).first()


def add_favorite(session: Session, caller: Caller, event_id: UUID, beer_id: UUID) -> None:
    """
    Mark a beer as a favorite.

    The insert is attempted without checking for an existing row first; a
    unique violation means the mark already exists (from an earlier call or
    a concurrent one) and is treated as success.
    """
    event = get_event(session, event_id)
    require_access(session, caller, event)
    beer = get_event_beer(session, event, beer_id)

    session.add(
        BeerFavorite(
            event_id=event.id,
            beer_id=beer.id,
            user_id=caller.user_id,
            created_utc=datetime.now(UTC),
        )
    )
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        if _find_favorite(session, caller.user_id, beer_id) is None:
            raise
        logger.debug(f"Beer {beer_id} already a favorite of user {caller.user_id}")
        return

    logger.info(f"User {caller.user_id} favorited beer {beer_id} in event {event_id}")


def remove_favorite(session: Session, caller: Caller, event_id: UUID, beer_id: UUID) -> None:
    """Unmark a beer. Removing a favorite that does not exist is a no-op."""
    event = get_event(session, event_id)
    require_access(session, caller, event)
    beer = get_event_beer(session, event, beer_id)

    result = session.exec(
        delete(BeerFavorite)
        .where(BeerFavorite.user_id == caller.user_id)
        .where(BeerFavorite.beer_id == beer.id)
    )
    session.commit()

    if result.rowcount:
        logger.info(f"User {caller.user_id} unfavorited beer {beer_id} in event {event_id}")


def list_event_favorites(session: Session, caller: Caller, event_id: UUID) -> list[UUID]:
    """Ids of the beers the caller marked in this event, newest first."""
    event = get_event(session, event_id)
    require_access(session, caller, event)
    return list(
        session.exec(
            select(BeerFavorite.beer_id)
            .where(BeerFavorite.event_id == event.id)
            .where(BeerFavorite.user_id == caller.user_id)
            .order_by(BeerFavorite.created_utc.desc())
        ).all()
    )


def list_all_favorites(session: Session, caller: Caller) -> list[FavoriteSummary]:
    """
    The caller's favorites across every event they can still access.

    Applies the access guard in SQL: the caller owns the event or is an
    ACTIVE participant of it. Admins pass the guard everywhere.
    """
    statement = (
        select(BeerFavorite, Event, EventBeer)
        .join(Event, Event.id == BeerFavorite.event_id)
        .join(EventBeer, EventBeer.id == BeerFavorite.beer_id)
        .where(BeerFavorite.user_id == caller.user_id)
        .order_by(BeerFavorite.created_utc.desc())
    )
    if not caller.is_admin:
        active_event_ids = (
            select(EventParticipant.event_id)
            .where(EventParticipant.user_id == caller.user_id)
            .where(EventParticipant.status == ParticipantStatus.ACTIVE)
        )
        statement = statement.where(
            or_(Event.owner_user_id == caller.user_id, Event.id.in_(active_event_ids))
        )

    return [
        FavoriteSummary(
            event_id=event.id,
            event_name=event.name,
            event_status=event.status,
            beer_id=beer.id,
            beer_name=beer.name,
            brewery=beer.brewery,
            style=beer.style,
            abv=beer.abv,
            favorited_utc=favorite.created_utc,
        )
        for favorite, event, beer in session.exec(statement).all()
    ]
