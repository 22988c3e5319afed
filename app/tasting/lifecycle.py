"""Event lifecycle: creation, listings, status changes and deletion.

State machine owned here:

    OPEN <-> CLOSED      (owner or admin only)

DRAFT and ARCHIVED are valid stored states but no transition into or out
of them is offered; asking to change the status of an event in one of
those states is a conflict.
"""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import Session, select

from app.models import (
    BeerFavorite,
    BeerReview,
    Event,
    EventBeer,
    EventParticipant,
    EventStatus,
    EventVisibility,
    ParticipantRole,
    ParticipantStatus,
    User,
)
from app.tasting.access import get_event, require_access, require_manager
from app.tasting.errors import ConflictError, ValidationFailedError
from app.tasting.identity import Caller
from app.tasting.join_codes import generate_join_code
from app.tasting.validation import clean_text, raise_if_errors

logger = logging.getLogger(__name__)

EVENT_NAME_MAX_LENGTH = 200

# Statuses a client may ask for through the status endpoint
SETTABLE_STATUSES = {EventStatus.OPEN, EventStatus.CLOSED}


@dataclass
class ParticipantView:
    participant: EventParticipant
    nickname: str | None


@dataclass
class EventView:
    """An event as seen by one caller."""
    event: Event
    current_user_role: str
    participants: list[ParticipantView]


def create_event(
    session: Session,
    caller: Caller,
    name: str | None,
    visibility: EventVisibility = EventVisibility.PRIVATE,
    is_listed: bool = False,
) -> Event:
    """
    Create an OPEN event owned by the caller.

    The owner's participant row is written in the same transaction, so an
    event never exists without exactly one OWNER participant.
    """
    errors: dict[str, str] = {}
    cleaned_name = clean_text(name, "name", EVENT_NAME_MAX_LENGTH, errors, required=True)
    if visibility == EventVisibility.PRIVATE and is_listed:
        errors["isListed"] = "Private events cannot be listed."
    raise_if_errors(errors)

    now = datetime.now(UTC)
    event = Event(
        owner_user_id=caller.user_id,
        name=cleaned_name,
        status=EventStatus.OPEN,
        visibility=visibility,
        is_listed=is_listed,
        join_code=generate_join_code(session),
        created_utc=now,
        updated_utc=now,
    )
    session.add(event)
    session.flush()

    session.add(
        EventParticipant(
            event_id=event.id,
            user_id=caller.user_id,
            role=ParticipantRole.OWNER,
            status=ParticipantStatus.ACTIVE,
            joined_utc=now,
        )
    )
    session.commit()
    session.refresh(event)

    logger.info(f"User {caller.user_id} created event {event.id}")
    return event


def list_my_events(session: Session, caller: Caller) -> list[Event]:
    """Events the caller owns or actively participates in, most recently updated first."""
    active_event_ids = (
        select(EventParticipant.event_id)
        .where(EventParticipant.user_id == caller.user_id)
        .where(EventParticipant.status == ParticipantStatus.ACTIVE)
    )
    statement = (
        select(Event)
        .where(or_(Event.owner_user_id == caller.user_id, Event.id.in_(active_event_ids)))
        .order_by(Event.updated_utc.desc(), Event.created_utc.desc())
    )
    return list(session.exec(statement).all())


def list_open_events(session: Session, caller: Caller) -> list[Event]:
    """
    Listed, open-visibility events that are currently OPEN.

    Events the caller has been removed from are left out.
    """
    removed_event_ids = (
        select(EventParticipant.event_id)
        .where(EventParticipant.user_id == caller.user_id)
        .where(EventParticipant.status == ParticipantStatus.REMOVED)
    )
    statement = (
        select(Event)
        .where(Event.status == EventStatus.OPEN)
        .where(Event.visibility == EventVisibility.OPEN)
        .where(Event.is_listed == True)  # noqa: E712
        .where(Event.id.not_in(removed_event_ids))
        .order_by(Event.created_utc.desc())
    )
    return list(session.exec(statement).all())


def get_event_view(session: Session, caller: Caller, event_id: UUID) -> EventView:
    """Event detail with its participants and the caller's role."""
    event = get_event(session, event_id)
    require_access(session, caller, event)

    if event.owner_user_id == caller.user_id:
        role = "owner"
    elif caller.is_admin:
        role = "admin"
    else:
        role = "member"

    rows = session.exec(
        select(EventParticipant, User.nickname)
        .join(User, User.id == EventParticipant.user_id)
        .where(EventParticipant.event_id == event.id)
        .order_by(EventParticipant.joined_utc)
    ).all()
    participants = [ParticipantView(participant, nickname) for participant, nickname in rows]

    return EventView(event=event, current_user_role=role, participants=participants)


def parse_status(value: str | None) -> EventStatus:
    """Parse a requested status, case-insensitively; only open/closed are accepted."""
    normalized = (value or "").strip().lower()
    for status in SETTABLE_STATUSES:
        if status.value == normalized:
            return status
    raise ValidationFailedError({"status": "Must be 'open' or 'closed'."})


def change_status(session: Session, caller: Caller, event_id: UUID, requested: str | None) -> Event:
    """
    Move an event between OPEN and CLOSED.

    Asking for the status the event already has is a successful no-op.
    """
    event = get_event(session, event_id)
    require_manager(session, caller, event)
    target = parse_status(requested)

    if event.status not in SETTABLE_STATUSES:
        raise ConflictError(f"Cannot change status of a {event.status.value} event")
    if event.status == target:
        return event

    previous = event.status
    event.status = target
    event.updated_utc = datetime.now(UTC)
    session.add(event)
    session.commit()
    session.refresh(event)

    logger.info(f"Event {event.id} status {previous.value} -> {target.value} by user {caller.user_id}")
    return event


def delete_event(session: Session, caller: Caller, event_id: UUID) -> None:
    """
    Delete an event and everything recorded at it.

    Reviews, favorites, beers and participants are removed explicitly in
    the same transaction before the event row.
    """
    event = get_event(session, event_id)
    require_manager(session, caller, event)

    session.exec(delete(BeerReview).where(BeerReview.event_id == event.id))
    session.exec(delete(BeerFavorite).where(BeerFavorite.event_id == event.id))
    session.exec(delete(EventBeer).where(EventBeer.event_id == event.id))
    session.exec(delete(EventParticipant).where(EventParticipant.event_id == event.id))
    session.delete(event)
    session.commit()

    logger.info(f"Event {event_id} deleted by user {caller.user_id}")
