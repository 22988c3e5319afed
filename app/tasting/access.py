"""Access guard consulted by every per-event operation.

The decision itself is a pure function of the caller, the event owner and
the caller's participant row, so it can be tested without a database.
"""
from enum import Enum
from uuid import UUID

from sqlmodel import Session, select

from app.models import Event, EventParticipant, ParticipantStatus
from app.tasting.errors import ForbiddenError, NotFoundError
from app.tasting.identity import Caller


class Access(Enum):
    """Outcome of the access guard."""
    FULL = "full"
    MEMBER = "member"
    DENIED = "denied"

    @property
    def allowed(self) -> bool:
        return self is not Access.DENIED

    @property
    def is_manager(self) -> bool:
        return self is Access.FULL


def decide_access(
    caller_id: UUID,
    is_admin: bool,
    owner_user_id: UUID,
    participant_status: ParticipantStatus | None,
) -> Access:
    """Admin or owner get FULL; an ACTIVE participant gets MEMBER."""
    if is_admin or owner_user_id == caller_id:
        return Access.FULL
    if participant_status == ParticipantStatus.ACTIVE:
        return Access.MEMBER
    return Access.DENIED


def find_participant(session: Session, event_id: UUID, user_id: UUID) -> EventParticipant | None:
    return session.exec(
        select(EventParticipant)
        .where(EventParticipant.event_id == event_id)
        .where(EventParticipant.user_id == user_id)
    ).first()


def check_access(session: Session, caller: Caller, event: Event) -> Access:
    participant_status = None
    if not caller.is_admin and event.owner_user_id != caller.user_id:
        participant = find_participant(session, event.id, caller.user_id)
        participant_status = participant.status if participant else None
    return decide_access(caller.user_id, caller.is_admin, event.owner_user_id, participant_status)


def get_event(session: Session, event_id: UUID) -> Event:
    event = session.get(Event, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


def require_access(session: Session, caller: Caller, event: Event) -> Access:
    """Raise ForbiddenError unless the caller may act on the event."""
    access = check_access(session, caller, event)
    if not access.allowed:
        raise ForbiddenError("You do not have access to this event")
    return access


def require_manager(session: Session, caller: Caller, event: Event) -> Access:
    """Raise ForbiddenError unless the caller owns the event or is an admin."""
    access = check_access(session, caller, event)
    if not access.is_manager:
        raise ForbiddenError("Only the event owner or an admin can do this")
    return access
