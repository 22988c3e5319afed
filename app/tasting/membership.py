"""Membership ledger: join, remove and restore participants.

There is at most one participant row per (event, user), guaranteed by a
unique index. Joining inserts it; removal and restoration only flip its
status, so a removed user cannot rejoin on their own.
"""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.models import Event, EventParticipant, EventStatus, ParticipantRole, ParticipantStatus
from app.tasting.access import find_participant, get_event, require_manager
from app.tasting.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError
from app.tasting.identity import Caller

logger = logging.getLogger(__name__)


@dataclass
class JoinResult:
    event_id: UUID
    user_id: UUID
    joined: bool  # False when the caller was already an active participant


def join_codes_match(supplied: str | None, expected: str) -> bool:
    return (supplied or "").strip().upper() == expected.upper()


def join_event(session: Session, caller: Caller, event_id: UUID, supplied_code: str | None) -> JoinResult:
    """
    Join an event with its join code.

    Idempotent: an already active participant gets joined=False and nothing
    is written. A REMOVED participant is refused; only a manager can
    restore them.

    The existence check and the insert are not atomic. When a concurrent
    request for the same (event, user) wins the race, the unique index
    rejects our insert; we re-read the row and report already-joined if the
    winner left it ACTIVE.
    """
    event = get_event(session, event_id)
    user_id = caller.user_id

    existing = find_participant(session, event.id, user_id)
    if existing is not None:
        if existing.status == ParticipantStatus.ACTIVE:
            return JoinResult(event_id=event.id, user_id=user_id, joined=False)
        if existing.status == ParticipantStatus.REMOVED:
            raise ForbiddenError("You have been removed from this event")

    _check_joinable(event, supplied_code)
    now = datetime.now(UTC)

    if existing is not None:
        # INVITED row: activate it in place
        existing.status = ParticipantStatus.ACTIVE
        existing.joined_utc = now
        session.add(existing)
        session.commit()
        logger.info(f"User {user_id} accepted invitation to event {event.id}")
        return JoinResult(event_id=event.id, user_id=user_id, joined=True)

    session.add(
        EventParticipant(
            event_id=event.id,
            user_id=user_id,
            role=ParticipantRole.MEMBER,
            status=ParticipantStatus.ACTIVE,
            joined_utc=now,
        )
    )
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        winner = find_participant(session, event_id, user_id)
        if winner is None or winner.status != ParticipantStatus.ACTIVE:
            raise
        logger.info(f"Concurrent join of event {event_id} by user {user_id} reconciled")
        return JoinResult(event_id=event_id, user_id=user_id, joined=False)

    logger.info(f"User {user_id} joined event {event_id}")
    return JoinResult(event_id=event_id, user_id=user_id, joined=True)


def _check_joinable(event: Event, supplied_code: str | None) -> None:
    if event.status != EventStatus.OPEN:
        raise ConflictError("Event is not open for joining")
    if not join_codes_match(supplied_code, event.join_code):
        raise ForbiddenError("Invalid join code")


def _get_target(session: Session, caller: Caller, event_id: UUID, target_user_id: UUID) -> tuple[Event, EventParticipant]:
    """Shared preconditions of remove and restore."""
    event = get_event(session, event_id)
    if target_user_id == event.owner_user_id:
        raise ValidationFailedError({"userId": "The event owner cannot be removed or restored."})
    require_manager(session, caller, event)

    participant = find_participant(session, event.id, target_user_id)
    if participant is None:
        raise NotFoundError("Participant not found")
    return event, participant


def remove_participant(session: Session, caller: Caller, event_id: UUID, target_user_id: UUID) -> None:
    """Remove a participant. Removing an already removed participant is a no-op."""
    event, participant = _get_target(session, caller, event_id, target_user_id)
    if participant.status == ParticipantStatus.REMOVED:
        return

    now = datetime.now(UTC)
    participant.status = ParticipantStatus.REMOVED
    participant.removed_utc = now
    event.updated_utc = now
    session.add(participant)
    session.add(event)
    session.commit()

    logger.info(f"User {target_user_id} removed from event {event_id} by user {caller.user_id}")


def restore_participant(session: Session, caller: Caller, event_id: UUID, target_user_id: UUID) -> None:
    """Reinstate a removed participant as ACTIVE."""
    event, participant = _get_target(session, caller, event_id, target_user_id)
    if participant.status != ParticipantStatus.REMOVED:
        raise ConflictError("Participant is not removed")

    participant.status = ParticipantStatus.ACTIVE
    participant.removed_utc = None
    event.updated_utc = datetime.now(UTC)
    session.add(participant)
    session.add(event)
    session.commit()

    logger.info(f"User {target_user_id} restored to event {event_id} by user {caller.user_id}")
