"""Participant model linking users to the events they take part in.

There is at most one row per (event, user). Removing a participant flips
the row to REMOVED instead of deleting it, so that a removed user cannot
simply join again with the same code.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class ParticipantRole(str, Enum):
    OWNER = "owner"
    MEMBER = "member"


class ParticipantStatus(str, Enum):
    INVITED = "invited"
    ACTIVE = "active"
    REMOVED = "removed"


class EventParticipant(SQLModel, table=True):
    """Membership of a user in an event.

    Exactly one OWNER row exists per event, written in the same transaction
    as the event itself. Every other row has role MEMBER.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the Event (cascade on delete).
        user_id: Foreign key to the User (restrict on delete).
        role: OWNER or MEMBER.
        status: INVITED (unused by current flows), ACTIVE or REMOVED.
        joined_utc: When the user joined.
        removed_utc: When the user was removed; None unless REMOVED.
    """
    __tablename__ = "event_participant"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_participant_event_user"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", ondelete="CASCADE", index=True)
    user_id: UUID = Field(foreign_key="app_user.id", ondelete="RESTRICT", index=True)
    role: ParticipantRole = Field(default=ParticipantRole.MEMBER)
    status: ParticipantStatus = Field(default=ParticipantStatus.ACTIVE)
    joined_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
    removed_utc: datetime | None = None
