"""Event model for group tasting events.

This module defines the Event model, the central entity of the service.
An event is created by its owner, carries a join code that other users
type in to become participants, and moves between Open and Closed while
the tasting runs.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class EventStatus(str, Enum):
    """Lifecycle state of an event.

    Only OPEN and CLOSED are reachable through the API. DRAFT and ARCHIVED
    exist for rows created or retired by direct database maintenance.
    """
    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"
    ARCHIVED = "archived"


class EventVisibility(str, Enum):
    PRIVATE = "private"
    OPEN = "open"


class Event(SQLModel, table=True):
    """A tasting event.

    Attributes:
        id: Unique identifier (UUID).
        owner_user_id: The user who created the event. The owner cannot be
            deleted while the event exists (restrict).
        name: Display name.
        status: Lifecycle state, see EventStatus.
        visibility: PRIVATE events are reachable only through their join
            code; OPEN events may additionally be listed.
        is_listed: Whether the event shows up in the open-event listing.
            Always False for PRIVATE events.
        join_code: Code required to join (unique across all events).
        created_utc: When the event was created.
        updated_utc: Bumped by status changes and membership changes.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_user_id: UUID = Field(foreign_key="app_user.id", ondelete="RESTRICT", index=True)
    name: str = Field(max_length=200)
    status: EventStatus = Field(default=EventStatus.OPEN)
    visibility: EventVisibility = Field(default=EventVisibility.PRIVATE)
    is_listed: bool = Field(default=False)
    join_code: str = Field(max_length=32, index=True, unique=True)
    created_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
