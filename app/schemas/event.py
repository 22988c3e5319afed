"""
Event-related Pydantic schemas
"""

from datetime import datetime
from uuid import UUID

from app.models import Event, EventStatus, EventVisibility, ParticipantRole, ParticipantStatus
from app.schemas.common import CamelModel
from app.tasting.lifecycle import EventView, ParticipantView
from app.tasting.membership import JoinResult


class EventCreate(CamelModel):
    """Schema for creating an event"""
    name: str | None = None
    visibility: EventVisibility = EventVisibility.PRIVATE
    is_listed: bool = False


class EventStatusUpdate(CamelModel):
    """Requested status, 'open' or 'closed' in any letter case"""
    status: str | None = None


class JoinRequest(CamelModel):
    join_code: str | None = None


class JoinResponse(CamelModel):
    event_id: UUID
    user_id: UUID
    joined: bool

    @classmethod
    def build(cls, result: JoinResult) -> "JoinResponse":
        return cls(event_id=result.event_id, user_id=result.user_id, joined=result.joined)


class EventSummary(CamelModel):
    """Event as shown in listings; never carries the join code"""
    id: UUID
    name: str
    status: EventStatus
    visibility: EventVisibility
    is_listed: bool
    owner_user_id: UUID
    created_utc: datetime
    updated_utc: datetime

    @classmethod
    def build(cls, event: Event) -> "EventSummary":
        return cls(
            id=event.id,
            name=event.name,
            status=event.status,
            visibility=event.visibility,
            is_listed=event.is_listed,
            owner_user_id=event.owner_user_id,
            created_utc=event.created_utc,
            updated_utc=event.updated_utc,
        )


class ParticipantResponse(CamelModel):
    user_id: UUID
    nickname: str | None
    role: ParticipantRole
    status: ParticipantStatus
    joined_utc: datetime
    removed_utc: datetime | None

    @classmethod
    def build(cls, view: ParticipantView) -> "ParticipantResponse":
        participant = view.participant
        return cls(
            user_id=participant.user_id,
            nickname=view.nickname,
            role=participant.role,
            status=participant.status,
            joined_utc=participant.joined_utc,
            removed_utc=participant.removed_utc,
        )


class EventDetail(EventSummary):
    """Event detail for participants, with join code and member list"""
    join_code: str
    current_user_role: str
    participants: list[ParticipantResponse]

    @classmethod
    def from_view(cls, view: EventView) -> "EventDetail":
        event = view.event
        return cls(
            **EventSummary.build(event).model_dump(),
            join_code=event.join_code,
            current_user_role=view.current_user_role,
            participants=[ParticipantResponse.build(p) for p in view.participants],
        )
