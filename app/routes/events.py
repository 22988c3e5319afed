"""Event routes for creating, listing and managing tasting events."""
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.core.auth import get_caller
from app.core.database import get_session
from app.schemas import (
    EventCreate,
    EventDetail,
    EventStatusUpdate,
    EventSummary,
    JoinRequest,
    JoinResponse,
)
from app.tasting import lifecycle, membership
from app.tasting.identity import Caller

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventDetail, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """
    Create a new event owned by the caller.

    The event starts OPEN with a fresh join code. Private events cannot be
    listed; asking for that returns 400.
    """
    event = lifecycle.create_event(
        session,
        caller,
        name=payload.name,
        visibility=payload.visibility,
        is_listed=payload.is_listed,
    )
    return EventDetail.from_view(lifecycle.get_event_view(session, caller, event.id))


@router.get("/mine", response_model=list[EventSummary])
def my_events(caller: Caller = Depends(get_caller), session: Session = Depends(get_session)):
    """Events the caller owns or actively participates in, most recently updated first."""
    return [EventSummary.build(event) for event in lifecycle.list_my_events(session, caller)]


@router.get("/open", response_model=list[EventSummary])
def open_events(caller: Caller = Depends(get_caller), session: Session = Depends(get_session)):
    """
    Discoverable events.

    Lists OPEN events with open visibility that their owner chose to list,
    excluding events the caller was removed from.
    """
    return [EventSummary.build(event) for event in lifecycle.list_open_events(session, caller)]


@router.get("/{event_id}", response_model=EventDetail)
def event_detail(
    event_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Event detail with participants and the caller's role. 403 for non-members."""
    return EventDetail.from_view(lifecycle.get_event_view(session, caller, event_id))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_event(
    event_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Delete the event with its beers, reviews, favorites and participants. Managers only."""
    lifecycle.delete_event(session, caller, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{event_id}/status", response_model=EventSummary)
def change_event_status(
    event_id: UUID,
    payload: EventStatusUpdate,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """
    Open or close the event.

    Only the owner or an admin may change the status (403 otherwise). The
    value must be 'open' or 'closed' in any letter case (400 otherwise).
    """
    event = lifecycle.change_status(session, caller, event_id, payload.status)
    return EventSummary.build(event)


@router.post("/{event_id}/join", response_model=JoinResponse)
def join_event(
    event_id: UUID,
    payload: JoinRequest,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """
    Join the event with its join code.

    Returns joined=false when the caller already is an active participant.
    A wrong code or a previously removed caller gets 403; a closed event
    gets 409.
    """
    result = membership.join_event(session, caller, event_id, payload.join_code)
    return JoinResponse.build(result)
