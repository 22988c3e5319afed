"""Participant management routes for event managers."""
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.core.auth import get_caller
from app.core.database import get_session
from app.tasting import membership
from app.tasting.identity import Caller

router = APIRouter(prefix="/events/{event_id}/participants", tags=["participants"])


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_participant(
    event_id: UUID,
    user_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Soft-remove a participant. The owner cannot be removed."""
    membership.remove_participant(session, caller, event_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/restore", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def restore_participant(
    event_id: UUID,
    user_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Reactivate a removed participant. 409 if they were never removed."""
    membership.restore_participant(session, caller, event_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
