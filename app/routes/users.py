"""Routes for the authenticated user's own profile."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import get_caller
from app.core.database import get_session
from app.schemas import CurrentUserResponse, UpdateProfileRequest
from app.tasting.identity import Caller, update_nickname

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=CurrentUserResponse)
def read_me(caller: Caller = Depends(get_caller)):
    """
    Return the current user.

    Resolving the caller creates the user row on first sight and refreshes
    last-seen otherwise, so this doubles as the post-login handshake.
    """
    return CurrentUserResponse.build(caller.user, caller.is_admin)


@router.patch("/me", response_model=CurrentUserResponse)
def update_me(
    payload: UpdateProfileRequest,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """Change the current user's nickname. Blank or over-long nicknames return 400."""
    user = update_nickname(session, caller, payload.nickname)
    return CurrentUserResponse.build(user, caller.is_admin)
