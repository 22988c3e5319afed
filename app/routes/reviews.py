"""Review routes: one review per user per beer."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import get_caller
from app.core.database import get_session
from app.schemas import ReviewCreate, ReviewResponse, ReviewUpdate
from app.tasting import reviews
from app.tasting.identity import Caller

router = APIRouter(prefix="/events/{event_id}/beers/{beer_id}/reviews", tags=["reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    event_id: UUID,
    beer_id: UUID,
    payload: ReviewCreate,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """
    Submit a review.

    Scores run from 1 to 6. A second review of the same beer returns 409;
    use PATCH on /reviews/me instead.
    """
    review = reviews.create_review(session, caller, event_id, beer_id, payload.model_dump())
    return ReviewResponse.build(review)


@router.get("/me", response_model=ReviewResponse)
def my_review(
    event_id: UUID,
    beer_id: UUID,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """The caller's review of the beer, or 404 if they have not reviewed it."""
    return ReviewResponse.build(reviews.get_review(session, caller, event_id, beer_id))


@router.patch("/me", response_model=ReviewResponse)
def update_my_review(
    event_id: UUID,
    beer_id: UUID,
    payload: ReviewUpdate,
    caller: Caller = Depends(get_caller),
    session: Session = Depends(get_session),
):
    """
    Update the caller's review.

    Only the fields sent are changed. Sending ``version`` makes the update
    fail with 409 if the review has changed since that version was read.
    """
    changes = payload.model_dump(exclude_unset=True)
    expected_version = changes.pop("version", None)
    review = reviews.update_review(
        session, caller, event_id, beer_id, changes, expected_version=expected_version
    )
    return ReviewResponse.build(review)
