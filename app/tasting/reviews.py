"""Review ledger: one review per (event, beer, user).

Creation relies on the unique index over (event, beer, user): a second
create for the same triple is a conflict and the client is expected to
switch to update. Updates are compare-and-swap on the review's version
column, and an update that changes nothing writes nothing.

While an event is CLOSED only managers may create or change reviews.
"""
import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models import BeerReview, Event, EventStatus
from app.models.review import SCORE_FIELDS
from app.tasting.access import Access, get_event, require_access
from app.tasting.beers import get_event_beer
from app.tasting.errors import ConflictError, NotFoundError
from app.tasting.identity import Caller
from app.tasting.validation import check_score, clean_text, raise_if_errors

logger = logging.getLogger(__name__)

# Column name -> (wire name, max length)
NOTE_FIELDS = {
    "notes": ("notes", 2000),
    "aroma_notes": ("aromaNotes", 1000),
    "appearance_notes": ("appearanceNotes", 1000),
    "flavor_notes": ("flavorNotes", 1000),
}

SCORE_WIRE_NAMES = {
    "color_score": "colorScore",
    "smell_score": "smellScore",
    "taste_score": "tasteScore",
    "total_score": "totalScore",
}


def _clean_values(values: dict[str, Any], require_scores: bool) -> dict[str, Any]:
    """Validate review fields; only keys present in ``values`` are returned."""
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {}

    for name in SCORE_FIELDS:
        wire_name = SCORE_WIRE_NAMES[name]
        if name not in values or values[name] is None:
            if require_scores or name in values:
                errors[wire_name] = "This field is required."
            continue
        score = check_score(values[name], wire_name, errors)
        if score is not None:
            cleaned[name] = score

    for name, (wire_name, max_length) in NOTE_FIELDS.items():
        if name in values:
            cleaned[name] = clean_text(values[name], wire_name, max_length, errors)

    raise_if_errors(errors)
    return cleaned


def _check_not_closed(event: Event, access: Access) -> None:
    if event.status == EventStatus.CLOSED and not access.is_manager:
        raise ConflictError("Review updates are blocked while the event is closed")


def _find_review(session: Session, event_id: UUID, beer_id: UUID, user_id: UUID) -> BeerReview | None:
    return session.exec(
        select(BeerReview)
        .where(BeerReview.event_id == event_id)
        .where(BeerReview.beer_id == beer_id)
        .where(BeerReview.user_id == user_id)
    ).first()


def get_review(session: Session, caller: Caller, event_id: UUID, beer_id: UUID) -> BeerReview:
    """The caller's review of a beer."""
    event = get_event(session, event_id)
    require_access(session, caller, event)
    beer = get_event_beer(session, event, beer_id)

    review = _find_review(session, event.id, beer.id, caller.user_id)
    if not review:
        raise NotFoundError("Review not found")
    return review


def create_review(
    session: Session,
    caller: Caller,
    event_id: UUID,
    beer_id: UUID,
    values: dict[str, Any],
) -> BeerReview:
    """
    Submit the caller's review of a beer.

    All four scores are required. When a review for the triple already
    exists (including one written by a concurrent request), the unique
    index rejects the insert and a ConflictError is raised.
    """
    event = get_event(session, event_id)
    access = require_access(session, caller, event)
    _check_not_closed(event, access)
    cleaned = _clean_values(values, require_scores=True)
    beer = get_event_beer(session, event, beer_id)

    now = datetime.now(UTC)
    review = BeerReview(
        event_id=event.id,
        beer_id=beer.id,
        user_id=caller.user_id,
        created_utc=now,
        updated_utc=now,
        version=1,
        **cleaned,
    )
    session.add(review)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        if _find_review(session, event_id, beer_id, caller.user_id) is None:
            raise
        raise ConflictError("You have already reviewed this beer; update it instead")

    session.refresh(review)
    logger.info(f"User {caller.user_id} reviewed beer {beer_id} in event {event_id}")
    return review


def update_review(
    session: Session,
    caller: Caller,
    event_id: UUID,
    beer_id: UUID,
    changes: dict[str, Any],
    expected_version: int | None = None,
) -> BeerReview:
    """
    Apply a partial update to the caller's review.

    Only fields present in ``changes`` are validated, and only those that
    differ from the stored values are written. When nothing differs the row
    is left untouched, including updated_utc and version.

    The write is ``UPDATE ... WHERE version = <version we read>``. If
    another request updated the review in between, no row matches and the
    update fails with a ConflictError instead of overwriting it. Passing
    ``expected_version`` lets a client make the same check against the
    version it last saw.
    """
    event = get_event(session, event_id)
    access = require_access(session, caller, event)
    _check_not_closed(event, access)
    beer = get_event_beer(session, event, beer_id)

    review = _find_review(session, event.id, beer.id, caller.user_id)
    if not review:
        raise NotFoundError("Review not found")

    cleaned = _clean_values(changes, require_scores=False)
    if expected_version is not None and expected_version != review.version:
        raise ConflictError("Review was changed by another request")

    diff = {name: value for name, value in cleaned.items() if getattr(review, name) != value}
    if not diff:
        return review

    read_version = review.version
    result = session.exec(
        update(BeerReview)
        .where(BeerReview.id == review.id)
        .where(BeerReview.version == read_version)
        .values(**diff, updated_utc=datetime.now(UTC), version=read_version + 1)
    )
    if result.rowcount != 1:
        session.rollback()
        raise ConflictError("Review was changed by another request")

    session.commit()
    session.refresh(review)

    logger.info(
        f"User {caller.user_id} updated review {review.id} "
        f"({', '.join(sorted(diff))}) to version {review.version}"
    )
    return review
