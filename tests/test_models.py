"""Tests for database models."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models import (
    BeerFavorite,
    BeerReview,
    Event,
    EventBeer,
    EventParticipant,
    EventStatus,
    EventVisibility,
    ParticipantRole,
    ParticipantStatus,
    User,
)
from app.tasting.identity import Caller


def _review(event: Event, beer: EventBeer, user_id, score: int = 4) -> BeerReview:
    return BeerReview(
        event_id=event.id,
        beer_id=beer.id,
        user_id=user_id,
        color_score=score,
        smell_score=score,
        taste_score=score,
        total_score=score,
    )


class TestUserModel:
    """Tests for the User model."""

    def test_subject_is_unique(self, session: Session):
        """Two users cannot share an external subject."""
        session.add(User(subject="same"))
        session.commit()

        session.add(User(subject="same"))
        with pytest.raises(IntegrityError):
            session.commit()


class TestEventModel:
    """Tests for the Event model."""

    def test_defaults(self, session: Session, alice: Caller):
        """New events are OPEN, PRIVATE and unlisted."""
        event = Event(owner_user_id=alice.user_id, name="Tasting", join_code="ABCD2345")
        session.add(event)
        session.commit()

        retrieved = session.get(Event, event.id)
        assert retrieved.status == EventStatus.OPEN
        assert retrieved.visibility == EventVisibility.PRIVATE
        assert retrieved.is_listed is False

    def test_join_code_is_unique(self, session: Session, alice: Caller):
        session.add(Event(owner_user_id=alice.user_id, name="One", join_code="SAMECODE"))
        session.commit()

        session.add(Event(owner_user_id=alice.user_id, name="Two", join_code="SAMECODE"))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_owner_must_exist(self, session: Session):
        """Foreign keys are enforced on SQLite connections."""
        from uuid import uuid4

        session.add(Event(owner_user_id=uuid4(), name="Orphan", join_code="ORPHAN22"))
        with pytest.raises(IntegrityError):
            session.commit()


class TestParticipantModel:
    """Tests for the EventParticipant model."""

    def test_one_row_per_event_and_user(self, session: Session, open_event: Event, alice: Caller):
        """The owner row written at creation blocks a second row for the same user."""
        session.add(
            EventParticipant(
                event_id=open_event.id,
                user_id=alice.user_id,
                role=ParticipantRole.MEMBER,
                status=ParticipantStatus.ACTIVE,
            )
        )
        with pytest.raises(IntegrityError):
            session.commit()

    def test_event_has_single_owner_row(self, session: Session, open_event: Event, alice: Caller):
        rows = session.exec(
            select(EventParticipant).where(EventParticipant.event_id == open_event.id)
        ).all()
        assert len(rows) == 1
        assert rows[0].user_id == alice.user_id
        assert rows[0].role == ParticipantRole.OWNER
        assert rows[0].status == ParticipantStatus.ACTIVE


class TestReviewModel:
    """Tests for the BeerReview model."""

    def test_one_review_per_user_and_beer(self, session: Session, open_event: Event, beer: EventBeer, alice: Caller):
        session.add(_review(open_event, beer, alice.user_id))
        session.commit()

        session.add(_review(open_event, beer, alice.user_id, score=5))
        with pytest.raises(IntegrityError):
            session.commit()

    @pytest.mark.parametrize("score", [0, 7])
    def test_scores_are_checked_by_the_table(self, session: Session, open_event: Event, beer: EventBeer, alice: Caller, score: int):
        session.add(_review(open_event, beer, alice.user_id, score=score))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_version_starts_at_one(self, session: Session, open_event: Event, beer: EventBeer, alice: Caller):
        review = _review(open_event, beer, alice.user_id)
        session.add(review)
        session.commit()
        session.refresh(review)
        assert review.version == 1


class TestFavoriteModel:
    """Tests for the BeerFavorite model."""

    def test_one_mark_per_user_and_beer(self, session: Session, open_event: Event, beer: EventBeer, alice: Caller):
        session.add(BeerFavorite(event_id=open_event.id, beer_id=beer.id, user_id=alice.user_id))
        session.commit()

        session.add(BeerFavorite(event_id=open_event.id, beer_id=beer.id, user_id=alice.user_id))
        with pytest.raises(IntegrityError):
            session.commit()
