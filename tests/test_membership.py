"""Tests for joining events and managing participants."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models import Event, EventParticipant, ParticipantRole, ParticipantStatus
from app.tasting import lifecycle, membership
from app.tasting.access import find_participant
from app.tasting.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError
from app.tasting.identity import Caller


class TestJoinEvent:
    """Tests for joining with a join code."""

    def test_join_with_code(self, session: Session, open_event: Event, bob: Caller):
        result = membership.join_event(session, bob, open_event.id, open_event.join_code)

        assert result.joined is True
        participant = find_participant(session, open_event.id, bob.user_id)
        assert participant.role == ParticipantRole.MEMBER
        assert participant.status == ParticipantStatus.ACTIVE

    def test_code_is_case_insensitive(self, session: Session, open_event: Event, bob: Caller):
        result = membership.join_event(session, bob, open_event.id, f" {open_event.join_code.lower()} ")
        assert result.joined is True

    def test_join_twice_is_idempotent(self, session: Session, open_event: Event, bob: Caller):
        membership.join_event(session, bob, open_event.id, open_event.join_code)
        result = membership.join_event(session, bob, open_event.id, open_event.join_code)

        assert result.joined is False
        rows = session.exec(
            select(EventParticipant)
            .where(EventParticipant.event_id == open_event.id)
            .where(EventParticipant.user_id == bob.user_id)
        ).all()
        assert len(rows) == 1

    def test_owner_join_reports_already_joined(self, session: Session, open_event: Event, alice: Caller):
        assert membership.join_event(session, alice, open_event.id, "whatever").joined is False

    def test_wrong_code(self, session: Session, open_event: Event, bob: Caller):
        with pytest.raises(ForbiddenError):
            membership.join_event(session, bob, open_event.id, "WRONG")

    def test_closed_event(self, session: Session, open_event: Event, alice: Caller, bob: Caller):
        lifecycle.change_status(session, alice, open_event.id, "closed")
        with pytest.raises(ConflictError):
            membership.join_event(session, bob, open_event.id, open_event.join_code)

    def test_missing_event(self, session: Session, bob: Caller):
        with pytest.raises(NotFoundError):
            membership.join_event(session, bob, uuid4(), "ABCD1234")

    def test_removed_user_cannot_rejoin(self, session: Session, open_event: Event, alice: Caller, bob: Caller):
        membership.join_event(session, bob, open_event.id, open_event.join_code)
        membership.remove_participant(session, alice, open_event.id, bob.user_id)

        with pytest.raises(ForbiddenError):
            membership.join_event(session, bob, open_event.id, open_event.join_code)

    def test_invited_row_is_activated(self, session: Session, open_event: Event, bob: Caller):
        session.add(
            EventParticipant(
                event_id=open_event.id,
                user_id=bob.user_id,
                status=ParticipantStatus.INVITED,
            )
        )
        session.commit()

        result = membership.join_event(session, bob, open_event.id, open_event.join_code)

        assert result.joined is True
        assert find_participant(session, open_event.id, bob.user_id).status == ParticipantStatus.ACTIVE

    def test_concurrent_join_is_reconciled(self, session: Session, open_event: Event, bob: Caller, monkeypatch):
        """A row inserted by a concurrent join makes ours a no-op."""
        session.add(
            EventParticipant(
                event_id=open_event.id,
                user_id=bob.user_id,
                status=ParticipantStatus.ACTIVE,
            )
        )
        session.commit()

        real_find = membership.find_participant
        calls = []

        def find_missing_once(session, event_id, user_id):
            calls.append(event_id)
            if len(calls) == 1:
                return None
            return real_find(session, event_id, user_id)

        monkeypatch.setattr(membership, "find_participant", find_missing_once)

        result = membership.join_event(session, bob, open_event.id, open_event.join_code)
        assert result.joined is False

    def test_concurrent_removal_propagates(self, session: Session, open_event: Event, bob: Caller, monkeypatch):
        """A conflicting row that is not ACTIVE cannot be reconciled."""
        session.add(
            EventParticipant(
                event_id=open_event.id,
                user_id=bob.user_id,
                status=ParticipantStatus.REMOVED,
            )
        )
        session.commit()

        real_find = membership.find_participant
        calls = []

        def find_missing_once(session, event_id, user_id):
            calls.append(event_id)
            if len(calls) == 1:
                return None
            return real_find(session, event_id, user_id)

        monkeypatch.setattr(membership, "find_participant", find_missing_once)

        with pytest.raises(IntegrityError):
            membership.join_event(session, bob, open_event.id, open_event.join_code)


class TestRemoveAndRestore:
    """Tests for manager-only participant changes."""

    @pytest.fixture(autouse=True)
    def bob_joined(self, session: Session, open_event: Event, bob: Caller):
        membership.join_event(session, bob, open_event.id, open_event.join_code)

    def test_remove_sets_status_and_bumps_event(self, session: Session, open_event: Event, alice: Caller, bob: Caller):
        before = session.get(Event, open_event.id).updated_utc

        membership.remove_participant(session, alice, open_event.id, bob.user_id)

        participant = find_participant(session, open_event.id, bob.user_id)
        assert participant.status == ParticipantStatus.REMOVED
        assert participant.removed_utc is not None
        assert session.get(Event, open_event.id).updated_utc >= before

    def test_remove_twice_is_a_no_op(self, session: Session, open_event: Event, alice: Caller, bob: Caller):
        membership.remove_participant(session, alice, open_event.id, bob.user_id)
        removed_at = find_participant(session, open_event.id, bob.user_id).removed_utc

        membership.remove_participant(session, alice, open_event.id, bob.user_id)
        assert find_participant(session, open_event.id, bob.user_id).removed_utc == removed_at

    def test_owner_cannot_be_removed(self, session: Session, open_event: Event, alice: Caller):
        with pytest.raises(ValidationFailedError) as exc_info:
            membership.remove_participant(session, alice, open_event.id, alice.user_id)
        assert "userId" in exc_info.value.errors

    def test_owner_cannot_be_restored(self, session: Session, open_event: Event, alice: Caller):
        with pytest.raises(ValidationFailedError) as exc_info:
            membership.restore_participant(session, alice, open_event.id, alice.user_id)
        assert "userId" in exc_info.value.errors

    def test_admin_cannot_remove_or_restore_owner(self, session: Session, open_event: Event, alice: Caller, admin: Caller):
        """The owner is off limits even for admins."""
        with pytest.raises(ValidationFailedError):
            membership.remove_participant(session, admin, open_event.id, alice.user_id)
        with pytest.raises(ValidationFailedError):
            membership.restore_participant(session, admin, open_event.id, alice.user_id)

    def test_member_cannot_remove(self, session: Session, open_event: Event, bob: Caller, carol: Caller):
        membership.join_event(session, carol, open_event.id, open_event.join_code)
        with pytest.raises(ForbiddenError):
            membership.remove_participant(session, bob, open_event.id, carol.user_id)

    def test_unknown_participant(self, session: Session, open_event: Event, alice: Caller, carol: Caller):
        with pytest.raises(NotFoundError):
            membership.remove_participant(session, alice, open_event.id, carol.user_id)

    def test_admin_can_remove(self, session: Session, open_event: Event, admin: Caller, bob: Caller):
        membership.remove_participant(session, admin, open_event.id, bob.user_id)
        assert find_participant(session, open_event.id, bob.user_id).status == ParticipantStatus.REMOVED

    def test_restore(self, session: Session, open_event: Event, alice: Caller, bob: Caller):
        membership.remove_participant(session, alice, open_event.id, bob.user_id)
        membership.restore_participant(session, alice, open_event.id, bob.user_id)

        participant = find_participant(session, open_event.id, bob.user_id)
        assert participant.status == ParticipantStatus.ACTIVE
        assert participant.removed_utc is None

    def test_restore_active_participant_is_a_conflict(self, session: Session, open_event: Event, alice: Caller, bob: Caller):
        with pytest.raises(ConflictError):
            membership.restore_participant(session, alice, open_event.id, bob.user_id)
