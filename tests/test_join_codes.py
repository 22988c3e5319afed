"""Tests for join code generation."""

import pytest
from sqlmodel import Session

from app.core.config import settings
from app.models import Event
from app.tasting import join_codes
from app.tasting.errors import JoinCodeExhaustedError
from app.tasting.identity import Caller
from app.tasting.join_codes import JOIN_CODE_ALPHABET, generate_join_code, random_join_code


class TestRandomJoinCode:
    def test_length_and_alphabet(self):
        code = random_join_code()
        assert len(code) == settings.join_code_length
        assert set(code) <= set(JOIN_CODE_ALPHABET)

    def test_no_ambiguous_characters(self):
        for character in "01IO":
            assert character not in JOIN_CODE_ALPHABET


class TestGenerateJoinCode:
    """Tests for picking a code no event uses."""

    def test_retries_on_collision(self, session: Session, alice: Caller, monkeypatch):
        session.add(Event(owner_user_id=alice.user_id, name="Taken", join_code="TAKEN234"))
        session.commit()

        codes = iter(["TAKEN234", "TAKEN234", "FRESH234"])
        monkeypatch.setattr(join_codes, "random_join_code", lambda: next(codes))

        assert generate_join_code(session) == "FRESH234"

    def test_exhaustion_is_fatal(self, session: Session, alice: Caller, monkeypatch):
        session.add(Event(owner_user_id=alice.user_id, name="Taken", join_code="TAKEN234"))
        session.commit()
        monkeypatch.setattr(join_codes, "random_join_code", lambda: "TAKEN234")

        with pytest.raises(JoinCodeExhaustedError):
            generate_join_code(session)
