"""Join code generation.

Codes are typed in by people reading them off a phone or a whiteboard, so
the alphabet leaves out characters that are easy to confuse (0/O, 1/I).
"""
import logging
import secrets

from sqlmodel import Session, select

from app.core.config import settings
from app.models import Event
from app.tasting.errors import JoinCodeExhaustedError

logger = logging.getLogger(__name__)

JOIN_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def random_join_code(length: int | None = None) -> str:
    """Draw a code from JOIN_CODE_ALPHABET without checking uniqueness."""
    length = length or settings.join_code_length
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))


def join_code_in_use(session: Session, code: str) -> bool:
    return session.exec(select(Event.id).where(Event.join_code == code)).first() is not None


def generate_join_code(session: Session) -> str:
    """
    Return a code not used by any existing event.

    Retries up to settings.join_code_max_attempts times. Running out means
    something is badly wrong (the code space is about 10^12), so it is
    raised as a fatal error instead of a client error.
    """
    for attempt in range(1, settings.join_code_max_attempts + 1):
        code = random_join_code()
        if not join_code_in_use(session, code):
            return code
        logger.warning(f"Join code collision on attempt {attempt}")

    logger.error(f"No free join code after {settings.join_code_max_attempts} attempts")
    raise JoinCodeExhaustedError("Could not generate a unique join code")
