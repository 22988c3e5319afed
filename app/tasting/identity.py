"""Identity resolution: external subject to internal user row."""
import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models import User
from app.tasting.validation import clean_text, raise_if_errors

logger = logging.getLogger(__name__)

NICKNAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 320


@dataclass(frozen=True)
class ExternalIdentity:
    """What the identity proxy vouches for on a request."""
    subject: str
    email: str | None = None
    nickname: str | None = None
    scopes: frozenset[str] = field(default_factory=frozenset)


@dataclass
class Caller:
    """The resolved caller of a request."""
    user: User
    is_admin: bool = False

    def __post_init__(self):
        # Captured once: the user row may be expired by a later rollback
        self.user_id: UUID = self.user.id


def parse_scopes(raw: str | None) -> frozenset[str]:
    """Split a scope header on spaces and commas."""
    if not raw:
        return frozenset()
    return frozenset(s for s in re.split(r"[\s,]+", raw) if s)


def _find_by_subject(session: Session, subject: str) -> User | None:
    return session.exec(select(User).where(User.subject == subject)).first()


def _clip(value: str | None, max_length: int) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value[:max_length] or None


def resolve_user(session: Session, identity: ExternalIdentity) -> User:
    """
    Ensure a user row exists for the identity and mark it as seen.

    Unknown subjects get a new row seeded with the claimed email and
    nickname. Known subjects get last_seen_utc refreshed, and the email
    replaced when the provider claims a different one; the nickname is left
    alone because users may have changed it through their profile.

    Two first requests for the same subject can race on the unique subject
    index. The loser re-reads the winner's row and carries on with it.
    """
    now = datetime.now(UTC)
    email = _clip(identity.email, EMAIL_MAX_LENGTH)

    user = _find_by_subject(session, identity.subject)
    if user is None:
        user = User(
            subject=identity.subject,
            email=email,
            nickname=_clip(identity.nickname, NICKNAME_MAX_LENGTH),
            created_utc=now,
            last_seen_utc=now,
        )
        session.add(user)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            user = _find_by_subject(session, identity.subject)
            if user is None:
                raise
            logger.info(f"Concurrent first sight of subject {identity.subject}, reusing user {user.id}")
        else:
            session.refresh(user)
            logger.info(f"Created user {user.id} for subject {identity.subject}")
            return user

    user.last_seen_utc = now
    if email and email != user.email:
        user.email = email
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def update_nickname(session: Session, caller: Caller, nickname: str | None) -> User:
    """Set the caller's nickname (trimmed, 1..100 characters)."""
    errors: dict[str, str] = {}
    cleaned = clean_text(nickname, "nickname", NICKNAME_MAX_LENGTH, errors, required=True)
    raise_if_errors(errors)

    user = session.get(User, caller.user_id)
    user.nickname = cleaned
    user.last_seen_utc = datetime.now(UTC)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
