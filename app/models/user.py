"""User model for people known to the tasting service.

Users are never registered explicitly. The identity proxy in front of the
service verifies the caller and forwards an external subject identifier;
the first request carrying an unknown subject creates the row.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """An authenticated person, keyed internally by a UUID.

    Attributes:
        id: Internal identifier (UUID), referenced by every other table.
        subject: External subject identifier from the identity provider.
            Unique and never changed once stored.
        email: Email address claimed by the identity provider, if any.
        nickname: Display name. Seeded from the provider on first sight,
            afterwards only changed through the profile endpoint.
        created_utc: When the user was first seen.
        last_seen_utc: Refreshed on every authenticated request.
    """
    __tablename__ = "app_user"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    subject: str = Field(max_length=200, index=True, unique=True)
    email: str | None = Field(default=None, max_length=320)
    nickname: str | None = Field(default=None, max_length=100)
    created_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_seen_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
