"""Favorite model for beers a user has marked."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import Field, SQLModel


class BeerFavorite(SQLModel, table=True):
    """A (user, beer) favorite mark.

    Favorites are hard-deleted when unmarked. The event reference is kept
    alongside the beer so listings can be scoped by the user's current
    access to the event without joining through the beer.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Event the beer belongs to (cascade on delete).
        beer_id: The favorited beer (cascade on delete).
        user_id: Owner of the mark (restrict on delete).
        created_utc: When the beer was favorited.
    """
    __tablename__ = "beer_favorite"
    __table_args__ = (
        UniqueConstraint("user_id", "beer_id", name="uq_beer_favorite_user_beer"),
        Index("ix_beer_favorite_event_user", "event_id", "user_id"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", ondelete="CASCADE")
    beer_id: UUID = Field(foreign_key="event_beer.id", ondelete="CASCADE", index=True)
    user_id: UUID = Field(foreign_key="app_user.id", ondelete="RESTRICT", index=True)
    created_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
