"""Beer model for the beers poured at an event."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class EventBeer(SQLModel, table=True):
    """A beer logged at an event.

    Beers belong to exactly one event and are not deduplicated: the same
    beer may be logged twice, for example when two bottles of different
    vintages are tasted.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the parent Event (cascade on delete).
        name: Beer name.
        brewery: Brewery name, if known.
        style: Beer style, if known.
        abv: Alcohol by volume in percent, if known.
        created_utc: When the beer was logged.
    """
    __tablename__ = "event_beer"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=200)
    brewery: str | None = Field(default=None, max_length=200)
    style: str | None = Field(default=None, max_length=100)
    abv: float | None = None
    created_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
