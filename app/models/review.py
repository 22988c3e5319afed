"""Review model for per-user scores of a beer.

A user reviews a given beer at a given event at most once; later changes
update the same row. The version column is the optimistic concurrency
token: every write compares the version it read and increments it, so two
clients racing on the same review cannot silently overwrite each other.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel

MIN_SCORE = 1
MAX_SCORE = 6

SCORE_FIELDS = ("color_score", "smell_score", "taste_score", "total_score")


class BeerReview(SQLModel, table=True):
    """One user's review of one beer at one event.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the Event (cascade on delete).
        beer_id: Foreign key to the EventBeer (cascade on delete).
        user_id: Foreign key to the reviewing User (restrict on delete).
        color_score, smell_score, taste_score, total_score: Scores 1..6.
        notes: Free-text notes, up to 2000 characters.
        aroma_notes, appearance_notes, flavor_notes: Per-dimension notes,
            up to 1000 characters each.
        created_utc: When the review was first submitted.
        updated_utc: When the review last changed.
        version: Concurrency token, starts at 1 and grows with each write.
    """
    __tablename__ = "beer_review"
    __table_args__ = (
        UniqueConstraint("event_id", "beer_id", "user_id", name="uq_beer_review_event_beer_user"),
        *(
            CheckConstraint(
                f"{name} >= {MIN_SCORE} AND {name} <= {MAX_SCORE}",
                name=f"ck_beer_review_{name}",
            )
            for name in SCORE_FIELDS
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", ondelete="CASCADE", index=True)
    beer_id: UUID = Field(foreign_key="event_beer.id", ondelete="CASCADE", index=True)
    user_id: UUID = Field(foreign_key="app_user.id", ondelete="RESTRICT", index=True)
    color_score: int
    smell_score: int
    taste_score: int
    total_score: int
    notes: str | None = Field(default=None, max_length=2000)
    aroma_notes: str | None = Field(default=None, max_length=1000)
    appearance_notes: str | None = Field(default=None, max_length=1000)
    flavor_notes: str | None = Field(default=None, max_length=1000)
    created_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_utc: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: int = Field(default=1)
