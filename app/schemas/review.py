"""
Review Pydantic schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import StrictInt

from app.models import BeerReview
from app.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    """Schema for submitting a review; all four scores are required"""
    color_score: StrictInt
    smell_score: StrictInt
    taste_score: StrictInt
    total_score: StrictInt
    notes: str | None = None
    aroma_notes: str | None = None
    appearance_notes: str | None = None
    flavor_notes: str | None = None


class ReviewUpdate(CamelModel):
    """Partial review update; omitted fields are left unchanged"""
    color_score: StrictInt | None = None
    smell_score: StrictInt | None = None
    taste_score: StrictInt | None = None
    total_score: StrictInt | None = None
    notes: str | None = None
    aroma_notes: str | None = None
    appearance_notes: str | None = None
    flavor_notes: str | None = None
    version: int | None = None


class ReviewResponse(CamelModel):
    id: UUID
    event_id: UUID
    beer_id: UUID
    user_id: UUID
    color_score: int
    smell_score: int
    taste_score: int
    total_score: int
    notes: str | None
    aroma_notes: str | None
    appearance_notes: str | None
    flavor_notes: str | None
    created_utc: datetime
    updated_utc: datetime
    version: int

    @classmethod
    def build(cls, review: BeerReview) -> "ReviewResponse":
        return cls(
            id=review.id,
            event_id=review.event_id,
            beer_id=review.beer_id,
            user_id=review.user_id,
            color_score=review.color_score,
            smell_score=review.smell_score,
            taste_score=review.taste_score,
            total_score=review.total_score,
            notes=review.notes,
            aroma_notes=review.aroma_notes,
            appearance_notes=review.appearance_notes,
            flavor_notes=review.flavor_notes,
            created_utc=review.created_utc,
            updated_utc=review.updated_utc,
            version=review.version,
        )
