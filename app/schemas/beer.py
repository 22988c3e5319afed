"""
Beer and favorite Pydantic schemas
"""

from datetime import datetime
from uuid import UUID

from app.models import EventBeer, EventStatus
from app.schemas.common import CamelModel
from app.tasting.favorites import FavoriteSummary


class BeerCreate(CamelModel):
    """Schema for logging a beer"""
    name: str | None = None
    brewery: str | None = None
    style: str | None = None
    abv: float | None = None


class BeerResponse(CamelModel):
    id: UUID
    event_id: UUID
    name: str
    brewery: str | None
    style: str | None
    abv: float | None
    created_utc: datetime

    @classmethod
    def build(cls, beer: EventBeer) -> "BeerResponse":
        return cls(
            id=beer.id,
            event_id=beer.event_id,
            name=beer.name,
            brewery=beer.brewery,
            style=beer.style,
            abv=beer.abv,
            created_utc=beer.created_utc,
        )


class FavoriteBeerResponse(CamelModel):
    """A favorite with enough event and beer context to render on its own"""
    event_id: UUID
    event_name: str
    event_status: EventStatus
    beer_id: UUID
    beer_name: str
    brewery: str | None
    style: str | None
    abv: float | None
    favorited_utc: datetime

    @classmethod
    def build(cls, summary: FavoriteSummary) -> "FavoriteBeerResponse":
        return cls(
            event_id=summary.event_id,
            event_name=summary.event_name,
            event_status=summary.event_status,
            beer_id=summary.beer_id,
            beer_name=summary.beer_name,
            brewery=summary.brewery,
            style=summary.style,
            abv=summary.abv,
            favorited_utc=summary.favorited_utc,
        )
