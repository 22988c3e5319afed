from app.schemas.beer import BeerCreate, BeerResponse, FavoriteBeerResponse
from app.schemas.common import CamelModel, ErrorResponse, HealthResponse
from app.schemas.event import (
    EventCreate,
    EventDetail,
    EventStatusUpdate,
    EventSummary,
    JoinRequest,
    JoinResponse,
    ParticipantResponse,
)
from app.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from app.schemas.user import CurrentUserResponse, UpdateProfileRequest

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    "CurrentUserResponse",
    "UpdateProfileRequest",
    "EventCreate",
    "EventDetail",
    "EventStatusUpdate",
    "EventSummary",
    "JoinRequest",
    "JoinResponse",
    "ParticipantResponse",
    "BeerCreate",
    "BeerResponse",
    "FavoriteBeerResponse",
    "ReviewCreate",
    "ReviewResponse",
    "ReviewUpdate",
]
