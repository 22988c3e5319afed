from app.models.beer import EventBeer
from app.models.event import Event, EventStatus, EventVisibility
from app.models.favorite import BeerFavorite
from app.models.participant import EventParticipant, ParticipantRole, ParticipantStatus
from app.models.review import BeerReview
from app.models.user import User

__all__ = [
    "User",
    "Event",
    "EventStatus",
    "EventVisibility",
    "EventParticipant",
    "ParticipantRole",
    "ParticipantStatus",
    "EventBeer",
    "BeerReview",
    "BeerFavorite",
]
