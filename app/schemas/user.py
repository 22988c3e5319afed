"""
User-related Pydantic schemas
"""

from uuid import UUID

from app.models import User
from app.schemas.common import CamelModel


class CurrentUserResponse(CamelModel):
    """The authenticated caller"""
    id: UUID
    subject: str
    email: str | None
    nickname: str | None
    is_admin: bool

    @classmethod
    def build(cls, user: User, is_admin: bool) -> "CurrentUserResponse":
        return cls(
            id=user.id,
            subject=user.subject,
            email=user.email,
            nickname=user.nickname,
            is_admin=is_admin,
        )


class UpdateProfileRequest(CamelModel):
    """Schema for editing the caller's profile"""
    nickname: str | None = None
