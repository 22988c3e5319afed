"""Caller resolution from the identity proxy headers.

Login, logout and session cookies are handled by the authenticating proxy
in front of the service. By the time a request reaches us the proxy has
verified the user and forwarded the subject and claims as headers.
"""
from fastapi import Depends, Request
from sqlmodel import Session

from app.core.config import settings
from app.core.database import get_session
from app.tasting.errors import AuthUnavailableError, UnauthenticatedError
from app.tasting.identity import Caller, ExternalIdentity, parse_scopes, resolve_user


def identity_from_request(request: Request) -> ExternalIdentity:
    """Read the proxy headers, raising UnauthenticatedError without a subject."""
    headers = request.headers
    subject = (headers.get(settings.auth_subject_header) or "").strip()
    if not subject:
        raise UnauthenticatedError("Authentication required")

    return ExternalIdentity(
        subject=subject,
        email=headers.get(settings.auth_email_header),
        nickname=headers.get(settings.auth_nickname_header),
        scopes=parse_scopes(headers.get(settings.auth_scopes_header)),
    )


def get_caller(request: Request, session: Session = Depends(get_session)) -> Caller:
    """Dependency resolving the authenticated caller and their user row."""
    if not settings.auth_enabled:
        raise AuthUnavailableError("Authentication is not configured")

    identity = identity_from_request(request)
    user = resolve_user(session, identity)
    return Caller(user=user, is_admin=settings.admin_scope in identity.scopes)
