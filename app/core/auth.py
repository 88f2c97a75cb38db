# app/core/auth.py
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.session import UserSession
from app.models.user import User
from app.repositories.session_repo import SessionRepository
from app.services.session_service import SessionService, SessionValidation

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately,
#   the session cookie is the primary transport.
bearer_scheme = HTTPBearer(auto_error=False)

session_service = SessionService(SessionRepository())

UNAUTHORIZED_MESSAGE = "Unauthorized - please log in"
FORBIDDEN_MESSAGE = "Forbidden - admin access required"


@dataclass(frozen=True)
class AuthContext:
    """Authenticated caller: the user row and the session that proved it."""

    user: User
    session: UserSession


def extract_session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """
    Pull the session token from the request.

    Order:
      1. `session_token` cookie (documented transport).
      2. `Authorization: Bearer <token>` (deprecated, only while
         ALLOW_BEARER_FALLBACK is enabled).
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    if settings.ALLOW_BEARER_FALLBACK and credentials is not None:
        return credentials.credentials or None
    return None


def get_session_validation(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> SessionValidation:
    """
    Resolve the presented token into a SessionValidation.

    Never raises; guards below decide what to do with an invalid result.
    """
    token = extract_session_token(request, credentials)
    return session_service.validate(session, token)


def require_auth(
    validation: SessionValidation = Depends(get_session_validation),
) -> AuthContext:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): missing, unknown, expired or revoked token.
    """
    if not validation.valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_MESSAGE,
        )
    return AuthContext(user=validation.user, session=validation.session)


def require_admin(auth: AuthContext = Depends(require_auth)) -> AuthContext:
    """
    Enforce admin privilege.

    require_auth runs first, so an unauthenticated caller gets its 401
    unchanged and the privilege check is never evaluated.

    Raises:
        HTTPException(403): if user.is_admin is false.
    """
    if not auth.user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=FORBIDDEN_MESSAGE,
        )
    return auth


# -------- Cookie helpers --------


def set_session_cookie(response: Response, token: str) -> None:
    """Set the HttpOnly session cookie (30 days by default)."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        path="/",
        max_age=settings.SESSION_TTL_DAYS * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value="",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        path="/",
        max_age=0,
    )
