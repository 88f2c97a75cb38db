# app/services/session_service.py
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlmodel import Session

from app.core.config import get_settings
from app.models.session import UserSession
from app.models.user import User
from app.repositories.session_repo import SessionRepository

settings = get_settings()

TOKEN_BYTES = 32

REASON_MISSING = "missing"
REASON_INVALID = "invalid/expired"


def generate_token() -> str:
    """64 hex chars from 32 CSPRNG bytes."""
    return secrets.token_hex(TOKEN_BYTES)


@dataclass(frozen=True)
class SessionValidation:
    """
    Outcome of a session lookup.

    valid=True  -> user and session are set
    valid=False -> reason is "missing" or "invalid/expired"
    """

    valid: bool
    user: User | None = None
    session: UserSession | None = None
    reason: str | None = None


class SessionService:
    """
    Issues and validates opaque login session tokens.

    Token lifecycle:
      issued -> valid (now < expires_at, row present)
             -> expired (detected lazily at validate time)
             -> revoked (row deleted by logout / password reset)
    """

    def __init__(self, repo: SessionRepository):
        self.repo = repo

    def issue(self, session: Session, user_id: int) -> str:
        """
        Create a new session row for user_id and return its token.

        Existing sessions of the user are left untouched.
        """
        token = generate_token()
        expires_at = datetime.now(timezone.utc) + timedelta(days=settings.SESSION_TTL_DAYS)
        self.repo.create(session, user_id, token, expires_at)
        return token

    def validate(self, session: Session, token: str | None) -> SessionValidation:
        if not token:
            return SessionValidation(valid=False, reason=REASON_MISSING)

        row = self.repo.get_active_with_user(session, token, datetime.now(timezone.utc))
        if row is None:
            return SessionValidation(valid=False, reason=REASON_INVALID)

        user_session, user = row
        return SessionValidation(valid=True, user=user, session=user_session)

    def revoke(self, session: Session, token: str) -> None:
        self.repo.delete_by_token(session, token)

    def revoke_all(
        self,
        session: Session,
        user_id: int,
        keep_token: str | None = None,
    ) -> int:
        return self.repo.delete_for_user(session, user_id, keep_token=keep_token)
