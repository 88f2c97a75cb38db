# app/services/auth_service.py
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.passwords import hash_password, is_encodable, needs_rehash, verify_password
from app.models.user import User
from app.repositories.session_repo import SessionRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import LoginRequest, ResetConfirm, ResetRequest, SignupRequest
from app.schemas.account import ChangePasswordRequest
from app.services.notification_service import send_password_reset_email
from app.services.session_service import SessionService, generate_token

settings = get_settings()

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid email or password"
INVALID_RESET_TOKEN = "Invalid or expired reset token"
RESET_REQUESTED = "If that email exists, a reset link has been sent"


@lru_cache
def _dummy_credential() -> str:
    """Credential verified against when the email is unknown (equalizes timing)."""
    return hash_password("not-a-real-password")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _check_new_password(password: str) -> None:
    if not is_encodable(password):
        raise _bad_request("Password contains invalid characters")
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        raise _bad_request(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
        )


class AuthService:
    """
    Credential flows: login, signup, logout, password reset, password change.

    Responsibilities:
      - input validation with fixed, user-facing messages
      - credential hashing / verification (never re-derived per endpoint)
      - session issuing and revocation via SessionService
      - non-distinguishing errors for login and reset
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        sessions: SessionService,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.sessions = sessions

    # ----- Login / signup -----

    def login(self, session: Session, payload: LoginRequest) -> tuple[str, User]:
        """
        Verify credentials and open a new session.

        Unknown email and wrong password produce the same 401.
        Legacy or weak credentials are re-hashed after a successful check.
        """
        if not payload.email or not payload.password:
            raise _bad_request("Email and password required")

        user = self.user_repo.get_by_email(session, normalize_email(payload.email))
        if user is None:
            verify_password(payload.password, _dummy_credential())
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_LOGIN,
            )

        if not verify_password(payload.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_LOGIN,
            )

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(payload.password)
            user = self.user_repo.update(session, user)
            logger.info("Upgraded password credential for user %s", user.id)

        token = self.sessions.issue(session, user.id)
        return token, user

    def signup(self, session: Session, payload: SignupRequest) -> tuple[str, User]:
        """
        Create an account (credential hashed at write time) and log it in.
        """
        first_name = (payload.first_name or "").strip()
        if not payload.email or not payload.password or not first_name:
            raise _bad_request("Email, password, and first name required")

        _check_new_password(payload.password)

        email = normalize_email(payload.email)
        if self.user_repo.get_by_email(session, email) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )

        last_name = (payload.last_name or "").strip() or None
        user = User(
            email=email,
            password_hash=hash_password(payload.password),
            first_name=first_name,
            last_name=last_name,
        )
        try:
            user = self.user_repo.create(session, user)
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email.
            session.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )

        token = self.sessions.issue(session, user.id)
        return token, user

    def logout(self, session: Session, token: str | None) -> None:
        """
        Delete the presented session if any.

        A store failure is logged and ignored: the cookie is cleared anyway.
        """
        if not token:
            return
        try:
            self.sessions.revoke(session, token)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Failed to delete session on logout")

    # ----- Password reset -----

    def request_password_reset(
        self,
        session: Session,
        payload: ResetRequest,
        background_tasks: BackgroundTasks,
    ) -> str:
        """
        Create a reset token and email it, if the account exists.

        The response is identical either way (anti-enumeration).
        """
        if not payload.email or not payload.email.strip():
            raise _bad_request("Email required")

        user = self.user_repo.get_by_email(session, normalize_email(payload.email))
        if user is None:
            return RESET_REQUESTED

        token = generate_token()
        expires_at = datetime.now(timezone.utc) + timedelta(
            minutes=settings.RESET_TOKEN_TTL_MINUTES
        )
        self.session_repo.create_reset_token(session, user.id, token, expires_at)
        logger.info("Password reset requested for user %s", user.id)

        background_tasks.add_task(
            send_password_reset_email, user.email, user.first_name, token
        )
        return RESET_REQUESTED

    def reset_password(self, session: Session, payload: ResetConfirm) -> None:
        """
        Consume a reset token, store the new credential and revoke every
        session of the user.

        The token is claimed with a conditional UPDATE (used_at IS NULL),
        so of two concurrent resets with the same token only one succeeds.
        """
        if not payload.token or not payload.new_password:
            raise _bad_request("Token and new password required")

        _check_new_password(payload.new_password)

        now = datetime.now(timezone.utc)
        reset = self.session_repo.get_usable_reset_token(session, payload.token, now)
        if reset is None:
            raise _bad_request(INVALID_RESET_TOKEN)

        user_id = reset.user_id
        if not self.session_repo.mark_reset_token_used(session, payload.token, now):
            raise _bad_request(INVALID_RESET_TOKEN)

        user = self.user_repo.get_by_id(session, user_id)
        if user is None:
            raise _bad_request(INVALID_RESET_TOKEN)

        user.password_hash = hash_password(payload.new_password)
        self.user_repo.update(session, user)

        revoked = self.sessions.revoke_all(session, user_id)
        logger.info("Password reset for user %s, %d sessions revoked", user_id, revoked)

    # ----- Password change (authenticated) -----

    def change_password(
        self,
        session: Session,
        user: User,
        current_token: str,
        payload: ChangePasswordRequest,
    ) -> None:
        """
        Replace the credential after checking the current password.

        Other sessions of the user are revoked; the current one survives.
        """
        if not payload.current_password or not payload.new_password:
            raise _bad_request("Missing required fields")

        if not verify_password(payload.current_password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Current password is incorrect",
            )

        _check_new_password(payload.new_password)

        user.password_hash = hash_password(payload.new_password)
        self.user_repo.update(session, user)
        self.sessions.revoke_all(session, user.id, keep_token=current_token)
