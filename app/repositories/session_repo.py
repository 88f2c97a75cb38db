# app/repositories/session_repo.py
from datetime import datetime

from sqlalchemy import delete, update
from sqlmodel import Session, select

from app.models.session import PasswordResetToken, UserSession
from app.models.user import User


class SessionRepository:
    """
    Data access layer for login sessions and password reset tokens.

    Every method is a single statement followed by a commit, so there is
    no multi-statement transaction to coordinate.
    """

    # ---- Login sessions ----

    def create(
        self,
        session: Session,
        user_id: int,
        token: str,
        expires_at: datetime,
    ) -> UserSession:
        row = UserSession(user_id=user_id, token=token, expires_at=expires_at)
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    def get_active_with_user(
        self,
        session: Session,
        token: str,
        now: datetime,
    ) -> tuple[UserSession, User] | None:
        """
        Look up an unexpired session by exact token, joined with its user.
        """
        stmt = (
            select(UserSession, User)
            .join(User, User.id == UserSession.user_id)
            .where(UserSession.token == token, UserSession.expires_at > now)
        )
        return session.exec(stmt).first()

    def delete_by_token(self, session: Session, token: str) -> int:
        result = session.execute(delete(UserSession).where(UserSession.token == token))
        session.commit()
        return result.rowcount

    def delete_for_user(
        self,
        session: Session,
        user_id: int,
        keep_token: str | None = None,
    ) -> int:
        """
        Revoke every session of a user, optionally keeping the current one.
        """
        stmt = delete(UserSession).where(UserSession.user_id == user_id)
        if keep_token:
            stmt = stmt.where(UserSession.token != keep_token)
        result = session.execute(stmt)
        session.commit()
        return result.rowcount

    # ---- Password reset tokens ----

    def create_reset_token(
        self,
        session: Session,
        user_id: int,
        token: str,
        expires_at: datetime,
    ) -> PasswordResetToken:
        row = PasswordResetToken(user_id=user_id, token=token, expires_at=expires_at)
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    def get_usable_reset_token(
        self,
        session: Session,
        token: str,
        now: datetime,
    ) -> PasswordResetToken | None:
        stmt = select(PasswordResetToken).where(
            PasswordResetToken.token == token,
            PasswordResetToken.expires_at > now,
            PasswordResetToken.used_at.is_(None),
        )
        return session.exec(stmt).first()

    def mark_reset_token_used(self, session: Session, token: str, now: datetime) -> bool:
        """
        Conditionally mark a reset token as used.

        Returns True only for the caller whose UPDATE actually flipped
        used_at from NULL; concurrent consumers of the same token get False.
        """
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.token == token,
                PasswordResetToken.used_at.is_(None),
                PasswordResetToken.expires_at > now,
            )
            .values(used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = session.execute(stmt)
        session.commit()
        return result.rowcount == 1
