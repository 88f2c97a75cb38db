# app/schemas/auth.py
from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel


class LoginRequest(SQLModel):
    """
    Credentials for POST /login.

    Fields are optional at the schema level so the service can answer
    with a single "Email and password required" message.
    """

    model_config = ConfigDict(extra="forbid")

    email: str | None = None
    password: str | None = None


class SignupRequest(SQLModel):
    """Payload for POST /signup."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AuthUser(SQLModel):
    """Public view of the logged-in user."""

    id: int
    email: str
    first_name: str
    is_admin: bool = False


class AuthResponse(SQLModel):
    """Returned by login and signup alongside the session cookie."""

    success: bool = True
    token: str
    user: AuthUser


class MessageResponse(SQLModel):
    success: bool = True
    message: str


class ResetRequest(SQLModel):
    """Payload for POST /reset-password/request."""

    model_config = ConfigDict(extra="forbid")

    email: str | None = None


class ResetConfirm(SQLModel):
    """Payload for POST /reset-password/reset."""

    model_config = ConfigDict(extra="forbid")

    token: str | None = None
    new_password: str | None = None
