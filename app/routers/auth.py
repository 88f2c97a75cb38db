# app/routers/auth.py
from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlmodel import Session

from app.core.auth import (
    bearer_scheme,
    clear_session_cookie,
    extract_session_token,
    session_service,
    set_session_cookie,
)
from app.database import get_session
from app.repositories.session_repo import SessionRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    MessageResponse,
    ResetConfirm,
    ResetRequest,
    SignupRequest,
)
from app.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])

service = AuthService(UserRepository(), SessionRepository(), session_service)


def _auth_response(response: Response, token: str, user) -> AuthResponse:
    set_session_cookie(response, token)
    return AuthResponse(
        token=token,
        user=AuthUser.model_validate(user, from_attributes=True),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    """
    Email + password login.

    Sets the HttpOnly session cookie. The token is also returned in the
    body for clients still on the bearer header.
    """
    token, user = service.login(session, payload)
    return _auth_response(response, token, user)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    """
    Create an account and log it in.
    """
    token, user = service.signup(session, payload)
    return _auth_response(response, token, user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
):
    """
    Always succeeds; deletes the presented session and clears the cookie.
    """
    service.logout(session, extract_session_token(request, credentials))
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


# -------- Password reset --------


@router.post("/reset-password/request", response_model=MessageResponse)
def request_password_reset(
    payload: ResetRequest,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
):
    """
    Send a reset link if the account exists. Same answer either way.
    """
    message = service.request_password_reset(session, payload, background_tasks)
    return MessageResponse(message=message)


@router.post("/reset-password/reset", response_model=MessageResponse)
def reset_password(
    payload: ResetConfirm,
    session: Session = Depends(get_session),
):
    """
    Consume a reset token and set a new password.

    Every session of the user is revoked; the client must log in again.
    """
    service.reset_password(session, payload)
    return MessageResponse(message="Password has been reset. Please log in.")
