# app/routers/account.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import AuthContext, require_auth, session_service
from app.database import get_session
from app.repositories.address_repo import AddressRepository
from app.repositories.dog_repo import DogRepository
from app.repositories.session_repo import SessionRepository
from app.repositories.user_repo import UserRepository
from app.schemas.account import (
    BillingUpdate,
    ChangePasswordRequest,
    DogDetailsUpdate,
    ProfileResponse,
    ProfileUpdate,
    SavedAddressCreated,
    SavedAddressList,
    SavedAddressPayload,
    SavedAddressRead,
)
from app.schemas.auth import MessageResponse
from app.services.auth_service import AuthService
from app.services.user_service import UserService

router = APIRouter(prefix="/account", tags=["Account"])

user_repo = UserRepository()
service = UserService(user_repo, DogRepository(), AddressRepository())
auth_service = AuthService(user_repo, SessionRepository(), session_service)


# -------- Profile --------


@router.get("/profile", response_model=ProfileResponse)
def read_profile(
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    """
    Profile, certified dogs, order history and saved addresses.
    """
    return service.get_profile(session, auth.user)


@router.put("/update", response_model=MessageResponse)
def update_profile(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    service.update_profile(session, auth.user, payload)
    return MessageResponse(message="Profile updated successfully")


@router.put("/update-billing", response_model=MessageResponse)
def update_billing(
    payload: BillingUpdate,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    service.update_billing(session, auth.user, payload)
    return MessageResponse(message="Billing information updated successfully")


@router.put("/update-dog", response_model=MessageResponse)
def update_dog(
    payload: DogDetailsUpdate,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    """
    Edit breed / weight / height / eye color / birthday of an owned dog.
    """
    service.update_dog(session, auth.user, payload)
    return MessageResponse(message="Dog information updated successfully")


# -------- Saved addresses --------


@router.get("/saved-addresses", response_model=SavedAddressList)
def list_saved_addresses(
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    addresses = service.list_addresses(session, auth.user)
    return SavedAddressList(
        addresses=[SavedAddressRead.model_validate(a, from_attributes=True) for a in addresses]
    )


@router.post("/saved-address", response_model=SavedAddressCreated)
def add_saved_address(
    payload: SavedAddressPayload,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    address = service.add_address(session, auth.user, payload)
    return SavedAddressCreated(message="Address saved successfully", id=address.id)


@router.put("/saved-address", response_model=MessageResponse)
def update_saved_address(
    payload: SavedAddressPayload,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    service.update_address(session, auth.user, payload)
    return MessageResponse(message="Address updated successfully")


@router.delete("/saved-address", response_model=MessageResponse)
def delete_saved_address(
    payload: SavedAddressPayload,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    service.delete_address(session, auth.user, payload)
    return MessageResponse(message="Address deleted successfully")


# -------- Password --------


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    """
    Replace the password. Other sessions are logged out, this one stays.
    """
    auth_service.change_password(session, auth.user, auth.session.token, payload)
    return MessageResponse(message="Password changed successfully")
