"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ecobite.api.dependencies import (
    CurrentIdentity,
    get_optional_identity,
    get_otc_service,
    get_token_service,
)
from ecobite.database import get_db
from ecobite.schemas.auth import (
    AuthResponse,
    MessageResponse,
    RegisterResponse,
    SendCodeRequest,
    SessionResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from ecobite.services.auth import authenticate_user, register_user
from ecobite.services.otc import OTCService
from ecobite.services.tokens import TokenClaims, TokenService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/send-code", response_model=MessageResponse)
def send_code(
    request: SendCodeRequest,
    otc_service: Annotated[OTCService, Depends(get_otc_service)],
):
    """Email a verification code needed to register."""
    otc_service.send_code(request.email)
    return MessageResponse(message="Verification code sent")


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    otc_service: Annotated[OTCService, Depends(get_otc_service)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Register a new user with a verification code."""
    user = register_user(
        db, otc_service, user_data.email, user_data.password, user_data.verification_code
    )
    return RegisterResponse(
        token=tokens.issue(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    return AuthResponse(
        token=tokens.issue(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(identity: CurrentIdentity):
    """Get the identity carried by the bearer token."""
    return UserResponse(id=identity.id, email=identity.email)


@router.get("/session", response_model=SessionResponse)
def get_session(
    identity: Annotated[TokenClaims | None, Depends(get_optional_identity)],
):
    """Report whether the request carries a valid token. Never fails."""
    if identity is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(
        authenticated=True,
        user=UserResponse(id=identity.id, email=identity.email),
        expires_at=identity.expires_at,
    )
