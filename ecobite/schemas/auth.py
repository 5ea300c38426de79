"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SendCodeRequest(BaseModel):
    """Request a verification code by email."""

    email: EmailStr = Field(..., max_length=255)


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    verification_code: str = Field(..., alias="verificationCode", min_length=1, max_length=6)

    model_config = ConfigDict(populate_by_name=True)


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    token: str
    user: UserResponse


class RegisterResponse(AuthResponse):
    message: str = "Registered successfully"


class MessageResponse(BaseModel):
    message: str


class SessionResponse(BaseModel):
    """Whether the caller is signed in."""

    authenticated: bool
    user: UserResponse | None = None
    expires_at: int | None = None
