"""Pydantic schemas for API requests and responses."""

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
from ecobite.schemas.inventory import ItemDraft, ItemResponse
from ecobite.schemas.notification import NotificationResponse
from ecobite.schemas.report import ReportSummary

__all__ = [
    "SendCodeRequest",
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "RegisterResponse",
    "MessageResponse",
    "SessionResponse",
    "ItemDraft",
    "ItemResponse",
    "NotificationResponse",
    "ReportSummary",
]
