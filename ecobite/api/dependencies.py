"""FastAPI dependencies for authentication, database and services."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ecobite.config import get_settings
from ecobite.database import get_db
from ecobite.errors import (
    AuthenticationError,
    InvalidCredentialError,
    MissingCredentialError,
    TokenError,
)
from ecobite.services.inventory_service import InventoryService
from ecobite.services.mailer import Mailer, get_mailer
from ecobite.services.notification_service import NotificationService
from ecobite.services.otc import OTCService
from ecobite.services.tokens import TokenClaims, TokenService

# Missing header, wrong scheme or empty token all resolve to None
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of checking a request's credential: an identity or an error."""

    identity: TokenClaims | None = None
    error: AuthenticationError | None = None

    @property
    def ok(self) -> bool:
        return self.identity is not None


class AuthGate:
    """Turns bearer credentials into an AuthResult."""

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    def authenticate(self, credentials: HTTPAuthorizationCredentials | None) -> AuthResult:
        token = credentials.credentials.strip() if credentials else ""
        if not token:
            return AuthResult(error=MissingCredentialError())
        try:
            return AuthResult(identity=self.tokens.verify(token))
        except TokenError:
            return AuthResult(error=InvalidCredentialError())


@lru_cache
def get_token_service() -> TokenService:
    """Get the process-wide token service. Raises ConfigurationError without a secret."""
    return TokenService(get_settings())


def get_auth_gate(
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthGate:
    return AuthGate(tokens)


def get_current_identity(
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Require a valid bearer token."""
    result = gate.authenticate(credentials)
    if not result.ok:
        raise result.error
    return result.identity


def get_optional_identity(
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims | None:
    """Identity if a valid bearer token was sent, otherwise None."""
    return gate.authenticate(credentials).identity


def get_mail_backend() -> Mailer:
    """Get the configured mail transport."""
    return get_mailer(get_settings())


def get_otc_service(
    db: Annotated[Session, Depends(get_db)],
    mailer: Annotated[Mailer, Depends(get_mail_backend)],
) -> OTCService:
    """Get verification code service with dependencies."""
    return OTCService(db, get_settings(), mailer)


def get_notification_service(
    db: Annotated[Session, Depends(get_db)],
) -> NotificationService:
    return NotificationService(db)


def get_inventory_service(
    db: Annotated[Session, Depends(get_db)],
) -> InventoryService:
    """Get inventory service with dependencies."""
    return InventoryService(db)


CurrentIdentity = Annotated[TokenClaims, Depends(get_current_identity)]
