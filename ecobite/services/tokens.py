"""Bearer token issuance and verification."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from ecobite.config import Settings
from ecobite.errors import ConfigurationError, ExpiredTokenError, InvalidSignatureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by a bearer token."""

    id: int
    email: str
    issued_at: int
    expires_at: int


class TokenService:
    """Signs and verifies JWT bearer tokens with a single shared secret."""

    def __init__(self, settings: Settings):
        if not settings.jwt_secret:
            logger.error("JWT_SECRET is not configured")
            raise ConfigurationError("JWT_SECRET is not configured")
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self.default_ttl = timedelta(minutes=settings.jwt_expiration_minutes)

    def issue(self, user_id: int, email: str, ttl: timedelta | None = None) -> str:
        """Create a signed token for the given identity."""
        now = datetime.now(UTC).replace(microsecond=0)
        claims = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + (ttl or self.default_ttl),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry, returning the claims.

        Raises:
            ExpiredTokenError: the token is past its expiry
            InvalidSignatureError: the signature does not match or the token is malformed
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise ExpiredTokenError() from None
        except JWTError:
            raise InvalidSignatureError() from None

        try:
            return TokenClaims(
                id=int(payload["sub"]),
                email=payload["email"],
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidSignatureError() from None
