"""Application error hierarchy.

Every error carries the HTTP status it renders as. Handlers registered in
``ecobite.main`` turn them into ``{"error": message}`` responses.
"""

from fastapi import status

AUTH_FAILURE_MESSAGE = "Invalid authentication credentials"


class EcoBiteError(Exception):
    """Base class for errors surfaced at the request boundary."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(EcoBiteError):
    """Required configuration is missing or invalid."""

    default_message = "Server misconfigured"


# --- Tokens ---


class TokenError(EcoBiteError):
    """A bearer token could not be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = AUTH_FAILURE_MESSAGE


class InvalidSignatureError(TokenError):
    """Token signature does not match or the token is malformed."""


class ExpiredTokenError(TokenError):
    """Token is past its expiry."""


# --- Authentication ---


class AuthenticationError(EcoBiteError):
    """Request is not authenticated.

    Subclasses share one message so callers cannot tell an absent credential
    from a malformed or expired one.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = AUTH_FAILURE_MESSAGE

    def __init__(self) -> None:
        super().__init__(AUTH_FAILURE_MESSAGE)


class MissingCredentialError(AuthenticationError):
    pass


class InvalidCredentialError(AuthenticationError):
    pass


class InvalidLoginError(EcoBiteError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


# --- Client errors ---


class ValidationError(EcoBiteError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidOrExpiredCodeError(ValidationError):
    default_message = "Invalid or expired verification code"


class ConflictError(EcoBiteError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class DuplicateEmailError(ConflictError):
    default_message = "Email already registered"


class AlreadyDonatedError(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already donated"


class NotFoundError(EcoBiteError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Item not found"


# --- Collaborators ---


class DependencyError(EcoBiteError):
    default_message = "Upstream dependency failed"


class DeliveryError(DependencyError):
    default_message = "Email sending failed"
