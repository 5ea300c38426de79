"""Authentication service for password handling and user accounts."""

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ecobite.errors import DuplicateEmailError, InvalidLoginError
from ecobite.models.user import User
from ecobite.services.otc import OTCService

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Raises:
        InvalidLoginError: unknown email or wrong password
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login rejected")
        raise InvalidLoginError()
    return user


def register_user(
    db: Session, otc_service: OTCService, email: str, password: str, verification_code: str
) -> User:
    """Create an account once the emailed code checks out.

    The code is consumed and the user inserted in one transaction, so a
    rejected registration leaves the code usable.

    Raises:
        InvalidOrExpiredCodeError: no live code matches
        DuplicateEmailError: the email already has an account
    """
    try:
        otc_service.validate_and_consume(email, verification_code)

        if get_user_by_email(db, email):
            raise DuplicateEmailError()

        user = User(email=email, password_hash=get_password_hash(password))
        db.add(user)
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateEmailError() from None
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
