"""Email one-time codes used to prove address ownership before registration."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecobite.config import Settings
from ecobite.errors import DeliveryError, DependencyError, InvalidOrExpiredCodeError
from ecobite.models.verification_code import VerificationCode
from ecobite.services.mailer import Mailer

logger = logging.getLogger(__name__)

CODE_MIN = 100000
CODE_MAX = 999999


def generate_code() -> str:
    """Uniformly random 6-digit code in [100000, 999999]."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def _build_code_email(code: str, expire_minutes: int) -> str:
    return f"<h1>{code}</h1><p>Expires in {expire_minutes} minutes.</p>"


class OTCService:
    """Issues and checks verification codes.

    Issuing a code does not revoke earlier ones: every unexpired, unused code
    for an email stays valid until it is consumed.
    """

    SUBJECT = "Your EcoBite Verification Code"

    def __init__(self, db: Session, settings: Settings, mailer: Mailer):
        self.db = db
        self.mailer = mailer
        self.expire_minutes = settings.verification_code_expire_minutes

    def send_code(self, email: str) -> VerificationCode:
        """Store a fresh code for the email and mail it out.

        Raises:
            DependencyError: the code could not be stored
            DeliveryError: the mail transport refused the message
        """
        code = generate_code()
        record = VerificationCode(
            email=email,
            code=code,
            expires_at=datetime.now(UTC) + timedelta(minutes=self.expire_minutes),
        )
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store verification code: {type(e).__name__}")
            raise DependencyError("Could not store verification code") from e
        self.db.refresh(record)

        body = _build_code_email(code, self.expire_minutes)
        if not self.mailer.deliver(email, self.SUBJECT, body):
            logger.warning(f"Verification code {record.id} was stored but not delivered")
            raise DeliveryError()

        logger.info(f"Verification code {record.id} sent")
        return record

    def validate_and_consume(self, email: str, submitted_code: str) -> VerificationCode:
        """Mark the newest live code matching the submission as used.

        Consumption is a conditional UPDATE flushed into the current
        transaction; the caller commits or rolls back.

        Raises:
            InvalidOrExpiredCodeError: no unexpired, unused code matches
        """
        now = datetime.now(UTC)
        record = (
            self.db.query(VerificationCode)
            .filter(
                VerificationCode.email == email,
                VerificationCode.code == submitted_code,
                VerificationCode.consumed_at.is_(None),
                VerificationCode.expires_at > now,
            )
            .order_by(VerificationCode.id.desc())
            .first()
        )
        if record is None:
            logger.info("Verification code rejected")
            raise InvalidOrExpiredCodeError()

        consumed = (
            self.db.query(VerificationCode)
            .filter(
                VerificationCode.id == record.id,
                VerificationCode.consumed_at.is_(None),
            )
            .update({VerificationCode.consumed_at: now}, synchronize_session=False)
        )
        if consumed != 1:
            # Another request spent it between the read and the write
            logger.info(f"Verification code {record.id} already consumed")
            raise InvalidOrExpiredCodeError()

        logger.info(f"Verification code {record.id} accepted")
        return record


def purge_expired_codes(db: Session, retention: timedelta) -> int:
    """Delete codes issued before the retention horizon."""
    cutoff = datetime.now(UTC) - retention
    deleted = (
        db.query(VerificationCode)
        .filter(VerificationCode.created_at < cutoff)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted
