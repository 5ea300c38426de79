"""Verification code model for the email one-time-code flow."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Index, Integer, String

from ecobite.database import Base


class VerificationCode(Base):
    """A 6-digit code sent to an email address before registration.

    Several outstanding codes may exist per email. The id orders them by
    issuance. A code is spent once consumed_at is set.
    """

    __tablename__ = "verification_codes"
    __table_args__ = (Index("ix_verification_codes_email_code", "email", "code"),)

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    consumed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, index=True
    )
