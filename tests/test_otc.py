"""Verification code service tests."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import event

from ecobite.config import Settings
from ecobite.errors import DeliveryError, InvalidOrExpiredCodeError
from ecobite.models.verification_code import VerificationCode
from ecobite.services.otc import OTCService, generate_code, purge_expired_codes


@pytest.fixture
def otc(db, mailer):
    return OTCService(db, Settings(jwt_secret="x", verification_code_expire_minutes=10), mailer)


def test_generate_code_range():
    """Test that codes are 6-digit numbers."""
    for _ in range(500):
        code = generate_code()
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999


def test_send_code_sets_expiry(otc, mailer):
    """Test that the stored code expires after the configured window."""
    before = datetime.now(UTC)
    record = otc.send_code("a@x.com")

    expires_at = record.expires_at.replace(tzinfo=UTC)
    assert timedelta(minutes=9) < expires_at - before <= timedelta(minutes=10, seconds=5)
    assert mailer.sent[0]["subject"] == OTCService.SUBJECT
    assert record.code in mailer.sent[0]["body"]


def test_send_code_delivery_failure_keeps_record(otc, mailer, db):
    """Test that a failed delivery raises but the code stays stored."""
    mailer.fail = True
    with pytest.raises(DeliveryError):
        otc.send_code("a@x.com")
    assert db.query(VerificationCode).count() == 1


def test_validate_and_consume(otc, db):
    """Test that a valid code is accepted once."""
    record = otc.send_code("a@x.com")

    accepted = otc.validate_and_consume("a@x.com", record.code)
    assert accepted.id == record.id

    with pytest.raises(InvalidOrExpiredCodeError):
        otc.validate_and_consume("a@x.com", record.code)


def test_consumption_rolls_back(otc, db):
    """Test that an uncommitted consumption is undone by rollback."""
    record = otc.send_code("a@x.com")
    otc.validate_and_consume("a@x.com", record.code)
    db.rollback()

    assert otc.validate_and_consume("a@x.com", record.code).id == record.id


def test_newest_matching_code_is_used(otc, db):
    """Test that the most recently issued matching code is the one consumed."""
    expires_at = datetime.now(UTC) + timedelta(minutes=5)
    older = VerificationCode(email="a@x.com", code="111111", expires_at=expires_at)
    newer = VerificationCode(email="a@x.com", code="111111", expires_at=expires_at)
    db.add(older)
    db.commit()
    db.add(newer)
    db.commit()

    assert otc.validate_and_consume("a@x.com", "111111").id == newer.id
    assert otc.validate_and_consume("a@x.com", "111111").id == older.id


def test_expired_code_rejected(otc, db):
    """Test that an expired code is rejected."""
    db.add(
        VerificationCode(
            email="a@x.com", code="222222", expires_at=datetime.now(UTC) - timedelta(seconds=1)
        )
    )
    db.commit()

    with pytest.raises(InvalidOrExpiredCodeError):
        otc.validate_and_consume("a@x.com", "222222")


def test_purge_expired(db):
    """Test that only codes past the retention horizon are purged."""
    now = datetime.now(UTC)
    db.add_all(
        [
            VerificationCode(
                email="old@x.com",
                code="333333",
                expires_at=now - timedelta(hours=47),
                created_at=now - timedelta(hours=48),
            ),
            VerificationCode(email="new@x.com", code="444444", expires_at=now + timedelta(minutes=5)),
        ]
    )
    db.commit()

    assert purge_expired_codes(db, timedelta(hours=24)) == 1
    assert [c.email for c in db.query(VerificationCode).all()] == ["new@x.com"]


def test_purge_task(db):
    """Test the scheduled purge task end to end."""
    from ecobite.tasks.verification_codes import purge_expired_verification_codes

    now = datetime.now(UTC)
    db.add(
        VerificationCode(
            email="old@x.com",
            code="555555",
            expires_at=now - timedelta(days=6),
            created_at=now - timedelta(days=7),
        )
    )
    db.commit()

    assert purge_expired_verification_codes.run() == {"deleted": 1}
    db.expire_all()
    assert db.query(VerificationCode).count() == 0


def test_consume_loses_race(db, other_db, mailer):
    """Test that a code spent between the read and the write is rejected."""
    settings = Settings(jwt_secret="x", verification_code_expire_minutes=10)
    record = OTCService(db, settings, mailer).send_code("a@x.com")
    code = record.code
    spent: list[bool] = []

    def spend_first(orm_execute_state):
        if orm_execute_state.is_update and not spent:
            spent.append(True)
            OTCService(db, settings, mailer).validate_and_consume("a@x.com", code)
            db.commit()

    event.listen(other_db, "do_orm_execute", spend_first)
    try:
        with pytest.raises(InvalidOrExpiredCodeError):
            OTCService(other_db, settings, mailer).validate_and_consume("a@x.com", code)
    finally:
        event.remove(other_db, "do_orm_execute", spend_first)

    assert spent == [True]
    other_db.rollback()
    consumed = db.query(VerificationCode).filter(VerificationCode.consumed_at.isnot(None))
    assert consumed.count() == 1
