"""Outbound email transport."""

import logging
import smtplib
from email.mime.text import MIMEText
from typing import Protocol

from ecobite.config import Settings

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def deliver(self, to: str, subject: str, body: str) -> bool: ...


def _sanitize_log_input(value: str) -> str:
    """Strip control characters from addresses before logging them."""
    if not value:
        return "(empty)"
    return "".join(char for char in value if char.isprintable())[:100]


class SMTPMailer:
    """Sends HTML mail through an SMTP relay."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def deliver(self, to: str, subject: str, body: str) -> bool:
        """Send one message. Returns False on any transport failure."""
        msg = MIMEText(body, "html", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.settings.smtp_from
        msg["To"] = to

        host = self.settings.smtp_host
        port = self.settings.smtp_port
        timeout = self.settings.smtp_timeout_seconds

        try:
            if port == 465:
                server = smtplib.SMTP_SSL(host, port, timeout=timeout)
            else:
                server = smtplib.SMTP(host, port, timeout=timeout)
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()

            with server:
                if self.settings.smtp_user and self.settings.smtp_password:
                    server.login(self.settings.smtp_user, self.settings.smtp_password)
                server.sendmail(self.settings.smtp_from, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            # Exception text can contain credentials; log the type only
            logger.error(f"Failed to send email to {_sanitize_log_input(to)}: {type(e).__name__}")
            return False

        logger.info(f"Email sent to {_sanitize_log_input(to)}")
        return True


class ConsoleMailer:
    """Logs messages instead of sending them. Development only."""

    def deliver(self, to: str, subject: str, body: str) -> bool:
        logger.info(f"[console mail] to={_sanitize_log_input(to)} subject={subject!r} body={body}")
        return True


def get_mailer(settings: Settings) -> Mailer:
    """Build the mail backend selected by MAIL_BACKEND."""
    if settings.mail_backend == "console":
        return ConsoleMailer()
    return SMTPMailer(settings)
