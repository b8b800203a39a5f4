"""SMTP email client (blocking smtplib run in a worker thread)."""
import asyncio
import logging
import smtplib
from email.message import EmailMessage

from motivatr.config import get_settings
from motivatr.errors import TransientIOError

logger = logging.getLogger(__name__)
settings = get_settings()

SMTP_TIMEOUT_SECONDS = 15


def _build_message(to: str, subject: str, text: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.EMAIL_FROM
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(text)
    return msg


def _deliver(msg: EmailMessage) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=SMTP_TIMEOUT_SECONDS) as smtp:
        if settings.SMTP_USE_TLS:
            smtp.starttls()
        if settings.SMTP_USERNAME:
            smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        smtp.send_message(msg)


async def send_email(to: str, subject: str, text: str) -> bool:
    """Send a plain-text email. Returns False when SMTP is not configured.

    Raises TransientIOError on connection or protocol failures.
    """
    if not settings.SMTP_HOST:
        logger.warning("SMTP_HOST not configured; email to %s not sent", to)
        return False
    msg = _build_message(to, subject, text)
    try:
        await asyncio.to_thread(_deliver, msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise TransientIOError(f"SMTP delivery to {to} failed: {exc}") from exc
    return True
