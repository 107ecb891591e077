# app/core/email.py
"""Outgoing email over SMTP (aiosmtplib).

SMTP settings come from the SMTP_* variables in config. Sending is
best effort: errors are logged and never raised to the caller.
"""
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from app.core.config import get_settings
from app.core.logging_config import get_logger

log = get_logger("email")


def build_message(to: str, subject: str, html: str) -> MIMEMultipart:
    settings = get_settings()
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
    msg["To"] = to
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


async def send_email(to: str, subject: str, html: str) -> bool:
    """Send one email. Returns True when the SMTP server accepted it."""
    settings = get_settings()
    if not settings.SMTP_HOST or not to:
        log.info("SMTP not configured, skipping email %r", subject)
        return False

    try:
        await aiosmtplib.send(
            build_message(to, subject, html),
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER or None,
            password=settings.SMTP_PASSWORD or None,
            start_tls=True,
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        log.error("Failed to send email to %s: %s", to, e)
        return False

    log.info("Email sent to %s", to)
    return True
