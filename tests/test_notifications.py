# tests/test_notifications.py
import asyncio

import aiosmtplib
import pytest

from app.core.config import get_settings
from app.core.email import send_email
from app.core.security import Role


@pytest.fixture
def smtp_configured(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.test")
    monkeypatch.setattr(settings, "SMTP_FROM_EMAIL", "tracker@example.test")
    monkeypatch.setattr(settings, "NOTIFY_EMAIL", "it-desk@example.test")
    return settings


def test_send_skipped_without_smtp_host():
    assert asyncio.run(send_email("someone@example.test", "subject", "<p>x</p>")) is False


def test_approval_sends_notification(client, headers, make_ticket, smtp_configured, monkeypatch):
    sent = []

    async def fake_send(message, **kwargs):
        sent.append((message, kwargs))

    monkeypatch.setattr(aiosmtplib, "send", fake_send)
    tid = make_ticket(deviceId="DEV-42")["id"]

    r = client.post(f"/tickets/{tid}/reject/dc", headers=headers[Role.DC])
    assert r.status_code == 200

    assert len(sent) == 1
    message, kwargs = sent[0]
    assert message["To"] == "it-desk@example.test"
    assert message["Subject"] == f"Ticket #{tid} rejected by DC"
    assert kwargs["hostname"] == "smtp.example.test"


def test_email_failure_does_not_affect_approval(client, headers, make_ticket, smtp_configured, monkeypatch):
    async def failing_send(message, **kwargs):
        raise aiosmtplib.SMTPException("relay refused")

    monkeypatch.setattr(aiosmtplib, "send", failing_send)
    tid = make_ticket()["id"]

    r = client.post(f"/tickets/{tid}/approve/dc", headers=headers[Role.DC])
    assert r.status_code == 200
    assert client.get(f"/tickets/{tid}").json()["status"] == "DC Approved"


def test_failed_precondition_sends_nothing(client, headers, make_ticket, smtp_configured, monkeypatch):
    sent = []

    async def fake_send(message, **kwargs):
        sent.append(message)

    monkeypatch.setattr(aiosmtplib, "send", fake_send)
    tid = make_ticket()["id"]

    r = client.post(f"/tickets/{tid}/approve/superuser", headers=headers[Role.SUPER_USER])
    assert r.status_code == 409
    assert sent == []
