from __future__ import annotations

import base64
import email
import smtplib

import pytest

from flowers_api.core import config as core_config
from flowers_api.core import mailer
from flowers_api.core.mailer import Attachment, body_to_html, send_email_with_attachments

PDF_B64 = base64.b64encode(b"%PDF-1.4 fake").decode("ascii")


class FakeSMTP:
    sent: list = []

    def __init__(self, host, port, **kwargs):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        pass

    def starttls(self, **kwargs):
        pass

    def login(self, user, password):
        self.user = user

    def sendmail(self, sender, recipients, message):
        FakeSMTP.sent.append((sender, recipients, message))


class FailingSMTP(FakeSMTP):
    def login(self, user, password):
        raise smtplib.SMTPAuthenticationError(535, b"bad credentials")


@pytest.fixture()
def smtp_env(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("SMTP_USER", "billing@example.com")
    monkeypatch.setenv("SMTP_PASSWORD", "secret")
    monkeypatch.setenv("SMTP_FROM", "billing@example.com")
    core_config.get_settings.cache_clear()
    FakeSMTP.sent = []
    yield
    core_config.get_settings.cache_clear()


def test_body_to_html_escapes_and_breaks_lines():
    assert body_to_html("Hi <b>\nthanks") == "<p>Hi &lt;b&gt;<br>thanks</p>"


def test_missing_configuration_returns_failure(monkeypatch):
    for name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD", "SMTP_FROM"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    try:
        result = send_email_with_attachments("client@example.com", "Invoice", "Body")
    finally:
        core_config.get_settings.cache_clear()
    assert result.success is False
    assert "not configured" in result.error


def test_send_with_attachment(smtp_env, monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)

    result = send_email_with_attachments(
        "client@example.com", "Invoice 100", "Hello\nPlease find attached", [Attachment("Factura-100.pdf", PDF_B64)]
    )

    assert result.success is True
    sender, recipients, raw = FakeSMTP.sent[0]
    assert recipients == ["client@example.com"]
    message = email.message_from_string(raw)
    assert message["Subject"] == "Invoice 100"
    filenames = [part.get_filename() for part in message.walk() if part.get_filename()]
    assert filenames == ["Factura-100.pdf"]


def test_invalid_attachment_returns_failure(smtp_env, monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    result = send_email_with_attachments("client@example.com", "s", "b", [Attachment("x.pdf", "not base64!")])
    assert result.success is False
    assert FakeSMTP.sent == []


def test_delivery_error_returns_failure(smtp_env, monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FailingSMTP)
    result = send_email_with_attachments("client@example.com", "s", "b")
    assert result.success is False
    assert result.error
