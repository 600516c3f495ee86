"""
Email adapter for the invoicing backend.

The default implementation uses SMTP, reading credentials from Settings.
Delivery problems are reported through EmailResult instead of raising, so the
caller decides whether a failed send is fatal.
"""

from __future__ import annotations

import base64
import binascii
import html
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Sequence

from .config import get_settings
from .logs import logger

LOG = logger(__name__)


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: str  # base64 encoded


@dataclass(frozen=True)
class EmailResult:
    success: bool
    error: str | None = None


def body_to_html(body: str) -> str:
    """Plain text body -> single HTML paragraph with <br> line breaks."""
    escaped = html.escape(body or "")
    return "<p>" + escaped.replace("\r\n", "\n").replace("\n", "<br>") + "</p>"


def _build_message(sender: str, to_email: str, subject: str, body: str, attachments: Sequence[Attachment]) -> MIMEMultipart:
    msg = MIMEMultipart("mixed")
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to_email
    alternative = MIMEMultipart("alternative")
    alternative.attach(MIMEText(body or "", "plain", "utf-8"))
    alternative.attach(MIMEText(body_to_html(body), "html", "utf-8"))
    msg.attach(alternative)
    for att in attachments:
        payload = base64.b64decode(att.content, validate=True)
        part = MIMEApplication(payload, Name=att.filename)
        part["Content-Disposition"] = f'attachment; filename="{att.filename}"'
        msg.attach(part)
    return msg


def send_email_with_attachments(
    to_email: str,
    subject: str,
    body: str,
    attachments: Sequence[Attachment] = (),
) -> EmailResult:
    """
    Send an email with named base64 attachments using the SMTP settings.
    Never raises: missing configuration or delivery errors yield a failed result.
    """
    settings = get_settings()
    if not (
        settings.smtp_host
        and settings.smtp_user
        and settings.smtp_password
        and settings.smtp_from
        and settings.smtp_port
    ):
        LOG.warning("SMTP configuration missing; email to %s not sent", to_email)
        return EmailResult(False, "SMTP is not configured.")
    try:
        msg = _build_message(settings.smtp_from, to_email, subject, body, attachments)
    except (binascii.Error, ValueError) as exc:
        LOG.error("Invalid attachment for %s: %s", to_email, exc)
        return EmailResult(False, f"Invalid attachment: {exc}")
    port = settings.smtp_port or 465
    try:
        if port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        else:
            with smtplib.SMTP(settings.smtp_host, port) as server:
                server.ehlo()
                server.starttls(context=ssl.create_default_context())
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        LOG.info("Email sent to %s with %d attachment(s)", to_email, len(attachments))
        return EmailResult(True)
    except (smtplib.SMTPException, OSError) as exc:
        LOG.error("Failed to send email to %s: %s", to_email, exc)
        return EmailResult(False, str(exc))
