"""
PDF rendering adapter.

Sends a complete HTML document to an HTML-to-PDF rendering service
(Gotenberg-compatible ``/forms/chromium/convert/html`` endpoint) and returns
the resulting document base64 encoded.
"""

from __future__ import annotations

import base64

import httpx

from .config import get_settings
from .errors import ExternalServiceFailure
from .logs import logger

LOG = logger(__name__)

CONVERT_PATH = "/forms/chromium/convert/html"

# A4 with ~20px margins, in inches
PAGE_OPTIONS = {
    "paperWidth": "8.27",
    "paperHeight": "11.7",
    "marginTop": "0.2",
    "marginBottom": "0.2",
    "marginLeft": "0.2",
    "marginRight": "0.2",
    "printBackground": "true",
}


class PdfRenderer:
    """Thin client for the rendering service."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        settings = get_settings()
        self.base_url = (base_url if base_url is not None else settings.pdf_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.pdf_timeout_seconds

    def render(self, html_content: str) -> str:
        """Render ``html_content`` and return the PDF bytes as base64 text."""
        if not self.base_url:
            LOG.error("PDF_SERVICE_URL is not configured")
            raise ExternalServiceFailure("Could not generate PDF.")
        files = {"files": ("index.html", html_content.encode("utf-8"), "text/html")}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self.base_url + CONVERT_PATH, data=PAGE_OPTIONS, files=files)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            LOG.error("Error generating PDF: %s", exc)
            raise ExternalServiceFailure("Could not generate PDF.") from exc
        if not response.content:
            LOG.error("PDF service returned an empty document")
            raise ExternalServiceFailure("Could not generate PDF.")
        return base64.b64encode(response.content).decode("ascii")
