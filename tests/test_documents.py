from __future__ import annotations

import base64

import httpx
import pytest

from flowers_api.core import pdf as pdf_module
from flowers_api.core.errors import ExternalServiceFailure, NotFound
from flowers_api.core.mailer import EmailResult
from flowers_api.core.pdf import CONVERT_PATH, PdfRenderer
from flowers_api.services import customers, document_service, invoices
from flowers_api.services.statements import build_account_statement


class StubRenderer:
    def __init__(self):
        self.documents = []

    def render(self, html_content):
        self.documents.append(html_content)
        return base64.b64encode(b"%PDF").decode("ascii")


@pytest.fixture()
def sample_invoice(json_backend):
    customer_id = customers.add_customer({"name": "Acme Flowers", "address": "Miami"})
    invoice_id = invoices.add_invoice(
        {
            "invoiceNumber": "0042",
            "customerId": customer_id,
            "flightDate": "2024-05-02",
            "items": [{"boxCount": 2, "bunches": [{"bunches": 10, "stemsPerBunch": 25, "salePrice": 0.3}]}],
        }
    )
    return customer_id, invoice_id


def _client_factory(handler):
    real_client = httpx.Client

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    return factory


def test_renderer_posts_html_and_returns_base64(monkeypatch):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, content=b"%PDF-1.7")

    monkeypatch.setattr(pdf_module.httpx, "Client", _client_factory(handler))

    result = PdfRenderer(base_url="http://pdf.local/", timeout=5).render("<html>hola</html>")

    assert base64.b64decode(result) == b"%PDF-1.7"
    assert seen["url"] == "http://pdf.local" + CONVERT_PATH
    assert b"<html>hola</html>" in seen["body"]


def test_renderer_error_status_raises(monkeypatch):
    monkeypatch.setattr(pdf_module.httpx, "Client", _client_factory(lambda request: httpx.Response(500)))
    with pytest.raises(ExternalServiceFailure) as exc:
        PdfRenderer(base_url="http://pdf.local").render("<html></html>")
    assert exc.value.status_code == 502


def test_renderer_without_url_raises():
    with pytest.raises(ExternalServiceFailure):
        PdfRenderer(base_url="").render("<html></html>")


def test_invoice_html_contains_number_and_totals(sample_invoice):
    _, invoice_id = sample_invoice
    html_doc = document_service.render_invoice_html(invoices.get_invoice_with_details(invoice_id))
    assert "0042" in html_doc
    assert "Acme Flowers" in html_doc
    assert "05/02/2024" in html_doc
    assert "$75.00" in html_doc


def test_generate_invoice_pdf(sample_invoice):
    _, invoice_id = sample_invoice
    renderer = StubRenderer()

    pdf = document_service.generate_invoice_pdf(invoice_id, renderer)

    assert pdf.filename == "Factura-0042.pdf"
    assert pdf.invoice_number == "0042"
    assert len(renderer.documents) == 1


def test_generate_pdf_for_missing_invoice(json_backend):
    with pytest.raises(NotFound):
        document_service.generate_invoice_pdf("missing", StubRenderer())


def test_statement_filename_and_html(sample_invoice):
    customer_id, _ = sample_invoice
    statement = build_account_statement(customer_id)
    assert document_service.statement_filename(statement.party) == "Estado-de-Cuenta-Acme_Flowers.pdf"
    assert "0042" in document_service.render_statement_html(statement)


def test_send_statement_email_attaches_statement_and_invoices(sample_invoice, monkeypatch):
    customer_id, invoice_id = sample_invoice
    sent = {}

    def fake_send(to_email, subject, body, attachments=()):
        sent["to"] = to_email
        sent["files"] = [a.filename for a in attachments]
        return EmailResult(True)

    monkeypatch.setattr(document_service, "send_email_with_attachments", fake_send)

    result = document_service.send_statement_email(
        "client@example.com", "Statement", "Body", customer_id, [invoice_id, "missing"], renderer=StubRenderer()
    )

    assert result.success is True
    assert sent["files"] == ["Estado-de-Cuenta-Acme_Flowers.pdf", "Factura-0042.pdf"]


def test_send_invoice_email_reports_delivery_failure(sample_invoice, monkeypatch):
    _, invoice_id = sample_invoice
    monkeypatch.setattr(
        document_service, "send_email_with_attachments", lambda *args, **kwargs: EmailResult(False, "boom")
    )
    result = document_service.send_invoice_email("c@example.com", "s", "b", invoice_id, renderer=StubRenderer())
    assert result == EmailResult(False, "boom")


def test_invoice_html_with_empty_box_type(json_backend):
    invoice_id = invoices.add_invoice(
        {"invoiceNumber": "77", "items": [{"boxType": None, "bunches": [{"bunches": 1, "stemsPerBunch": 10}]}]}
    )
    html_doc = document_service.render_invoice_html(invoices.get_invoice_with_details(invoice_id))
    assert "NONE" not in html_doc
