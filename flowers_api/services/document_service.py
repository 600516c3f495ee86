"""
Invoice and account statement documents: HTML rendering, PDF and email.

HTML comes from the Jinja2 templates in ``flowers_api/templates``; the PDF
is produced by the external rendering service (``core.pdf``) and emailed
through ``core.mailer``. PDF failures propagate as ExternalServiceFailure;
email failures come back as an EmailResult.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from flowers_api.core.config import get_settings
from flowers_api.core.errors import NotFound
from flowers_api.core.logs import logger
from flowers_api.core.mailer import Attachment, EmailResult, send_email_with_attachments
from flowers_api.core.pdf import PdfRenderer
from flowers_api.core.utils import parse_calendar_date
from flowers_api.domain.invoice import bunch_totals, invoice_totals, item_boxes
from flowers_api.services.invoices import InvoiceDetails, get_invoice_with_details
from flowers_api.services.statements import AccountStatement, build_account_statement

LOG = logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def _format_date(value) -> str:
    try:
        parsed = parse_calendar_date(value)
    except ValueError:
        return str(value)
    return parsed.strftime("%m/%d/%Y") if parsed else ""


def _format_money(value) -> str:
    return f"${float(value or 0):,.2f}"


def _format_count(value) -> str:
    number = float(value or 0)
    return str(int(number)) if number.is_integer() else f"{number:g}"


_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)
_env.filters["us_date"] = _format_date
_env.filters["money"] = _format_money
_env.filters["qty"] = _format_count
_env.globals.update(bunch_totals=bunch_totals, item_boxes=item_boxes)


@dataclass(frozen=True)
class GeneratedPdf:
    filename: str
    content: str  # base64
    invoice_number: str = ""

    def as_attachment(self) -> Attachment:
        return Attachment(self.filename, self.content)


def invoice_filename(invoice: dict) -> str:
    return f"Factura-{invoice.get('invoiceNumber') or invoice.get('id')}.pdf"


def statement_filename(customer: dict) -> str:
    name = (customer.get("name") or customer.get("id") or "cliente").strip()
    return f"Estado-de-Cuenta-{name.replace(' ', '_')}.pdf"


def render_invoice_html(details: InvoiceDetails) -> str:
    template = _env.get_template("invoice.html")
    return template.render(
        company_name=get_settings().company_name,
        invoice=details.invoice,
        customer=details.customer or {},
        consignatario=details.consignatario or {},
        carguera=details.carguera or {},
        pais=details.pais or {},
        totals=invoice_totals(details.invoice),
    )


def render_statement_html(statement: AccountStatement) -> str:
    template = _env.get_template("statement.html")
    return template.render(
        company_name=get_settings().company_name,
        customer=statement.party,
        lines=statement.lines,
        total_balance=statement.total_balance,
        urgent_payment=statement.urgent_payment,
    )


def generate_invoice_pdf(invoice_id: str, renderer: Optional[PdfRenderer] = None) -> GeneratedPdf:
    details = get_invoice_with_details(invoice_id)
    if details is None:
        raise NotFound(f"Invoice with ID {invoice_id} not found.")
    html_doc = render_invoice_html(details)
    content = (renderer or PdfRenderer()).render(html_doc)
    return GeneratedPdf(
        filename=invoice_filename(details.invoice),
        content=content,
        invoice_number=str(details.invoice.get("invoiceNumber") or ""),
    )


def generate_statement_pdf(statement: AccountStatement, renderer: Optional[PdfRenderer] = None) -> GeneratedPdf:
    content = (renderer or PdfRenderer()).render(render_statement_html(statement))
    return GeneratedPdf(filename=statement_filename(statement.party), content=content)


def send_invoice_email(
    to_email: str,
    subject: str,
    body: str,
    invoice_id: str,
    renderer: Optional[PdfRenderer] = None,
) -> EmailResult:
    """Email one invoice as PDF. NotFound/PDF errors raise; delivery errors do not."""
    pdf = generate_invoice_pdf(invoice_id, renderer)
    return send_email_with_attachments(to_email, subject, body, [pdf.as_attachment()])


def send_statement_email(
    to_email: str,
    subject: str,
    body: str,
    customer_id: str,
    invoice_ids: Iterable[str] = (),
    renderer: Optional[PdfRenderer] = None,
) -> EmailResult:
    """
    Email the customer's account statement plus one PDF per selected invoice.
    Selected invoices that no longer exist are skipped.
    """
    renderer = renderer or PdfRenderer()
    selected = list(invoice_ids)
    statement = build_account_statement(customer_id, selected or None)
    attachments = [generate_statement_pdf(statement, renderer).as_attachment()]
    for invoice_id in selected:
        details = get_invoice_with_details(invoice_id)
        if details is None:
            LOG.warning("Skipping missing invoice %s in statement email", invoice_id)
            continue
        content = renderer.render(render_invoice_html(details))
        attachments.append(Attachment(invoice_filename(details.invoice), content))
    return send_email_with_attachments(to_email, subject, body, attachments)
