"""
Customer payments against invoices.

Recording or removing a payment recomputes the invoice status: ``Paid`` once
the remaining balance is within a cent, ``Pending`` otherwise. The payment and
the status update are two separate writes (no cross-record transaction).
"""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.core.errors import InvalidInput
from flowers_api.core.logs import logger
from flowers_api.core.utils import as_number, to_iso_date
from flowers_api.domain.collections import PAYMENTS
from flowers_api.domain.invoice import invoice_balance
from flowers_api.services import credit_notes, debit_notes, invoices
from flowers_api.services.entity_service import EntityService

LOG = logger(__name__)

PAID_TOLERANCE = 0.01

service = EntityService(PAYMENTS)


def get_payments() -> list[dict]:
    return service.list()


def get_payments_for_invoice(invoice_id: str) -> list[dict]:
    return [p for p in service.list() if str(p.get("invoiceId")) == str(invoice_id)]


def outstanding_balance(invoice: Mapping[str, Any]) -> float:
    """Amount still owed; purchase invoices are valued at purchase price."""
    invoice_id = invoice.get("id")
    return invoice_balance(
        invoice,
        purchase=invoice.get("type") == "purchase",
        credit_notes=credit_notes.get_credit_notes_for_invoice(invoice_id),
        debit_notes=debit_notes.get_debit_notes_for_invoice(invoice_id),
        payments=get_payments_for_invoice(invoice_id),
    )


def refresh_invoice_status(invoice_id: str) -> str:
    invoice = invoices.service.require(invoice_id)
    status = "Paid" if outstanding_balance(invoice) <= PAID_TOLERANCE else "Pending"
    if invoice.get("status") != status:
        invoices.update_invoice(invoice_id, {"status": status})
        LOG.info("Invoice %s is now %s", invoice_id, status)
    return status


def add_payment(data: Mapping[str, Any]) -> str:
    invoice_id = str(data.get("invoiceId") or "")
    # NotFound before anything is written
    invoices.service.require(invoice_id)
    amount = as_number(data.get("amount"))
    if amount <= 0:
        raise InvalidInput("Payment amount must be greater than zero.")
    record = {**data, "invoiceId": invoice_id, "amount": amount}
    if record.get("paymentDate"):
        try:
            record["paymentDate"] = to_iso_date(record["paymentDate"])
        except ValueError as exc:
            raise InvalidInput(f"Invalid paymentDate: {record['paymentDate']!r}") from exc
    payment_id = service.add(record)
    refresh_invoice_status(invoice_id)
    return payment_id


def delete_payment(payment_id: str) -> None:
    payment = service.get(payment_id)
    service.delete(payment_id)
    if payment and invoices.get_invoice_by_id(payment.get("invoiceId")):
        refresh_invoice_status(payment.get("invoiceId"))
