"""
Invoice use cases: CRUD, detail lookup and the load-for-edit draft.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from flowers_api.core.errors import InvalidInput
from flowers_api.core.utils import to_iso_date
from flowers_api.domain.collections import INVOICES
from flowers_api.domain.invoice import DATE_FIELDS, InvoiceDraft, build_edit_draft, strip_shadow_ids
from flowers_api.services import cargueras, consignatarios, customers, paises
from flowers_api.services.entity_service import EntityService

INVOICE_STATUSES = ("Paid", "Pending", "Overdue")
INVOICE_DEFAULTS = {"type": "sale", "status": "Pending", "items": []}


@dataclass
class InvoiceDetails:
    invoice: dict
    customer: Optional[dict]
    consignatario: Optional[dict]
    carguera: Optional[dict]
    pais: Optional[dict]

    def as_dict(self) -> dict:
        return {
            "invoice": self.invoice,
            "customer": self.customer,
            "consignatario": self.consignatario,
            "carguera": self.carguera,
            "pais": self.pais,
        }


def _prepare(data: Mapping[str, Any]) -> dict:
    prepared = strip_shadow_ids(data)
    for name in DATE_FIELDS:
        value = prepared.get(name)
        if value in (None, ""):
            continue
        try:
            prepared[name] = to_iso_date(value)
        except ValueError as exc:
            raise InvalidInput(f"Invalid {name}: {value!r}") from exc
    status = prepared.get("status")
    if status is not None and status not in INVOICE_STATUSES:
        raise InvalidInput(f"Invalid status: {status!r}")
    return prepared


service = EntityService(INVOICES, defaults=INVOICE_DEFAULTS, prepare=_prepare)


def get_invoices() -> list[dict]:
    return service.list()


def get_invoice_by_id(invoice_id: str) -> dict | None:
    return service.get(invoice_id)


def get_invoices_for_customer(customer_id: str) -> list[dict]:
    return [inv for inv in service.list() if str(inv.get("customerId")) == str(customer_id)]


def get_invoice_with_details(invoice_id: str) -> InvoiceDetails | None:
    """Invoice plus the customer, consignee, carrier and country it points to."""
    invoice = service.get(invoice_id)
    if invoice is None:
        return None
    return InvoiceDetails(
        invoice=invoice,
        customer=customers.get_customer_by_id(invoice.get("customerId")),
        consignatario=consignatarios.get_consignatario_by_id(invoice.get("consignatarioId")),
        carguera=cargueras.get_carguera_by_id(invoice.get("carrierId")),
        pais=paises.get_pais_by_id(invoice.get("countryId")),
    )


def add_invoice(data: Mapping[str, Any]) -> str:
    return service.add({**copy.deepcopy(INVOICE_DEFAULTS), **data})


def update_invoice(invoice_id: str, data: Mapping[str, Any]) -> None:
    service.update(invoice_id, data)


def delete_invoice(invoice_id: str) -> None:
    service.delete(invoice_id)


def load_invoice_for_edit(invoice_id: str, *, today: date | None = None) -> InvoiceDraft:
    """
    Build an edit draft of a stored invoice.

    Raises NotFound when the invoice does not exist. Items and bunches get
    fresh identifiers and missing dates default to today; the stored record
    is left untouched until the draft is saved.
    """
    record = service.require(invoice_id)
    return build_edit_draft(record, today=today)


def save_invoice_draft(draft: InvoiceDraft) -> None:
    update_invoice(draft.id, draft.to_record())
