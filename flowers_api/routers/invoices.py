from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from flowers_api.core.errors import InvalidInput, NotFound
from flowers_api.domain.collections import (
    CARGUERAS,
    CONSIGNATARIOS,
    CUSTOMERS,
    FINCAS,
    PAISES,
    PRODUCTOS,
    VARIEDADES,
    VENDEDORES,
)
from flowers_api.domain.invoice import invoice_totals
from flowers_api.routers.state import get_hydrator
from flowers_api.services import document_service, invoices
from flowers_api.services.hydration import load_collections

router = APIRouter(prefix="/invoices", tags=["invoices"])

# collections the invoice form needs for its selects
FORM_COLLECTIONS = [CUSTOMERS, CONSIGNATARIOS, VENDEDORES, FINCAS, CARGUERAS, PAISES, PRODUCTOS, VARIEDADES]


@router.get("")
def list_invoices():
    return invoices.get_invoices()


@router.post("", status_code=201)
def create_invoice(payload: dict):
    return {"ok": True, "id": invoices.add_invoice(payload)}


@router.post("/send")
def send_invoice(payload: dict):
    to = (payload.get("to") or "").strip()
    if not to:
        raise InvalidInput("Recipient is required")
    subject = payload.get("subject") or ""
    body = payload.get("body") or ""
    if payload.get("isStatement"):
        customer_id = payload.get("customerId") or ""
        result = document_service.send_statement_email(
            to, subject, body, customer_id, payload.get("invoiceIds") or []
        )
    else:
        invoice_id = payload.get("invoiceId") or ""
        if not invoice_id:
            raise InvalidInput("Invoice ID is required")
        result = document_service.send_invoice_email(to, subject, body, invoice_id)
    if not result.success:
        return JSONResponse(
            {"ok": False, "error": "email_failed", "message": f"Failed to send email: {result.error}"},
            status_code=502,
        )
    return {"ok": True, "message": "Email sent successfully!"}


@router.get("/{invoice_id}")
def invoice_detail(invoice_id: str):
    details = invoices.get_invoice_with_details(invoice_id)
    if details is None:
        raise NotFound(f"Invoice with ID {invoice_id} not found.")
    return {**details.as_dict(), "totals": invoice_totals(details.invoice).as_dict()}


@router.patch("/{invoice_id}")
def update_invoice(invoice_id: str, payload: dict):
    invoices.update_invoice(invoice_id, payload)
    return {"ok": True}


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: str):
    invoices.delete_invoice(invoice_id)
    return {"ok": True}


@router.get("/{invoice_id}/edit")
def edit_invoice(invoice_id: str, request: Request):
    draft = invoices.load_invoice_for_edit(invoice_id)
    get_hydrator(request)(load_collections(FORM_COLLECTIONS))
    return {"initialData": draft.to_form(), "isEditing": True}


@router.post("/{invoice_id}/pdf")
def invoice_pdf(invoice_id: str):
    pdf = document_service.generate_invoice_pdf(invoice_id)
    return {"pdf": pdf.content, "invoiceNumber": pdf.invoice_number, "filename": pdf.filename}
