from __future__ import annotations

from fastapi import APIRouter

from flowers_api.services import invoices, payments

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("")
def list_payments(invoice_id: str | None = None):
    if invoice_id:
        return payments.get_payments_for_invoice(invoice_id)
    return payments.get_payments()


@router.post("", status_code=201)
def record_payment(payload: dict):
    payment_id = payments.add_payment(payload)
    status = invoices.get_invoice_by_id(payload.get("invoiceId"))["status"]
    return {"ok": True, "id": payment_id, "invoiceStatus": status}


@router.delete("/{payment_id}")
def delete_payment(payment_id: str):
    payments.delete_payment(payment_id)
    return {"ok": True}
