"""Credit notes reduce the balance of one invoice."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.core.errors import InvalidInput
from flowers_api.core.utils import to_iso_date
from flowers_api.domain.collections import CREDIT_NOTES
from flowers_api.services.entity_service import EntityService


def _prepare(data: Mapping[str, Any]) -> dict:
    prepared = dict(data)
    if prepared.get("date"):
        try:
            prepared["date"] = to_iso_date(prepared["date"])
        except ValueError as exc:
            raise InvalidInput(f"Invalid date: {prepared['date']!r}") from exc
    return prepared


service = EntityService(CREDIT_NOTES, prepare=_prepare)


def get_credit_notes() -> list[dict]:
    return service.list()


def get_credit_notes_for_invoice(invoice_id: str) -> list[dict]:
    return [n for n in service.list() if str(n.get("invoiceId")) == str(invoice_id)]


def add_credit_note(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_credit_note(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_credit_note(entity_id: str) -> None:
    service.delete(entity_id)
