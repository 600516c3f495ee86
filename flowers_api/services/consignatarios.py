"""
Consignees: the party receiving the cargo on behalf of a customer.
Each consignee references its customer through ``customerId``.
"""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import CONSIGNATARIOS
from flowers_api.services.entity_service import EntityService

service = EntityService(CONSIGNATARIOS)


def get_consignatarios() -> list[dict]:
    return service.list()


def get_consignatario_by_id(entity_id: str) -> dict | None:
    return service.get(entity_id)


def get_consignatarios_for_customer(customer_id: str) -> list[dict]:
    return [c for c in service.list() if str(c.get("customerId")) == str(customer_id)]


def add_consignatario(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_consignatario(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_consignatario(entity_id: str) -> None:
    service.delete(entity_id)
