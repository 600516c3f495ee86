"""Customers (importers) invoices are billed to."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import CUSTOMERS
from flowers_api.services.entity_service import EntityService

service = EntityService(CUSTOMERS)


def get_customers() -> list[dict]:
    return service.list()


def get_customer_by_id(entity_id: str) -> dict | None:
    return service.get(entity_id)


def add_customer(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_customer(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_customer(entity_id: str) -> None:
    service.delete(entity_id)
