"""Inventory items (name, description, sale price and cost)."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import INVENTORY
from flowers_api.services.entity_service import EntityService

service = EntityService(INVENTORY)


def get_inventory_items() -> list[dict]:
    return service.list()


def add_inventory_item(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_inventory_item(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_inventory_item(entity_id: str) -> None:
    service.delete(entity_id)
