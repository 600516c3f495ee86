"""Flower products (rose, carnation, ...)."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import PRODUCTOS
from flowers_api.services.entity_service import EntityService

service = EntityService(PRODUCTOS)


def get_productos() -> list[dict]:
    return service.list()


def add_producto(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_producto(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_producto(entity_id: str) -> None:
    service.delete(entity_id)
