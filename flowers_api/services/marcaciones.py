"""Box markings assigned to customers."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import MARCACIONES
from flowers_api.services.entity_service import EntityService

service = EntityService(MARCACIONES)


def get_marcaciones() -> list[dict]:
    return service.list()


def add_marcacion(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_marcacion(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_marcacion(entity_id: str) -> None:
    service.delete(entity_id)
