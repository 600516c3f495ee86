"""Countries (destination and origin of shipments)."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import PAISES
from flowers_api.services.entity_service import EntityService

service = EntityService(PAISES)


def get_paises() -> list[dict]:
    return service.list()


def add_pais(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_pais(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_pais(entity_id: str) -> None:
    service.delete(entity_id)


def get_pais_by_id(entity_id: str) -> dict | None:
    return service.get(entity_id)
