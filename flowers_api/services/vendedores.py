"""Sales people; records carry a name and initials (siglas)."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import VENDEDORES
from flowers_api.services.entity_service import EntityService

service = EntityService(VENDEDORES)


def get_vendedores() -> list[dict]:
    return service.list()


def add_vendedor(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_vendedor(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_vendedor(entity_id: str) -> None:
    service.delete(entity_id)
