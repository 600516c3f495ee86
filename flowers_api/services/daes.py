"""DAE export declarations, one number per destination country."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import DAES
from flowers_api.services.entity_service import EntityService

service = EntityService(DAES)


def get_daes() -> list[dict]:
    return service.list()


def add_dae(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_dae(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_dae(entity_id: str) -> None:
    service.delete(entity_id)
