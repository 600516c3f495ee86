"""Farms supplying the flowers."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import FINCAS
from flowers_api.services.entity_service import EntityService

service = EntityService(FINCAS)


def get_fincas() -> list[dict]:
    return service.list()


def add_finca(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_finca(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_finca(entity_id: str) -> None:
    service.delete(entity_id)


def get_finca_by_id(entity_id: str) -> dict | None:
    return service.get(entity_id)
