"""Provinces used in consignee addresses."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import PROVINCIAS
from flowers_api.services.entity_service import EntityService

service = EntityService(PROVINCIAS)


def get_provincias() -> list[dict]:
    return service.list()


def add_provincia(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_provincia(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_provincia(entity_id: str) -> None:
    service.delete(entity_id)
