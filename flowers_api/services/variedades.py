"""Varieties of each product."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import VARIEDADES
from flowers_api.services.entity_service import EntityService

service = EntityService(VARIEDADES)


def get_variedades() -> list[dict]:
    return service.list()


def add_variedad(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_variedad(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_variedad(entity_id: str) -> None:
    service.delete(entity_id)
