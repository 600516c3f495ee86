"""Cargo carriers (cargueras) handling the air freight."""

from __future__ import annotations

from typing import Any, Mapping

from flowers_api.domain.collections import CARGUERAS
from flowers_api.services.entity_service import EntityService

service = EntityService(CARGUERAS)


def get_cargueras() -> list[dict]:
    return service.list()


def get_carguera_by_id(entity_id: str) -> dict | None:
    return service.get(entity_id)


def add_carguera(data: Mapping[str, Any]) -> str:
    return service.add(data)


def update_carguera(entity_id: str, data: Mapping[str, Any]) -> None:
    service.update(entity_id, data)


def delete_carguera(entity_id: str) -> None:
    service.delete(entity_id)
