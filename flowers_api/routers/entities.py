"""Plain CRUD endpoints for the reference collections."""
from __future__ import annotations

from fastapi import APIRouter

from flowers_api.services.catalog import REFERENCE_SERVICES
from flowers_api.services.entity_service import EntityService


def build_entity_router(slug: str, service: EntityService) -> APIRouter:
    router = APIRouter(prefix=f"/{slug}", tags=[slug])

    @router.get("")
    def list_records():
        return service.list()

    @router.get("/{entity_id}")
    def get_record(entity_id: str):
        return service.require(entity_id)

    @router.post("", status_code=201)
    def add_record(payload: dict):
        return {"ok": True, "id": service.add(payload)}

    @router.patch("/{entity_id}")
    def update_record(entity_id: str, payload: dict):
        service.update(entity_id, payload)
        return {"ok": True}

    @router.delete("/{entity_id}")
    def delete_record(entity_id: str):
        service.delete(entity_id)
        return {"ok": True}

    return router


routers = [build_entity_router(slug, service) for slug, service in REFERENCE_SERVICES.items()]
