"""Shared client-side data: read the store, or reload and hydrate it."""
from __future__ import annotations

from fastapi import APIRouter, Request

from flowers_api.services.hydration import AppDataStore, DataHydrator, load_collections

router = APIRouter(prefix="/state", tags=["state"])


def get_store(request: Request) -> AppDataStore:
    store = getattr(getattr(request.app, "state", None), "app_data", None)
    if not store:
        raise RuntimeError("AppDataStore is not configured")
    return store


def get_hydrator(request: Request) -> DataHydrator:
    hydrator = getattr(getattr(request.app, "state", None), "hydrator", None)
    if not hydrator:
        raise RuntimeError("DataHydrator is not configured")
    return hydrator


@router.get("")
def read_state(request: Request):
    return get_store(request).snapshot()


@router.post("/refresh")
def refresh_state(request: Request):
    applied = get_hydrator(request)(load_collections())
    return {"ok": True, "hydrated": applied}
