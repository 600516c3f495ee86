"""
Persistence adapters.

Two interchangeable backends implement the same contract:

- ``read_all()`` / ``write_all(data)`` over the whole document
  (collection name -> ordered list of records);
- per-collection ``list``/``get``/``add``/``update``/``delete`` primitives.

Services depend on ``get_repository()`` rather than on a concrete backend.
"""

from __future__ import annotations

from functools import lru_cache

from flowers_api.core.config import get_settings


@lru_cache
def get_repository():
    """Repository selected by ``STORAGE_BACKEND`` (``json`` or ``sql``)."""
    settings = get_settings()
    if settings.storage_backend == "sql":
        from .sql_repository import SQLRepository

        return SQLRepository()
    if settings.storage_backend != "json":
        raise RuntimeError(f"Unknown STORAGE_BACKEND: {settings.storage_backend!r}")
    from .json_storage import JsonRepository, JsonStorage

    return JsonRepository(JsonStorage(settings.data_file, in_memory=settings.storage_in_memory))
