"""Generic CRUD service over one collection of the persistence adapter."""

from __future__ import annotations

import copy
from typing import Any, Callable, Mapping, Optional

from flowers_api.core.errors import NotFound
from flowers_api.core.logs import logger
from flowers_api.repositories import get_repository

LOG = logger(__name__)


class EntityService:
    """
    list/get/add/update/delete for one collection.

    ``defaults`` fill fields missing from stored records when they are read
    (older records predate some fields). ``prepare`` converts submitted
    fields before they are written (e.g. dates to ISO strings). No business
    validation happens here beyond identifier presence.
    """

    def __init__(
        self,
        collection: str,
        defaults: Mapping[str, Any] | None = None,
        prepare: Optional[Callable[[Mapping[str, Any]], dict]] = None,
    ) -> None:
        self.collection = collection
        self.defaults = dict(defaults or {})
        self.prepare = prepare

    @property
    def repository(self):
        # resolved per call so configuration changes (tests) take effect
        return get_repository()

    def normalize(self, record: Mapping[str, Any]) -> dict:
        # fresh copy per record so list defaults are never shared
        return {**copy.deepcopy(self.defaults), **record}

    def list(self) -> list[dict]:
        return [self.normalize(r) for r in self.repository.list(self.collection)]

    def get(self, entity_id: str) -> dict | None:
        if not entity_id:
            return None
        record = self.repository.get(self.collection, entity_id)
        return self.normalize(record) if record is not None else None

    def require(self, entity_id: str) -> dict:
        record = self.get(entity_id)
        if record is None:
            raise NotFound(f"{self.collection} record {entity_id} not found")
        return record

    def _clean(self, fields: Mapping[str, Any]) -> dict:
        data = {k: v for k, v in fields.items() if k != "id"}
        return self.prepare(data) if self.prepare else data

    def add(self, fields: Mapping[str, Any]) -> str:
        data = self._clean(fields)
        new_id = self.repository.add(self.collection, data)
        LOG.info("Added %s record %s", self.collection, new_id)
        return new_id

    def update(self, entity_id: str, fields: Mapping[str, Any]) -> None:
        data = self._clean(fields)
        self.repository.update(self.collection, entity_id, data)
        LOG.info("Updated %s record %s", self.collection, entity_id)

    def delete(self, entity_id: str) -> None:
        self.repository.delete(self.collection, entity_id)
        LOG.info("Deleted %s record %s", self.collection, entity_id)
