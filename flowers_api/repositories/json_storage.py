"""
JSON document persistence adapter.

The whole application state lives in one JSON document whose top-level keys
are collection names. Every mutation is a read-modify-write of the full
document. Within one process reads and mutations are serialized by a lock,
and the file is replaced atomically so other processes never see a partial
document. Separate processes writing the same file are not coordinated (last
writer wins).
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Mapping

from flowers_api.core.errors import NotFound, StorageUnavailable
from flowers_api.core.logs import logger
from flowers_api.core.utils import timestamp_id

LOG = logger(__name__)

AppData = dict[str, list[dict]]


class JsonStorage:
    """Reads and writes the whole document; optionally kept only in memory."""

    def __init__(self, path: Path | str, *, in_memory: bool = False) -> None:
        self.path = Path(path)
        self.in_memory = in_memory
        self._memory: AppData | None = None

    def read_all(self) -> AppData:
        if self.in_memory and self._memory is not None:
            return copy.deepcopy(self._memory)
        if not self.path.exists():
            data: AppData = {}
        else:
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as exc:
                LOG.error("Error reading from local DB %s: %s", self.path, exc)
                raise StorageUnavailable("Could not read from local database.") from exc
            if not isinstance(data, dict):
                LOG.error("Local DB %s is not a JSON object", self.path)
                raise StorageUnavailable("Could not read from local database.")
        if self.in_memory:
            self._memory = copy.deepcopy(data)
        return data

    def write_all(self, data: Mapping[str, Any]) -> None:
        if self.in_memory:
            self._memory = copy.deepcopy(dict(data))
            return
        try:
            text = json.dumps(data, ensure_ascii=False, indent=2)
            self._replace(text)
        except (OSError, TypeError, ValueError) as exc:
            LOG.error("Error writing to local DB %s: %s", self.path, exc)
            raise StorageUnavailable("Could not write to local database.") from exc

    def _replace(self, text: str) -> None:
        # readers only ever see the previous or the new complete document
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class JsonRepository:
    """Collection primitives on top of JsonStorage."""

    def __init__(self, storage: JsonStorage) -> None:
        self.storage = storage
        self._lock = threading.Lock()

    # -------------------------- whole document --------------------------
    def read_all(self) -> AppData:
        with self._lock:
            return self.storage.read_all()

    def write_all(self, data: Mapping[str, Any]) -> None:
        with self._lock:
            self.storage.write_all(data)

    # -------------------------- records --------------------------
    def list(self, collection: str) -> list[dict]:
        with self._lock:
            data = self.storage.read_all()
        return list(data.get(collection) or [])

    def get(self, collection: str, entity_id: str) -> dict | None:
        for record in self.list(collection):
            if str(record.get("id")) == str(entity_id):
                return record
        return None

    def add(self, collection: str, fields: Mapping[str, Any]) -> str:
        with self._lock:
            data = self.storage.read_all()
            records = data.setdefault(collection, [])
            new_id = timestamp_id(str(r.get("id")) for r in records)
            record = {key: value for key, value in fields.items() if key != "id"}
            records.append({"id": new_id, **record})
            self.storage.write_all(data)
        return new_id

    def update(self, collection: str, entity_id: str, fields: Mapping[str, Any]) -> None:
        with self._lock:
            data = self.storage.read_all()
            for record in data.get(collection) or []:
                if str(record.get("id")) == str(entity_id):
                    record.update({key: value for key, value in fields.items() if key != "id"})
                    break
            else:
                raise NotFound(f"{collection} record {entity_id} not found")
            self.storage.write_all(data)

    def delete(self, collection: str, entity_id: str) -> None:
        with self._lock:
            data = self.storage.read_all()
            records = data.get(collection) or []
            remaining = [r for r in records if str(r.get("id")) != str(entity_id)]
            if len(remaining) == len(records):
                return
            data[collection] = remaining
            self.storage.write_all(data)
