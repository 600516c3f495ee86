"""
Shared application data and the hydration bridge.

``AppDataStore`` is the process-wide container the UI reads from: it starts
with every collection empty and is filled by explicit ``hydrate`` calls.
``DataHydrator`` pushes collections loaded by a page into the store, once per
distinct props object. It is a one-way push, not a subscription: later
storage changes are only seen when a new props object is supplied.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Mapping, Optional

from flowers_api.core.logs import logger
from flowers_api.domain.collections import COLLECTIONS, empty_app_data, is_known_collection
from flowers_api.services.catalog import SERVICES_BY_COLLECTION

LOG = logger(__name__)

_UNSET = object()


class AppDataStore:
    def __init__(self) -> None:
        self._data = empty_app_data()
        self._lock = threading.Lock()
        self.is_loading = True
        self.has_been_loaded = False

    def hydrate(self, partial: Mapping[str, Any]) -> None:
        """Replace the given collections in one update and mark the store loaded."""
        unknown = [name for name in partial if not is_known_collection(name)]
        if unknown:
            raise ValueError(f"Unknown collections: {', '.join(sorted(unknown))}")
        update = {name: list(records or []) for name, records in partial.items()}
        with self._lock:
            self._data.update(update)
            self.has_been_loaded = True
            self.is_loading = False

    def collection(self, name: str) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._data.get(name, []))

    def snapshot(self) -> dict:
        with self._lock:
            return {
                **copy.deepcopy(self._data),
                "isLoading": self.is_loading,
                "hasBeenLoaded": self.has_been_loaded,
            }


class DataHydrator:
    """Applies page props to the store exactly once per props object."""

    def __init__(self, store: AppDataStore) -> None:
        self.store = store
        self._last_props: Any = _UNSET

    def __call__(self, props: Optional[Mapping[str, Any]]) -> bool:
        if props is self._last_props:
            return False
        self._last_props = props
        provided = {name: records for name, records in (props or {}).items() if records is not None}
        if not provided:
            return False
        self.store.hydrate(provided)
        LOG.debug("Hydrated collections: %s", ", ".join(sorted(provided)))
        return True


def load_collections(names: Optional[list[str]] = None) -> dict[str, list[dict]]:
    """Read the named collections (all by default) through the entity services."""
    selected = names if names is not None else list(COLLECTIONS)
    return {name: SERVICES_BY_COLLECTION[name].list() for name in selected}
