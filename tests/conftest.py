from __future__ import annotations

import sys
from pathlib import Path

import pytest

# make the flowers_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flowers_api.core import config as core_config
from flowers_api.repositories import get_repository


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    get_repository.cache_clear()


@pytest.fixture()
def json_backend(tmp_path, monkeypatch):
    """Point the services at an empty JSON document in a temporary directory."""
    data_file = tmp_path / "data.json"
    monkeypatch.setenv("STORAGE_BACKEND", "json")
    monkeypatch.setenv("DATA_FILE", str(data_file))
    monkeypatch.setenv("STORAGE_IN_MEMORY", "0")
    _clear_caches()
    yield data_file
    _clear_caches()
