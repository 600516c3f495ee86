"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

import pytest
from sqlalchemy import select

from flowers_api.core import config as core_config
from flowers_api.core.errors import NotFound
from flowers_api.db import models
from flowers_api.db import session as db_session
from flowers_api.repositories import get_repository
from flowers_api.repositories.sql_repository import SQLRepository
from flowers_api.services import productos


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite file; engine disposed on teardown so the file is not left locked on Windows."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    # clear caches so the env is read again
    core_config.get_settings.cache_clear()
    get_repository.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    db_session.create_schema()

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    core_config.get_settings.cache_clear()
    get_repository.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


def test_record_crud_flow(temp_db):
    repo = SQLRepository()
    first = repo.add("variedades", {"name": "Freedom", "color": "red"})
    second = repo.add("variedades", {"name": "Explorer", "color": "red"})
    assert first != second

    assert [v["name"] for v in repo.list("variedades")] == ["Freedom", "Explorer"]
    assert repo.get("variedades", first) == {"id": first, "name": "Freedom", "color": "red"}

    repo.update("variedades", first, {"color": "dark red"})
    assert repo.get("variedades", first)["color"] == "dark red"
    assert repo.get("variedades", first)["name"] == "Freedom"

    repo.delete("variedades", first)
    assert repo.get("variedades", first) is None
    # deleting again is harmless
    repo.delete("variedades", first)
    assert [v["id"] for v in repo.list("variedades")] == [second]


def _rows():
    with db_session.get_session() as session:
        rows = session.execute(select(models.Document).order_by(models.Document.collection, models.Document.position))
        return [
            (row.collection, row.doc_id, row.position, row.data, row.created_at, row.updated_at)
            for row in rows.scalars()
        ]


def test_update_missing_raises_not_found_and_changes_nothing(temp_db):
    repo = SQLRepository()
    repo.add("fincas", {"name": "La Rosaleda"})
    before = _rows()

    with pytest.raises(NotFound):
        repo.update("fincas", "missing", {"name": "x"})

    assert _rows() == before


def test_delete_missing_is_a_no_op(temp_db):
    repo = SQLRepository()
    repo.add("fincas", {"name": "La Rosaleda"})
    before = _rows()

    repo.delete("fincas", "missing")

    assert _rows() == before


def test_write_all_of_read_all_leaves_rows_untouched(temp_db):
    repo = SQLRepository()
    repo.add("paises", {"name": "Ecuador"})
    repo.add("invoices", {"invoiceNumber": "1", "items": [{"id": "a", "bunches": []}]})
    before = _rows()

    repo.write_all(repo.read_all())

    assert _rows() == before


def test_write_all_updates_changed_rows_only(temp_db):
    repo = SQLRepository()
    keep = repo.add("paises", {"name": "Ecuador"})
    change = repo.add("paises", {"name": "Colombia"})
    gone = repo.add("paises", {"name": "Peru"})
    before = {row[1]: row for row in _rows()}
    data = repo.read_all()
    data["paises"] = [r for r in data["paises"] if r["id"] != gone]
    data["paises"][1]["name"] = "Colombia!"

    repo.write_all(data)

    after = {row[1]: row for row in _rows()}
    assert set(after) == {keep, change}
    assert after[keep] == before[keep]
    assert after[change][3] == {"name": "Colombia!"}
    assert after[change][4] == before[change][4]


def test_write_all_replaces_document_and_keeps_order(temp_db):
    repo = SQLRepository()
    repo.add("paises", {"name": "stale"})
    doc = {
        "paises": [{"id": "ec", "name": "Ecuador"}, {"id": "co", "name": "Colombia"}],
        "invoices": [{"id": "inv-1", "items": [{"id": "a", "bunches": []}]}],
    }

    repo.write_all(doc)

    assert repo.read_all() == doc


def test_services_use_sql_backend(temp_db):
    new_id = productos.add_producto({"name": "Rose"})
    assert productos.get_productos() == [{"id": new_id, "name": "Rose"}]
