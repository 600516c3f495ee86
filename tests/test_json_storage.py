from __future__ import annotations

import json
import threading

import pytest

from flowers_api.core.errors import NotFound, StorageUnavailable
from flowers_api.repositories.json_storage import JsonRepository, JsonStorage


def test_missing_file_reads_as_empty_document(tmp_path):
    storage = JsonStorage(tmp_path / "nope.json")
    assert storage.read_all() == {}


def test_write_then_read_returns_same_document(tmp_path):
    storage = JsonStorage(tmp_path / "data.json")
    doc = {"paises": [{"id": "1", "name": "Ecuador"}], "productos": [{"id": "2", "name": "Rosa ñ"}]}
    storage.write_all(doc)
    assert storage.read_all() == doc
    # human readable, non-ascii kept as is
    text = (tmp_path / "data.json").read_text(encoding="utf-8")
    assert "Rosa ñ" in text
    assert "\n  " in text


def test_corrupt_file_raises_storage_unavailable(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageUnavailable) as exc:
        JsonStorage(path).read_all()
    assert exc.value.status_code == 503


def test_non_object_document_is_rejected(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        JsonStorage(path).read_all()


def test_unwritable_location_raises_storage_unavailable(tmp_path):
    storage = JsonStorage(tmp_path / "missing-dir" / "data.json")
    with pytest.raises(StorageUnavailable):
        storage.write_all({"paises": []})


def test_in_memory_mode_never_touches_disk(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"paises": [{"id": "1", "name": "Ecuador"}]}), encoding="utf-8")
    storage = JsonStorage(path, in_memory=True)
    repo = JsonRepository(storage)

    new_id = repo.add("paises", {"name": "Colombia"})

    assert [p["name"] for p in repo.list("paises")] == ["Ecuador", "Colombia"]
    assert repo.get("paises", new_id)["name"] == "Colombia"
    assert json.loads(path.read_text(encoding="utf-8")) == {"paises": [{"id": "1", "name": "Ecuador"}]}


def test_add_assigns_distinct_ids_and_ignores_submitted_id(tmp_path):
    repo = JsonRepository(JsonStorage(tmp_path / "data.json"))
    ids = [repo.add("fincas", {"id": "forced", "name": f"Finca {n}"}) for n in range(5)]

    assert len(set(ids)) == 5
    assert "forced" not in ids
    assert [f["name"] for f in repo.list("fincas")] == [f"Finca {n}" for n in range(5)]


def test_update_merges_fields_and_keeps_id(tmp_path):
    repo = JsonRepository(JsonStorage(tmp_path / "data.json"))
    new_id = repo.add("customers", {"name": "Acme", "city": "Miami"})

    repo.update("customers", new_id, {"id": "other", "city": "Dallas"})

    assert repo.get("customers", new_id) == {"id": new_id, "name": "Acme", "city": "Dallas"}


def test_update_unknown_record_raises_not_found_and_changes_nothing(tmp_path):
    path = tmp_path / "data.json"
    repo = JsonRepository(JsonStorage(path))
    repo.add("customers", {"name": "Acme"})
    before = path.read_bytes()

    with pytest.raises(NotFound):
        repo.update("customers", "missing", {"name": "x"})

    assert path.read_bytes() == before


def test_delete_unknown_record_is_a_no_op(tmp_path):
    path = tmp_path / "data.json"
    repo = JsonRepository(JsonStorage(path))
    repo.add("daes", {"number": "028-2024"})
    before = path.read_text(encoding="utf-8")

    repo.delete("daes", "missing")

    assert path.read_text(encoding="utf-8") == before


def test_delete_removes_only_that_record(tmp_path):
    repo = JsonRepository(JsonStorage(tmp_path / "data.json"))
    keep = repo.add("daes", {"number": "A"})
    drop = repo.add("daes", {"number": "B"})

    repo.delete("daes", drop)

    assert [d["id"] for d in repo.list("daes")] == [keep]


def test_write_all_of_read_all_keeps_file_identical(tmp_path):
    path = tmp_path / "data.json"
    repo = JsonRepository(JsonStorage(path))
    repo.add("paises", {"name": "Ecuador"})
    repo.add("invoices", {"invoiceNumber": "1", "items": [{"id": "a", "bunches": [{"id": "b1"}]}]})
    before = path.read_bytes()

    repo.write_all(repo.read_all())

    assert path.read_bytes() == before


def test_reads_never_see_a_partial_document(tmp_path):
    path = tmp_path / "data.json"
    storage = JsonStorage(path)
    storage.write_all({"paises": [{"id": str(n), "name": f"Pais {n}" * 20} for n in range(2000)]})
    repo = JsonRepository(storage)
    errors = []
    done = threading.Event()

    def writer():
        try:
            for n in range(40):
                repo.add("paises", {"name": f"nuevo {n}"})
        finally:
            done.set()

    def reader():
        while not done.is_set():
            try:
                repo.list("paises")
            except StorageUnavailable as exc:
                errors.append(exc)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(repo.list("paises")) == 2040
    # no temporary files left behind
    assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


def test_reader_of_same_file_from_another_storage_sees_complete_documents(tmp_path):
    path = tmp_path / "data.json"
    writer_repo = JsonRepository(JsonStorage(path))
    writer_repo.write_all({"paises": [{"id": str(n), "name": "x" * 200} for n in range(2000)]})
    # separate storage object: no shared lock, relies on the atomic replace
    reader_storage = JsonStorage(path)
    errors = []
    done = threading.Event()

    def writer():
        try:
            for n in range(20):
                writer_repo.add("paises", {"name": f"nuevo {n}"})
        finally:
            done.set()

    def reader():
        while not done.is_set():
            try:
                reader_storage.read_all()
            except StorageUnavailable as exc:
                errors.append(exc)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
