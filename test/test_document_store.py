import json
from pathlib import Path

import pytest

from gestorpro.domain.errors import PersistenceError
from gestorpro.repositories.json_store import JsonDocumentStore, empty_document
from gestorpro.repositories.unit_of_work import DocumentUnitOfWork


def test_initialize_creates_scaffold(tmp_path: Path):
    db = tmp_path / "data" / "database.json"
    store = JsonDocumentStore(db)
    store.initialize()

    assert db.exists()
    assert json.loads(db.read_text(encoding="utf-8")) == {"products": [], "sales": [], "users": [], "quotes": []}


def test_replace_then_get_returns_same_sequence(tmp_path: Path):
    store = JsonDocumentStore(tmp_path / "database.json")
    store.initialize()
    records = [{"id": "2", "description": "B"}, {"id": "1", "description": "A"}]

    assert store.replace_collection("products", records) is True
    assert store.get_collection("products") == records


def test_initialize_is_idempotent(tmp_path: Path):
    db = tmp_path / "database.json"
    store = JsonDocumentStore(db)
    store.initialize()
    store.replace_collection("users", [{"id": 1, "name": "Ana", "email": "ana@x.com", "pass": "x"}])
    once = db.read_text(encoding="utf-8")

    store.initialize()
    assert db.read_text(encoding="utf-8") == once


def test_initialize_adds_missing_quotes_and_keeps_other_tables(tmp_path: Path):
    db = tmp_path / "database.json"
    original = {
        "products": [{"id": "1", "description": "Pen", "quantity": 3}],
        "sales": [{"id": 17, "items": [], "totalPrice": 0}],
        "users": [{"id": 5, "name": "Ana", "email": "ana@x.com", "pass": "x"}],
    }
    db.write_text(json.dumps(original), encoding="utf-8")

    JsonDocumentStore(db).initialize()

    migrated = json.loads(db.read_text(encoding="utf-8"))
    assert migrated == {**original, "quotes": []}


def test_read_all_falls_back_to_scaffold_on_corrupt_document(tmp_path: Path):
    db = tmp_path / "database.json"
    db.write_text("{ not json", encoding="utf-8")
    store = JsonDocumentStore(db)

    assert store.read_all() == empty_document()
    assert store.get_collection("products") == []


def test_initialize_swallows_corrupt_document(tmp_path: Path):
    db = tmp_path / "database.json"
    db.write_text("[1, 2, 3]", encoding="utf-8")

    JsonDocumentStore(db).initialize()

    assert db.read_text(encoding="utf-8") == "[1, 2, 3]"


def test_get_collection_missing_name_is_empty(tmp_path: Path):
    store = JsonDocumentStore(tmp_path / "database.json")
    store.initialize()

    assert store.get_collection("suppliers") == []


def test_write_failure_is_reported_as_false(tmp_path: Path):
    store = JsonDocumentStore(tmp_path / "missing-dir" / "database.json")

    assert store.replace_collection("products", [{"id": "1"}]) is False


def test_unit_of_work_writes_all_tables_once(tmp_path: Path):
    class CountingStore(JsonDocumentStore):
        writes = 0

        def replace_collections(self, tables):
            CountingStore.writes += 1
            return super().replace_collections(tables)

    store = CountingStore(tmp_path / "database.json")
    store.initialize()

    with DocumentUnitOfWork(store) as uow:
        uow.stage("products", [{"id": "1"}])
        uow.stage("sales", [{"id": 2}])

    assert CountingStore.writes == 1
    assert store.get_collection("products") == [{"id": "1"}]
    assert store.get_collection("sales") == [{"id": 2}]


def test_unit_of_work_discards_staged_tables_on_error(tmp_path: Path):
    store = JsonDocumentStore(tmp_path / "database.json")
    store.initialize()

    with pytest.raises(RuntimeError):
        with DocumentUnitOfWork(store) as uow:
            uow.stage("products", [{"id": "1"}])
            raise RuntimeError("boom")

    assert store.get_collection("products") == []


def test_unit_of_work_raises_when_store_cannot_write(tmp_path: Path):
    store = JsonDocumentStore(tmp_path / "missing-dir" / "database.json")

    with pytest.raises(PersistenceError):
        with DocumentUnitOfWork(store) as uow:
            uow.stage("products", [{"id": "1"}])
