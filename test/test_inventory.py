from pathlib import Path

import pytest
from conftest import fixed_ids

from gestorpro.domain.errors import NotFoundError, ValidationError
from gestorpro.domain.models import Product
from gestorpro.repositories.json_store import JsonDocumentStore
from gestorpro.services.inventory_service import InventoryService


def _setup(tmp_path: Path) -> tuple[JsonDocumentStore, InventoryService]:
    store = JsonDocumentStore(tmp_path / "database.json")
    store.initialize()
    return store, InventoryService(store, fixed_ids())


def test_save_product_stores_derived_sell_price(tmp_path: Path):
    store, inv = _setup(tmp_path)

    product = inv.save_product(None, "Coffee 500g", "Groceries", 12, 8.0, 25.0)

    assert product.sell_price == 10.0
    assert store.get_collection("products") == [{
        "id": product.id,
        "description": "Coffee 500g",
        "category": "Groceries",
        "quantity": 12,
        "buyPrice": 8.0,
        "margin": 25.0,
        "sellPrice": 10.0,
    }]


def test_new_products_get_distinct_ids_from_same_clock(tmp_path: Path):
    _store, inv = _setup(tmp_path)

    a = inv.save_product(None, "A", "", 1, 1.0, 0.0)
    b = inv.save_product(None, "B", "", 1, 1.0, 0.0)

    assert a.id != b.id
    assert int(b.id) == int(a.id) + 1


def test_edit_replaces_product_in_place(tmp_path: Path):
    _store, inv = _setup(tmp_path)
    first = inv.save_product(None, "A", "", 1, 1.0, 0.0)
    second = inv.save_product(None, "B", "", 1, 1.0, 0.0)

    inv.save_product(first.id, "A2", "Misc", 4, 2.0, 50.0)

    listed = inv.list_products()
    assert [p.id for p in listed] == [first.id, second.id]
    assert listed[0].description == "A2"
    assert listed[0].sell_price == 3.0


def test_edit_of_unknown_product_raises(tmp_path: Path):
    _store, inv = _setup(tmp_path)

    with pytest.raises(NotFoundError):
        inv.save_product("404", "Ghost", "", 1, 1.0, 0.0)


def test_save_product_validation(tmp_path: Path):
    _store, inv = _setup(tmp_path)

    with pytest.raises(ValidationError):
        inv.save_product(None, "  ", "", 1, 1.0, 0.0)
    with pytest.raises(ValidationError):
        inv.save_product(None, "X", "", -1, 1.0, 0.0)
    with pytest.raises(ValidationError):
        inv.save_product(None, "X", "", 1, -1.0, 0.0)


def test_delete_product_needs_confirmation(tmp_path: Path):
    _store, inv = _setup(tmp_path)
    p = inv.save_product(None, "A", "", 1, 1.0, 0.0)

    assert inv.delete_product(p.id, confirmed=False) is False
    assert len(inv.list_products()) == 1
    assert inv.delete_product(p.id, confirmed=True) is True
    assert inv.list_products() == []


def test_stored_sell_price_is_trusted_but_divergence_is_flagged(tmp_path: Path):
    store, inv = _setup(tmp_path)
    store.replace_collection("products", [
        {"id": "1", "description": "Ok", "category": "", "quantity": 1, "buyPrice": 10.0, "margin": 20.0, "sellPrice": 12.0},
        {"id": "2", "description": "Drift", "category": "", "quantity": 1, "buyPrice": 10.0, "margin": 30.0, "sellPrice": 12.0},
    ])

    products = inv.list_products()

    assert products[1].sell_price == 12.0
    assert [p.id for p in inv.price_divergences(products)] == ["2"]


def test_product_from_dict_reads_camel_case_keys():
    p = Product.from_dict({"id": 17, "description": "X", "quantity": "3", "buyPrice": "1.5", "margin": 10, "sellPrice": 1.65})

    assert p.id == "17"
    assert p.quantity == 3
    assert p.buy_price == 1.5
