from pathlib import Path

import pytest
from conftest import fixed_ids, product_record

from gestorpro.domain.errors import NotFoundError, ValidationError
from gestorpro.domain.models import Product
from gestorpro.repositories.json_store import JsonDocumentStore
from gestorpro.services.quote_service import QuoteService


def _setup(tmp_path: Path):
    store = JsonDocumentStore(tmp_path / "database.json")
    store.initialize()
    products = [
        Product.from_dict(product_record("A", "Desk lamp", 4, buy=20.0, margin=50.0)),
        Product.from_dict(product_record("B", "Chair", 9, buy=100.0, margin=10.0)),
    ]
    store.replace_collection("products", [p.to_dict() for p in products])
    return store, products, QuoteService(store, fixed_ids())


def test_new_quote_gets_id_and_created_at_on_save(tmp_path: Path):
    store, products, quotes = _setup(tmp_path)

    draft = quotes.new_draft()
    assert draft.quote_id is None
    assert draft.validity == "7"

    draft = quotes.add_item(draft, products, "A", 2)
    draft = quotes.with_details(draft, customer=" Maria ", customer_email="maria@example.com")
    quote = quotes.save(draft)

    assert quote.id
    assert quote.created_at == "2024-05-10T14:30:00.000Z"
    assert quote.total_price == 60.0
    assert quote.customer == "Maria"
    assert store.get_collection("quotes")[0]["id"] == quote.id


def test_editing_a_quote_keeps_id_and_created_at(tmp_path: Path):
    store, products, quotes = _setup(tmp_path)
    store.replace_collection("quotes", [{
        "id": "123",
        "customer": "Joao",
        "customerEmail": "",
        "customerPhone": "",
        "items": [{"id": "A", "description": "Desk lamp", "quantity": 1, "price": 30.0, "total": 30.0}],
        "totalPrice": 30.0,
        "validity": "15",
        "createdAt": "2024-01-01T00:00:00Z",
    }])

    draft = quotes.edit("123")
    assert draft.quote_id == "123"
    assert draft.validity == "15"

    draft = quotes.remove_item(draft, 0)
    draft = quotes.add_item(draft, products, "B", 2)
    quotes.save(draft)

    stored = store.get_collection("quotes")
    assert len(stored) == 1
    assert stored[0]["id"] == "123"
    assert stored[0]["createdAt"] == "2024-01-01T00:00:00Z"
    assert stored[0]["totalPrice"] == pytest.approx(220.0)
    assert [it["id"] for it in stored[0]["items"]] == ["B"]


def test_saving_an_empty_quote_is_rejected(tmp_path: Path):
    store, _products, quotes = _setup(tmp_path)
    before = store.get_collection("quotes")

    with pytest.raises(ValidationError):
        quotes.save(quotes.new_draft())

    assert store.get_collection("quotes") == before


def test_quote_line_keeps_price_captured_when_added(tmp_path: Path):
    _store, products, quotes = _setup(tmp_path)
    draft = quotes.add_item(quotes.new_draft(), products, "A", 1)

    repriced = [Product.from_dict({**products[0].to_dict(), "sellPrice": 99.0})]
    draft = quotes.add_item(draft, repriced, "A", 1)

    assert [it.price for it in draft.items] == [30.0, 99.0]


def test_add_item_validation(tmp_path: Path):
    _store, products, quotes = _setup(tmp_path)

    with pytest.raises(ValidationError):
        quotes.add_item(quotes.new_draft(), products, None, 1)
    with pytest.raises(ValidationError):
        quotes.add_item(quotes.new_draft(), products, "A", 0)
    with pytest.raises(ValidationError, match="Unknown product"):
        quotes.add_item(quotes.new_draft(), products, "Z", 1)


def test_delete_requires_confirmation(tmp_path: Path):
    store, products, quotes = _setup(tmp_path)
    quote = quotes.save(quotes.add_item(quotes.new_draft(), products, "A", 1))

    assert quotes.delete(quote.id, confirmed=False) is False
    assert len(store.get_collection("quotes")) == 1

    assert quotes.delete(quote.id, confirmed=True) is True
    assert store.get_collection("quotes") == []


def test_edit_unknown_quote_raises(tmp_path: Path):
    _store, _products, quotes = _setup(tmp_path)

    with pytest.raises(NotFoundError):
        quotes.edit("nope")


def test_printable_quote_escapes_customer_and_shows_total(tmp_path: Path):
    _store, products, quotes = _setup(tmp_path)
    draft = quotes.with_details(quotes.add_item(quotes.new_draft(), products, "B", 1), customer="<Acme & Co>")
    quote = quotes.save(draft)

    page = quotes.render_printable(quote.id)

    assert "&lt;Acme &amp; Co&gt;" in page
    assert f"No. {quote.id[-6:]}" in page
    assert "R$ 110.00" in page
    assert "10/05/2024" in page


def test_printable_quote_defaults_customer(tmp_path: Path):
    _store, products, quotes = _setup(tmp_path)
    quote = quotes.save(quotes.add_item(quotes.new_draft(), products, "A", 1))

    assert "Final consumer" in quotes.render_printable(quote.id)
