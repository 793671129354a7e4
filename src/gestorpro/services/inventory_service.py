from __future__ import annotations

import logging
from typing import Iterable

from gestorpro.domain.errors import NotFoundError, ValidationError
from gestorpro.domain.ids import IdGenerator
from gestorpro.domain.models import Product, sell_price_for
from gestorpro.repositories.contracts import DocumentStore
from gestorpro.repositories.unit_of_work import DocumentUnitOfWork

log = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, store: DocumentStore, ids: IdGenerator | None = None):
        self.store = store
        self.ids = ids or IdGenerator()

    def list_products(self) -> list[Product]:
        return [Product.from_dict(r) for r in self.store.get_collection("products")]

    def get_product(self, product_id: str) -> Product:
        for p in self.list_products():
            if p.id == str(product_id):
                return p
        raise NotFoundError("Product not found.")

    @staticmethod
    def compute_sell_price(buy_price: float, margin: float) -> float:
        return sell_price_for(buy_price, margin)

    def save_product(
        self,
        product_id: str | None,
        description: str,
        category: str,
        quantity: int,
        buy_price: float,
        margin: float,
    ) -> Product:
        """Create (empty ``product_id``) or replace a product.

        ``sellPrice`` is derived here and stored; it is never recomputed on read.
        """
        description = (description or "").strip()
        category = (category or "").strip()
        if not description:
            raise ValidationError("Description is required.")
        if int(quantity) < 0:
            raise ValidationError("Quantity must be >= 0.")
        if float(buy_price) < 0:
            raise ValidationError("Buy price must be >= 0.")

        editing = bool(product_id)
        product = Product(
            id=str(product_id) if editing else self.ids.next_str(),
            description=description,
            category=category,
            quantity=int(quantity),
            buy_price=float(buy_price),
            margin=float(margin),
            sell_price=self.compute_sell_price(buy_price, margin),
        )

        with DocumentUnitOfWork(self.store) as uow:
            records = uow.get("products")
            if editing:
                if not any(str(r.get("id")) == product.id for r in records):
                    raise NotFoundError("Product not found.")
                records = [product.to_dict() if str(r.get("id")) == product.id else r for r in records]
            else:
                records.append(product.to_dict())
            uow.stage("products", records)

        log.info("product_saved id=%s edit=%s qty=%s sell=%.2f", product.id, editing, product.quantity, product.sell_price)
        return product

    def delete_product(self, product_id: str, confirmed: bool) -> bool:
        if not confirmed:
            return False
        with DocumentUnitOfWork(self.store) as uow:
            records = uow.get("products")
            kept = [r for r in records if str(r.get("id")) != str(product_id)]
            if len(kept) == len(records):
                return False
            uow.stage("products", kept)
        log.info("product_deleted id=%s", product_id)
        return True

    @staticmethod
    def price_divergences(products: Iterable[Product]) -> list[Product]:
        """Products whose stored sell price no longer matches buy price and margin."""
        return [p for p in products if not p.price_is_consistent()]
