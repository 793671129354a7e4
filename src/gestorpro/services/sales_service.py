from __future__ import annotations

from typing import Sequence

import logging
from gestorpro.domain.errors import InsufficientStockError, ValidationError
from gestorpro.domain.ids import IdGenerator, iso_timestamp
from gestorpro.domain.models import PAYMENT_METHODS, LineItem, Product, Sale, lines_total
from gestorpro.repositories.contracts import DocumentStore
from gestorpro.repositories.unit_of_work import DocumentUnitOfWork

log = logging.getLogger("gestorpro.sales")

Cart = tuple[LineItem, ...]


class SalesService:
    payment_methods = PAYMENT_METHODS

    def __init__(self, store: DocumentStore, ids: IdGenerator | None = None):
        self.store = store
        self.ids = ids or IdGenerator()

    def list_sales(self) -> list[Sale]:
        return [Sale.from_dict(r) for r in self.store.get_collection("sales")]

    def add_to_cart(self, cart: Cart, products: Sequence[Product], product_id: str | None, quantity: int) -> Cart:
        if not product_id:
            raise ValidationError("Select a product.")
        qty = int(quantity)
        if qty < 1:
            raise ValidationError("Quantity must be >= 1.")

        product = next((p for p in products if p.id == str(product_id)), None)
        if product is None:
            raise ValidationError("Unknown product.")

        # Lines for the same product add up against the same stock.
        in_cart = sum(it.quantity for it in cart if it.product_id == product.id)
        if in_cart + qty > product.quantity:
            raise InsufficientStockError(f"Not enough stock for {product.description}. Available: {product.quantity}")

        return tuple(cart) + (LineItem.for_product(product, qty),)

    @staticmethod
    def remove_from_cart(cart: Cart, index: int) -> Cart:
        if not 0 <= index < len(cart):
            return tuple(cart)
        return tuple(cart[:index]) + tuple(cart[index + 1:])

    def commit_sale(self, cart: Cart, payment_method: str) -> Sale:
        """
        Decrements stock for every cart line and records the sale.

        Both tables go out in a single document write. Lines whose product
        no longer exists are recorded but have no stock effect. Stock is not
        re-validated here; ``add_to_cart`` already did.
        """
        items = tuple(cart)
        if not items:
            raise ValidationError("Cart is empty.")
        method = (payment_method or "").strip()
        if not method:
            raise ValidationError("Select a payment method.")

        with DocumentUnitOfWork(self.store) as uow:
            products = uow.get("products")
            for it in items:
                record = next((r for r in products if str(r.get("id")) == it.product_id), None)
                if record is None:
                    log.warning("sale_line_without_product product_id=%s", it.product_id)
                    continue
                record["quantity"] = int(record.get("quantity") or 0) - it.quantity

            sale = Sale(
                id=self.ids.next_int(),
                items=items,
                total_price=lines_total(items),
                payment_method=method,
                created_at=iso_timestamp(self.ids.clock()),
            )
            sales = uow.get("sales")
            sales.append(sale.to_dict())

            uow.stage("products", products)
            uow.stage("sales", sales)

        log.info("sale_created sale_id=%s items=%s total=%.2f payment=%s", sale.id, len(items), sale.total_price, method)
        return sale
