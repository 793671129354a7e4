from __future__ import annotations

import html
import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from gestorpro.domain.errors import NotFoundError, ValidationError
from gestorpro.domain.ids import IdGenerator, iso_timestamp, parse_timestamp
from gestorpro.domain.models import (
    DEFAULT_QUOTE_VALIDITY,
    LineItem,
    Product,
    Quote,
    format_money,
    lines_total,
)
from gestorpro.repositories.contracts import DocumentStore
from gestorpro.repositories.unit_of_work import DocumentUnitOfWork

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuoteDraft:
    """Quote being edited in memory. ``quote_id`` is set only when editing a saved quote."""

    quote_id: Optional[str] = None
    customer: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    validity: str = DEFAULT_QUOTE_VALIDITY
    items: tuple[LineItem, ...] = ()

    @property
    def total_price(self) -> float:
        return lines_total(self.items)


class QuoteService:
    def __init__(self, store: DocumentStore, ids: IdGenerator | None = None):
        self.store = store
        self.ids = ids or IdGenerator()

    def list_quotes(self) -> list[Quote]:
        return [Quote.from_dict(r) for r in self.store.get_collection("quotes")]

    def get_quote(self, quote_id: str) -> Quote:
        for q in self.list_quotes():
            if q.id == str(quote_id):
                return q
        raise NotFoundError("Quote not found.")

    @staticmethod
    def new_draft() -> QuoteDraft:
        return QuoteDraft()

    @staticmethod
    def with_details(
        draft: QuoteDraft,
        customer: str | None = None,
        customer_email: str | None = None,
        customer_phone: str | None = None,
        validity: str | None = None,
    ) -> QuoteDraft:
        changes = {}
        if customer is not None:
            changes["customer"] = customer.strip()
        if customer_email is not None:
            changes["customer_email"] = customer_email.strip()
        if customer_phone is not None:
            changes["customer_phone"] = customer_phone.strip()
        if validity is not None:
            changes["validity"] = str(validity).strip() or DEFAULT_QUOTE_VALIDITY
        return replace(draft, **changes)

    @staticmethod
    def add_item(draft: QuoteDraft, products: Sequence[Product], product_id: str | None, quantity: int) -> QuoteDraft:
        if not product_id:
            raise ValidationError("Select a product.")
        qty = int(quantity)
        if qty < 1:
            raise ValidationError("Quantity must be >= 1.")
        product = next((p for p in products if p.id == str(product_id)), None)
        if product is None:
            raise ValidationError("Unknown product.")
        return replace(draft, items=draft.items + (LineItem.for_product(product, qty),))

    @staticmethod
    def remove_item(draft: QuoteDraft, index: int) -> QuoteDraft:
        if not 0 <= index < len(draft.items):
            return draft
        return replace(draft, items=draft.items[:index] + draft.items[index + 1:])

    def save(self, draft: QuoteDraft) -> Quote:
        if not draft.items:
            raise ValidationError("Add at least one item to the quote.")

        with DocumentUnitOfWork(self.store) as uow:
            records = uow.get("quotes")
            existing = None
            if draft.quote_id:
                existing = next((r for r in records if str(r.get("id")) == draft.quote_id), None)

            if existing is not None and existing.get("createdAt"):
                created_at = str(existing["createdAt"])
            else:
                created_at = iso_timestamp(self.ids.clock())

            quote = Quote(
                id=draft.quote_id or self.ids.next_str(),
                items=draft.items,
                total_price=draft.total_price,
                validity=draft.validity or DEFAULT_QUOTE_VALIDITY,
                created_at=created_at,
                customer=draft.customer or None,
                customer_email=draft.customer_email or None,
                customer_phone=draft.customer_phone or None,
            )

            if existing is not None:
                records = [quote.to_dict() if str(r.get("id")) == quote.id else r for r in records]
            else:
                if draft.quote_id:
                    log.warning("quote_missing_on_save id=%s appended", draft.quote_id)
                records.append(quote.to_dict())
            uow.stage("quotes", records)

        log.info("quote_saved id=%s items=%s total=%.2f edit=%s", quote.id, len(quote.items), quote.total_price, existing is not None)
        return quote

    def edit(self, quote_id: str) -> QuoteDraft:
        q = self.get_quote(quote_id)
        return QuoteDraft(
            quote_id=q.id,
            customer=q.customer or "",
            customer_email=q.customer_email or "",
            customer_phone=q.customer_phone or "",
            validity=q.validity or DEFAULT_QUOTE_VALIDITY,
            items=tuple(q.items),
        )

    def delete(self, quote_id: str, confirmed: bool) -> bool:
        if not confirmed:
            return False
        with DocumentUnitOfWork(self.store) as uow:
            records = uow.get("quotes")
            kept = [r for r in records if str(r.get("id")) != str(quote_id)]
            if len(kept) == len(records):
                return False
            uow.stage("quotes", kept)
        log.info("quote_deleted id=%s", quote_id)
        return True

    def render_printable(self, quote_id: str) -> str:
        q = self.get_quote(quote_id)
        try:
            date_str = parse_timestamp(q.created_at).strftime("%d/%m/%Y")
        except ValueError:
            date_str = q.created_at

        rows = "\n".join(
            "        <tr>"
            f"<td>{html.escape(it.description)}</td>"
            f"<td class=\"qty\">{it.quantity}</td>"
            f"<td class=\"money\">{format_money(it.total)}</td>"
            "</tr>"
            for it in q.items
        )
        return _PRINT_TEMPLATE.format(
            number=html.escape(q.id[-6:]),
            date=html.escape(date_str),
            validity=html.escape(q.validity),
            customer=html.escape(q.customer or "Final consumer"),
            rows=rows,
            total=format_money(q.total_price),
        )


_PRINT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Quote {number}</title>
<style>
  body {{ font-family: 'Inter', sans-serif; padding: 40px; color: #1a1a1a; }}
  header {{ display: flex; justify-content: space-between; border-bottom: 2px solid #2563eb; padding-bottom: 20px; margin-bottom: 30px; }}
  h1 {{ margin: 0; color: #2563eb; }}
  .label {{ font-size: 10px; font-weight: 800; color: #64748b; text-transform: uppercase; margin: 0; }}
  table {{ width: 100%; border-collapse: collapse; margin-bottom: 30px; }}
  th, td {{ padding: 10px 0; font-size: 11px; border-bottom: 1px solid #f1f5f9; text-align: left; }}
  .qty {{ text-align: center; }}
  .money {{ text-align: right; font-weight: 900; }}
  .total {{ float: right; background: #2563eb; color: white; padding: 20px; border-radius: 12px; min-width: 200px; text-align: right; }}
</style>
</head>
<body onload="window.print()">
<header>
  <div><h1>GESTORPRO</h1><p class="label">Local quote</p></div>
  <div><p><strong>No. {number}</strong></p><p class="label">Date: {date} &middot; Valid for {validity} days</p></div>
</header>
<p class="label">Customer</p>
<p><strong>{customer}</strong></p>
<table>
  <thead><tr><th>Description</th><th class="qty">Qty</th><th class="money">Total</th></tr></thead>
  <tbody>
{rows}
  </tbody>
</table>
<div class="total"><p class="label" style="color: white;">Estimated total</p><p style="font-size: 24px; margin: 0;"><strong>{total}</strong></p></div>
</body>
</html>
"""
