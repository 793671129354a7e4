from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from gestorpro.application.state import AppState, Tab
from gestorpro.domain.ids import parse_timestamp
from gestorpro.domain.models import PAYMENT_METHODS, LineItem, Product, format_money, lines_total
from gestorpro.services.inventory_service import InventoryService
from gestorpro.services.reporting_service import ReportingService, StockBar


@dataclass(frozen=True)
class ProductChoice:
    id: str
    label: str


@dataclass(frozen=True)
class LineRow:
    index: int
    description: str
    detail: str
    total: str


@dataclass(frozen=True)
class DashboardScreen:
    revenue: str
    product_count: int
    stock_value: str
    low_stock_count: int
    low_stock: tuple[tuple[str, int], ...]
    chart: tuple[StockBar, ...]
    price_warnings: int


@dataclass(frozen=True)
class InventoryRow:
    id: str
    description: str
    category: str
    quantity: int
    sell_price: str
    low_stock: bool
    price_mismatch: bool


@dataclass(frozen=True)
class InventoryScreen:
    rows: tuple[InventoryRow, ...]


@dataclass(frozen=True)
class SaleRow:
    id: int
    created_at: str
    payment_method: str
    item_count: int
    total: str


@dataclass(frozen=True)
class SalesScreen:
    rows: tuple[SaleRow, ...]
    product_choices: tuple[ProductChoice, ...]
    cart: tuple[LineRow, ...]
    cart_total: str
    payment_methods: tuple[str, ...]


@dataclass(frozen=True)
class QuoteRow:
    id: str
    date: str
    time: str
    customer: str
    phone: str
    email: str
    item_count: int
    total: str


@dataclass(frozen=True)
class QuoteDraftView:
    quote_id: Optional[str]
    customer: str
    customer_email: str
    customer_phone: str
    validity: str
    lines: tuple[LineRow, ...]
    total: str


@dataclass(frozen=True)
class QuotesScreen:
    rows: tuple[QuoteRow, ...]
    draft: QuoteDraftView
    product_choices: tuple[ProductChoice, ...]


Screen = Union[DashboardScreen, InventoryScreen, SalesScreen, QuotesScreen]


def _local(created_at: str, fmt: str) -> str:
    try:
        return parse_timestamp(created_at).astimezone().strftime(fmt)
    except ValueError:
        return created_at


def _choices(products: Sequence[Product]) -> tuple[ProductChoice, ...]:
    return tuple(ProductChoice(id=p.id, label=f"{p.description} - {format_money(p.sell_price)}") for p in products)


def _line_rows(items: Sequence[LineItem]) -> tuple[LineRow, ...]:
    return tuple(
        LineRow(
            index=i,
            description=it.description,
            detail=f"{it.quantity} x {format_money(it.price)}",
            total=format_money(it.total),
        )
        for i, it in enumerate(items)
    )


def render_dashboard(state: AppState) -> DashboardScreen:
    low = ReportingService.low_stock(state.products)
    return DashboardScreen(
        revenue=format_money(ReportingService.total_revenue(state.sales)),
        product_count=len(state.products),
        stock_value=format_money(ReportingService.stock_value(state.products)),
        low_stock_count=len(low),
        low_stock=tuple((p.description, p.quantity) for p in low),
        chart=tuple(ReportingService.top_stock(state.products)),
        price_warnings=len(InventoryService.price_divergences(state.products)),
    )


def render_inventory(state: AppState) -> InventoryScreen:
    return InventoryScreen(
        rows=tuple(
            InventoryRow(
                id=p.id,
                description=p.description,
                category=p.category,
                quantity=p.quantity,
                sell_price=format_money(p.sell_price),
                low_stock=p.is_low_stock,
                price_mismatch=not p.price_is_consistent(),
            )
            for p in state.products
        )
    )


def render_sales(state: AppState) -> SalesScreen:
    return SalesScreen(
        rows=tuple(
            SaleRow(
                id=s.id,
                created_at=_local(s.created_at, "%d/%m/%Y %H:%M:%S"),
                payment_method=s.payment_method,
                item_count=len(s.items),
                total=format_money(s.total_price),
            )
            for s in reversed(state.sales)
        ),
        product_choices=_choices([p for p in state.products if p.quantity > 0]),
        cart=_line_rows(state.cart),
        cart_total=format_money(lines_total(state.cart)),
        payment_methods=PAYMENT_METHODS,
    )


def render_quotes(state: AppState) -> QuotesScreen:
    draft = state.quote_draft
    return QuotesScreen(
        rows=tuple(
            QuoteRow(
                id=q.id,
                date=_local(q.created_at, "%d/%m/%Y"),
                time=_local(q.created_at, "%H:%M"),
                customer=q.customer or "Consumer",
                phone=q.customer_phone or "-",
                email=q.customer_email or "",
                item_count=len(q.items),
                total=format_money(q.total_price),
            )
            for q in reversed(state.quotes)
        ),
        draft=QuoteDraftView(
            quote_id=draft.quote_id,
            customer=draft.customer,
            customer_email=draft.customer_email,
            customer_phone=draft.customer_phone,
            validity=draft.validity,
            lines=_line_rows(draft.items),
            total=format_money(draft.total_price),
        ),
        product_choices=_choices(state.products),
    )


RENDERERS: dict[Tab, Callable[[AppState], Screen]] = {
    Tab.DASHBOARD: render_dashboard,
    Tab.INVENTORY: render_inventory,
    Tab.SALES: render_sales,
    Tab.QUOTES: render_quotes,
}

_missing = set(Tab) - set(RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer for tabs: {sorted(t.value for t in _missing)}")


def render(state: AppState) -> Screen:
    return RENDERERS[state.active_tab](state)
