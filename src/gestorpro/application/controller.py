from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional

from gestorpro.application import screens
from gestorpro.application.state import AppState, Tab
from gestorpro.domain.errors import AuthorizationError
from gestorpro.domain.models import Product, Quote, Sale
from gestorpro.services.auth_service import AuthService
from gestorpro.services.inventory_service import InventoryService
from gestorpro.services.quote_service import QuoteService
from gestorpro.services.reporting_service import ReportingService
from gestorpro.services.sales_service import SalesService

log = logging.getLogger(__name__)


class AppController:
    """Owns the single :class:`AppState` and applies user actions to it.

    Every handler builds the next state from the current one. Handlers that
    persist something reload the collections from the store afterwards, so
    the screens never show data that was not read back from disk.
    """

    def __init__(
        self,
        inventory: InventoryService,
        sales: SalesService,
        quotes: QuoteService,
        auth: AuthService,
        reporting: ReportingService,
        exports_dir: Path | str,
    ):
        self.inventory = inventory
        self.sales = sales
        self.quotes = quotes
        self.auth = auth
        self.reporting = reporting
        self.exports_dir = Path(exports_dir)
        self.state = AppState()

    # ---------- session ----------
    def start(self) -> AppState:
        user = self.auth.resume_session()
        self.state = AppState(current_user=user)
        if user is not None:
            log.info("session_resumed id=%s", user.id)
            return self.reload()
        return self.state

    def login(self, email: str, password: str) -> AppState:
        user = self.auth.login(email, password)
        self.state = replace(AppState(), current_user=user)
        return self.reload()

    def register(self, name: str, email: str, password: str) -> AppState:
        user = self.auth.register(name, email, password)
        self.state = replace(AppState(), current_user=user)
        return self.reload()

    def logout(self) -> AppState:
        self.auth.logout()
        self.state = AppState()
        return self.state

    def _require_user(self) -> None:
        if not self.state.authenticated:
            raise AuthorizationError("Sign in first.")

    # ---------- navigation / rendering ----------
    def reload(self) -> AppState:
        products = tuple(self.inventory.list_products())
        diverging = self.inventory.price_divergences(products)
        if diverging:
            log.warning("sell_price_divergence ids=%s", ",".join(p.id for p in diverging))
        self.state = replace(
            self.state,
            products=products,
            sales=tuple(self.sales.list_sales()),
            quotes=tuple(self.quotes.list_quotes()),
        )
        return self.state

    def select_tab(self, tab: Tab) -> AppState:
        self._require_user()
        self.state = replace(self.state, active_tab=Tab(tab))
        return self.reload()

    def render(self) -> Optional[screens.Screen]:
        if not self.state.authenticated:
            return None
        return screens.render(self.state)

    # ---------- inventory ----------
    def save_product(
        self,
        product_id: str | None,
        description: str,
        category: str,
        quantity: int,
        buy_price: float,
        margin: float,
    ) -> Product:
        self._require_user()
        product = self.inventory.save_product(product_id, description, category, quantity, buy_price, margin)
        self.reload()
        return product

    def delete_product(self, product_id: str, confirmed: bool) -> AppState:
        self._require_user()
        if self.inventory.delete_product(product_id, confirmed):
            self.reload()
        return self.state

    # ---------- sales ----------
    def clear_cart(self) -> AppState:
        self._require_user()
        self.state = replace(self.state, cart=())
        return self.state

    def add_to_cart(self, product_id: str | None, quantity: int) -> AppState:
        self._require_user()
        cart = self.sales.add_to_cart(self.state.cart, self.state.products, product_id, quantity)
        self.state = replace(self.state, cart=cart)
        return self.state

    def remove_from_cart(self, index: int) -> AppState:
        self._require_user()
        self.state = replace(self.state, cart=self.sales.remove_from_cart(self.state.cart, index))
        return self.state

    def commit_sale(self, payment_method: str) -> Sale:
        self._require_user()
        sale = self.sales.commit_sale(self.state.cart, payment_method)
        self.state = replace(self.state, cart=())
        self.reload()
        return sale

    # ---------- quotes ----------
    def new_quote(self) -> AppState:
        self._require_user()
        self.state = replace(self.state, quote_draft=self.quotes.new_draft())
        return self.state

    def update_quote_details(
        self,
        customer: str | None = None,
        customer_email: str | None = None,
        customer_phone: str | None = None,
        validity: str | None = None,
    ) -> AppState:
        self._require_user()
        draft = self.quotes.with_details(self.state.quote_draft, customer, customer_email, customer_phone, validity)
        self.state = replace(self.state, quote_draft=draft)
        return self.state

    def add_to_quote(self, product_id: str | None, quantity: int) -> AppState:
        self._require_user()
        draft = self.quotes.add_item(self.state.quote_draft, self.state.products, product_id, quantity)
        self.state = replace(self.state, quote_draft=draft)
        return self.state

    def remove_from_quote(self, index: int) -> AppState:
        self._require_user()
        self.state = replace(self.state, quote_draft=self.quotes.remove_item(self.state.quote_draft, index))
        return self.state

    def save_quote(self) -> Quote:
        self._require_user()
        quote = self.quotes.save(self.state.quote_draft)
        self.state = replace(self.state, quote_draft=self.quotes.new_draft())
        self.reload()
        return quote

    def edit_quote(self, quote_id: str) -> AppState:
        self._require_user()
        self.state = replace(self.state, quote_draft=self.quotes.edit(quote_id))
        return self.state

    def delete_quote(self, quote_id: str, confirmed: bool) -> AppState:
        self._require_user()
        if self.quotes.delete(quote_id, confirmed):
            self.reload()
        return self.state

    def print_quote(self, quote_id: str) -> Path:
        """Writes the printable quote to the exports directory and returns its path."""
        self._require_user()
        document = self.quotes.render_printable(quote_id)
        self.exports_dir.mkdir(parents=True, exist_ok=True)
        target = self.exports_dir / f"quote_{quote_id}.html"
        target.write_text(document, encoding="utf-8")
        log.info("quote_printed id=%s path=%s", quote_id, target)
        return target

    def export_sales_report(self, path: Path | str | None = None) -> Path:
        self._require_user()
        if path is None:
            self.exports_dir.mkdir(parents=True, exist_ok=True)
            path = self.exports_dir / f"sales_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
        target = Path(path)
        self.reporting.export_sales_report_excel(str(target))
        log.info("sales_report_exported path=%s", target)
        return target
