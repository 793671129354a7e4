from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from gestorpro.domain.models import LineItem, Product, Quote, Sale, User
from gestorpro.services.quote_service import QuoteDraft


class Tab(Enum):
    DASHBOARD = "dashboard"
    INVENTORY = "inventory"
    SALES = "sales"
    QUOTES = "quotes"


@dataclass(frozen=True)
class AppState:
    """Everything the screens need: cached collections plus unsaved UI state."""

    current_user: Optional[User] = None
    active_tab: Tab = Tab.DASHBOARD
    products: tuple[Product, ...] = ()
    sales: tuple[Sale, ...] = ()
    quotes: tuple[Quote, ...] = ()
    cart: tuple[LineItem, ...] = ()
    quote_draft: QuoteDraft = field(default_factory=QuoteDraft)

    @property
    def authenticated(self) -> bool:
        return self.current_user is not None
