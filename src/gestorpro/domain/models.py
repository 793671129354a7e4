from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional


LOW_STOCK_THRESHOLD = 5
DEFAULT_QUOTE_VALIDITY = "7"
PAYMENT_METHODS: tuple[str, ...] = ("Cash", "Credit card", "Debit card", "Pix")

# Allowed gap between a stored sellPrice and the one derived from buyPrice/margin.
PRICE_TOLERANCE = 0.005
CURRENCY_SYMBOL = "R$"


def format_money(value: float) -> str:
    return f"{CURRENCY_SYMBOL} {float(value):.2f}"


def sell_price_for(buy_price: float, margin: float) -> float:
    return float(buy_price) * (1 + float(margin) / 100)


@dataclass(frozen=True)
class Product:
    id: str
    description: str
    category: str
    quantity: int
    buy_price: float
    margin: float
    sell_price: float

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= LOW_STOCK_THRESHOLD

    @property
    def expected_sell_price(self) -> float:
        return sell_price_for(self.buy_price, self.margin)

    def price_is_consistent(self) -> bool:
        return abs(self.sell_price - self.expected_sell_price) <= PRICE_TOLERANCE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "category": self.category,
            "quantity": self.quantity,
            "buyPrice": self.buy_price,
            "margin": self.margin,
            "sellPrice": self.sell_price,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        return cls(
            id=str(data["id"]),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or ""),
            quantity=int(data.get("quantity") or 0),
            buy_price=float(data.get("buyPrice") or 0.0),
            margin=float(data.get("margin") or 0.0),
            sell_price=float(data.get("sellPrice") or 0.0),
        )


@dataclass(frozen=True)
class LineItem:
    product_id: str
    description: str
    quantity: int
    price: float
    total: float

    @classmethod
    def for_product(cls, product: Product, quantity: int) -> "LineItem":
        return cls(
            product_id=product.id,
            description=product.description,
            quantity=int(quantity),
            price=product.sell_price,
            total=product.sell_price * int(quantity),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.product_id,
            "description": self.description,
            "quantity": self.quantity,
            "price": self.price,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        return cls(
            product_id=str(data.get("id") or ""),
            description=str(data.get("description") or ""),
            quantity=int(data.get("quantity") or 0),
            price=float(data.get("price") or 0.0),
            total=float(data.get("total") or 0.0),
        )


def lines_total(items: tuple[LineItem, ...] | list[LineItem]) -> float:
    return sum(it.total for it in items)


@dataclass(frozen=True)
class Sale:
    id: int
    items: tuple[LineItem, ...]
    total_price: float
    payment_method: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "items": [it.to_dict() for it in self.items],
            "totalPrice": self.total_price,
            "paymentMethod": self.payment_method,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sale":
        return cls(
            id=int(data["id"]),
            items=tuple(LineItem.from_dict(it) for it in data.get("items") or []),
            total_price=float(data.get("totalPrice") or 0.0),
            payment_method=str(data.get("paymentMethod") or ""),
            created_at=str(data.get("createdAt") or ""),
        )


@dataclass(frozen=True)
class Quote:
    id: str
    items: tuple[LineItem, ...]
    total_price: float
    validity: str
    created_at: str
    customer: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "customer": self.customer or "",
            "customerEmail": self.customer_email or "",
            "customerPhone": self.customer_phone or "",
            "items": [it.to_dict() for it in self.items],
            "totalPrice": self.total_price,
            "validity": self.validity,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Quote":
        return cls(
            id=str(data["id"]),
            items=tuple(LineItem.from_dict(it) for it in data.get("items") or []),
            total_price=float(data.get("totalPrice") or 0.0),
            validity=str(data.get("validity") or DEFAULT_QUOTE_VALIDITY),
            created_at=str(data.get("createdAt") or ""),
            customer=data.get("customer") or None,
            customer_email=data.get("customerEmail") or None,
            customer_phone=data.get("customerPhone") or None,
        )


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    password: str = field(repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email, "pass": self.password}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            password=str(data.get("pass") or ""),
        )
