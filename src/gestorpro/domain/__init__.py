from .models import Product, LineItem, Sale, Quote, User, LOW_STOCK_THRESHOLD, PAYMENT_METHODS
from .errors import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientStockError,
    AuthorizationError,
    PersistenceError,
)

__all__ = [
    "Product",
    "LineItem",
    "Sale",
    "Quote",
    "User",
    "LOW_STOCK_THRESHOLD",
    "PAYMENT_METHODS",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientStockError",
    "AuthorizationError",
    "PersistenceError",
]
