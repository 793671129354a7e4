from .inventory_service import InventoryService
from .sales_service import SalesService
from .quote_service import QuoteService, QuoteDraft
from .auth_service import AuthService
from .reporting_service import ReportingService

__all__ = [
    "InventoryService",
    "SalesService",
    "QuoteService",
    "QuoteDraft",
    "AuthService",
    "ReportingService",
]
