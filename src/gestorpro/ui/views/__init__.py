from .login_view import LoginView
from .dashboard_view import DashboardView
from .inventory_view import InventoryView
from .sales_view import SalesView
from .quotes_view import QuotesView

__all__ = ["LoginView", "DashboardView", "InventoryView", "SalesView", "QuotesView"]
