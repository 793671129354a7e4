from conftest import product_record

from gestorpro.application import screens
from gestorpro.application.state import AppState, Tab
from gestorpro.domain.models import LineItem, Product, Quote, Sale, User
from gestorpro.services.reporting_service import ReportingService


def _products(*quantities: int) -> tuple[Product, ...]:
    return tuple(
        Product.from_dict(product_record(str(i), f"Product number {i}", q, buy=2.0, margin=100.0))
        for i, q in enumerate(quantities)
    )


def _sale(sale_id: int, total: float) -> Sale:
    line = LineItem(product_id="0", description="Product number 0", quantity=1, price=total, total=total)
    return Sale(id=sale_id, items=(line,), total_price=total, payment_method="Cash", created_at="2024-05-10T14:30:00.000Z")


def test_low_stock_uses_inclusive_threshold_of_five():
    products = _products(2, 6, 5, 10)

    low = ReportingService.low_stock(products)

    assert [p.quantity for p in low] == [2, 5]


def test_revenue_and_stock_value():
    products = _products(3, 4)
    sales = [_sale(1, 10.0), _sale(2, 2.5)]

    assert ReportingService.total_revenue(sales) == 12.5
    assert ReportingService.stock_value(products) == 14.0


def test_top_stock_does_not_reorder_input():
    products = _products(1, 30, 7)

    bars = ReportingService.top_stock(products, limit=2)

    assert [b.quantity for b in bars] == [30, 7]
    assert bars[0].label == "Product ..."
    assert [p.quantity for p in products] == [1, 30, 7]


def test_every_tab_has_a_renderer():
    assert set(screens.RENDERERS) == set(Tab)


def test_dashboard_screen_counts_price_divergence():
    products = _products(2, 9) + (
        Product(id="x", description="Drifted", category="", quantity=1, buy_price=10.0, margin=10.0, sell_price=12.0),
    )
    state = AppState(current_user=User(1, "Ana", "ana@x.com", "pw"), products=products, sales=(_sale(1, 4.0),))

    screen = screens.render(state)

    assert isinstance(screen, screens.DashboardScreen)
    assert screen.revenue == "R$ 4.00"
    assert screen.product_count == 3
    assert screen.low_stock_count == 2
    assert screen.price_warnings == 1


def test_sales_screen_lists_newest_first_and_only_products_in_stock():
    state = AppState(
        active_tab=Tab.SALES,
        products=_products(0, 3),
        sales=(_sale(1, 1.0), _sale(2, 2.0)),
    )

    screen = screens.render(state)

    assert isinstance(screen, screens.SalesScreen)
    assert [r.id for r in screen.rows] == [2, 1]
    assert [c.id for c in screen.product_choices] == ["1"]
    assert screen.cart_total == "R$ 0.00"


def test_quotes_screen_defaults_customer_and_contact():
    quote = Quote(id="99", items=(), total_price=0.0, validity="7", created_at="2024-05-10T14:30:00.000Z")
    state = AppState(active_tab=Tab.QUOTES, quotes=(quote,))

    screen = screens.render(state)

    assert isinstance(screen, screens.QuotesScreen)
    assert screen.rows[0].customer == "Consumer"
    assert screen.rows[0].phone == "-"
    assert screen.draft.quote_id is None


def test_inventory_screen_flags_low_stock():
    screen = screens.render(AppState(active_tab=Tab.INVENTORY, products=_products(5, 6)))

    assert isinstance(screen, screens.InventoryScreen)
    assert [r.low_stock for r in screen.rows] == [True, False]
    assert screen.rows[0].sell_price == "R$ 4.00"
