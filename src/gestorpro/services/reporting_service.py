from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from gestorpro.domain.models import LOW_STOCK_THRESHOLD, Product, Sale
from gestorpro.repositories.contracts import DocumentStore


@dataclass(frozen=True)
class StockBar:
    label: str
    quantity: int


class ReportingService:
    """Dashboard aggregates (always computed from the given collections) and Excel export."""

    def __init__(self, store: DocumentStore):
        self.store = store

    @staticmethod
    def total_revenue(sales: Iterable[Sale]) -> float:
        return sum(s.total_price for s in sales)

    @staticmethod
    def stock_value(products: Iterable[Product]) -> float:
        return sum(p.buy_price * p.quantity for p in products)

    @staticmethod
    def low_stock(products: Iterable[Product]) -> list[Product]:
        return [p for p in products if p.quantity <= LOW_STOCK_THRESHOLD]

    @staticmethod
    def top_stock(products: Sequence[Product], limit: int = 10) -> list[StockBar]:
        ranked = sorted(products, key=lambda p: p.quantity, reverse=True)[:limit]
        return [StockBar(label=p.description[:8] + "...", quantity=p.quantity) for p in ranked]

    def export_sales_report_excel(self, path: str) -> None:
        sales = [Sale.from_dict(r) for r in self.store.get_collection("sales")]
        products = [Product.from_dict(r) for r in self.store.get_collection("products")]

        wb = Workbook()

        def money(cell):
            cell.number_format = "#,##0.00"

        def bold_row(ws, r):
            for c in ws[r]:
                c.font = Font(bold=True)

        def set_widths(ws, widths: dict[str, int]):
            for col, w in widths.items():
                ws.column_dimensions[col].width = w

        def add_table(ws, name: str, start_row: int, start_col: int, end_row: int, end_col: int):
            ref = f"{get_column_letter(start_col)}{start_row}:{get_column_letter(end_col)}{end_row}"
            tab = Table(displayName=name, ref=ref)
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(tab)

        # -------- 1) Summary --------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = "Summary"
        ws["A1"].font = Font(bold=True, size=14)

        rows = [
            ("Sales count", len(sales), "int"),
            ("Revenue", self.total_revenue(sales), "money"),
            ("Products", len(products), "int"),
            ("Stock value (buy price)", self.stock_value(products), "money"),
            (f"Low stock items (<= {LOW_STOCK_THRESHOLD})", len(self.low_stock(products)), "int"),
        ]
        for i, (label, val, kind) in enumerate(rows):
            r = 3 + i
            ws[f"A{r}"] = label
            ws[f"B{r}"] = val
            if kind == "money":
                money(ws[f"B{r}"])
        set_widths(ws, {"A": 30, "B": 18})

        # -------- 2) Sales Detail --------
        ws2 = wb.create_sheet("Sales Detail")
        ws2.append(["Sale ID", "Created at", "Payment", "Product ID", "Description", "Qty", "Unit Price", "Line Total"])
        bold_row(ws2, 1)

        out_row = 2
        for s in sales:
            for it in s.items:
                ws2.append([
                    int(s.id), s.created_at, s.payment_method,
                    it.product_id, it.description,
                    int(it.quantity), float(it.price), float(it.total),
                ])
                money(ws2[f"G{out_row}"])
                money(ws2[f"H{out_row}"])
                out_row += 1

        ws2.freeze_panes = "A2"
        set_widths(ws2, {"A": 16, "B": 26, "C": 14, "D": 16, "E": 34, "F": 6, "G": 14, "H": 14})
        if ws2.max_row >= 2:
            add_table(ws2, "SalesDetail", 1, 1, ws2.max_row, 8)

        # -------- 3) Stock --------
        ws3 = wb.create_sheet("Stock")
        ws3.append(["Product ID", "Description", "Category", "Qty", "Buy Price", "Margin %", "Sell Price", "Low stock"])
        bold_row(ws3, 1)
        low_fill = PatternFill(start_color="FFDDDD", end_color="FFDDDD", fill_type="solid")

        for r, p in enumerate(products, start=2):
            ws3.append([
                p.id, p.description, p.category, int(p.quantity),
                float(p.buy_price), float(p.margin), float(p.sell_price),
                "yes" if p.is_low_stock else None,
            ])
            money(ws3[f"E{r}"])
            money(ws3[f"G{r}"])
            if p.is_low_stock:
                for c in ws3[r]:
                    c.fill = low_fill

        ws3.freeze_panes = "A2"
        set_widths(ws3, {"A": 16, "B": 34, "C": 18, "D": 6, "E": 12, "F": 10, "G": 12, "H": 10})

        wb.save(path)
