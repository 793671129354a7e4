from __future__ import annotations

import tkinter as tk
from tkinter import ttk, filedialog
from datetime import date

from gestorpro.application.screens import DashboardScreen


class DashboardView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Dashboard")
        self._chart: list[tuple[str, float]] = []
        self._build()

    def _build(self):
        tab = self.frame

        kpi = ttk.LabelFrame(tab, text="Business overview")
        kpi.pack(fill="x", padx=10, pady=10)

        self.k_revenue = ttk.Label(kpi, text="-", style="KPIValue.TLabel")
        self.k_products = ttk.Label(kpi, text="-", style="KPIValue.TLabel")
        self.k_stock = ttk.Label(kpi, text="-", style="KPIValue.TLabel")
        self.k_low = ttk.Label(kpi, text="-", style="KPIValue.TLabel", foreground="#d97706")

        labels = ["💰 Sales revenue", "📦 Products", "🏛️ Stock value", "⚠️ Critical items"]
        widgets = [self.k_revenue, self.k_products, self.k_stock, self.k_low]
        for i, (lab, w) in enumerate(zip(labels, widgets)):
            ttk.Label(kpi, text=lab, style="KPI.TLabel").grid(row=0, column=i, sticky="w", padx=14, pady=(10, 2))
            w.grid(row=1, column=i, sticky="w", padx=14, pady=(0, 10))
            kpi.columnconfigure(i, weight=1)

        self.price_warning = ttk.Label(tab, text="", foreground="#d64545")
        self.price_warning.pack(anchor="w", padx=14)

        body = ttk.Frame(tab)
        body.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        chart_box = ttk.LabelFrame(body, text="Stock quantities (top 10)")
        chart_box.pack(side="left", fill="both", expand=True, padx=(0, 10))
        self.stock_canvas = tk.Canvas(chart_box, height=240, bg="#f8fafc", highlightthickness=1, highlightbackground="#cbd5e1")
        self.stock_canvas.pack(fill="both", expand=True, padx=6, pady=6)
        self.stock_canvas.bind("<Configure>", lambda _e: self._draw_bar_chart(self.stock_canvas, self._chart))

        low_box = ttk.LabelFrame(body, text="Critical items (qty <= 5)")
        low_box.pack(side="right", fill="y")
        self.low_list = tk.Listbox(low_box, width=36, height=14)
        self.low_list.pack(fill="both", expand=True, padx=10, pady=10)

        ttk.Button(low_box, text="Export report to Excel", command=self.export_report)\
            .pack(fill="x", padx=10, pady=(0, 10))

    def refresh(self, screen: DashboardScreen):
        self.k_revenue.config(text=screen.revenue)
        self.k_products.config(text=str(screen.product_count))
        self.k_stock.config(text=screen.stock_value)
        self.k_low.config(text=str(screen.low_stock_count))

        if screen.price_warnings:
            self.price_warning.config(
                text=f"{screen.price_warnings} product(s) have a sell price that no longer matches buy price and margin."
            )
        else:
            self.price_warning.config(text="")

        self.low_list.delete(0, tk.END)
        for description, qty in screen.low_stock:
            self.low_list.insert(tk.END, f"{description} ({qty})")

        self._chart = [(bar.label, float(bar.quantity)) for bar in screen.chart]
        self._draw_bar_chart(self.stock_canvas, self._chart)

    def _draw_bar_chart(self, canvas: tk.Canvas, data: list[tuple[str, float]], color: str = "#2563eb"):
        canvas.delete("all")
        w, h = int(canvas.winfo_width() or 560), int(canvas.winfo_height() or 240)
        if not data:
            canvas.create_text(w // 2, h // 2, text="No products yet", fill="#64748b")
            return
        maxv = max(v for _, v in data) or 1
        bw = max(24, (w - 40) // len(data))
        for i, (label, val) in enumerate(data):
            x0 = 24 + i * bw
            x1 = x0 + bw - 8
            y1 = h - 30
            y0 = y1 - int((max(val, 0) / maxv) * (h - 60))
            canvas.create_rectangle(x0, y0, x1, y1, fill=color, outline="")
            canvas.create_text((x0 + x1) // 2, y1 + 12, text=label, font=("Segoe UI", 8), fill="#475569")
            canvas.create_text((x0 + x1) // 2, y0 - 8, text=f"{val:.0f}", font=("Segoe UI", 8), fill="#0f172a")

    def export_report(self):
        path = filedialog.asksaveasfilename(
            title="Save report as",
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx")],
            initialfile=f"sales_report_{date.today().isoformat()}.xlsx",
        )
        if not path:
            return
        try:
            self.app.controller.export_sales_report(path)
            self.app.toast("Excel report exported.", kind="success")
        except Exception as e:
            self.app.handle_error("Export error", e, "Excel export failed.")
