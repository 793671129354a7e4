from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

from gestorpro.application.screens import InventoryScreen


class InventoryView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Inventory")

        self.editing_id: str | None = None
        self.form_title = tk.StringVar(value="New product")
        self.sell_var = tk.StringVar(value="Sell price: R$ 0.00")

        tab = self.frame

        left = ttk.LabelFrame(tab, text="Product", width=280)
        left.pack(side="left", fill="y", padx=(0, 6), pady=8)
        left.pack_propagate(False)

        ttk.Label(left, textvariable=self.form_title, style="KPI.TLabel")\
            .grid(row=0, column=0, columnspan=2, sticky="w", padx=8, pady=(8, 4))

        self.p_desc = self._entry(left, "Description", 1)
        self.p_cat = self._entry(left, "Category", 2)
        self.p_qty = self._entry(left, "Quantity", 3)
        self.p_buy = self._entry(left, "Buy price", 4)
        self.p_margin = self._entry(left, "Margin %", 5)

        ttk.Label(left, textvariable=self.sell_var, style="KPIValue.TLabel")\
            .grid(row=6, column=0, columnspan=2, sticky="w", padx=8, pady=8)

        for entry in (self.p_buy, self.p_margin):
            entry.bind("<KeyRelease>", lambda _e: self._update_sell_preview())

        btns = ttk.Frame(left)
        btns.grid(row=7, column=0, columnspan=2, sticky="ew", padx=8, pady=(6, 8))
        for c in range(3):
            btns.columnconfigure(c, weight=1)

        ttk.Button(btns, text="Save", command=self.on_save).grid(row=0, column=0, sticky="ew", padx=(0, 6))
        ttk.Button(btns, text="Delete", command=self.on_delete).grid(row=0, column=1, sticky="ew", padx=6)
        ttk.Button(btns, text="New", command=self.clear_form).grid(row=0, column=2, sticky="ew", padx=(6, 0))

        right = ttk.LabelFrame(tab, text="Products (double click to edit)")
        right.pack(side="right", fill="both", expand=True, pady=8)

        cols = ("desc", "cat", "qty", "sell")
        self.tree = ttk.Treeview(right, columns=cols, show="headings", height=20)
        heads = {"desc": "Description", "cat": "Category", "qty": "Qty", "sell": "Sell price"}
        widths = {"desc": 360, "cat": 160, "qty": 70, "sell": 120}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="w")

        self.tree.tag_configure("low", background="#ffdddd")
        self.tree.tag_configure("mismatch", foreground="#b45309")

        vsb = ttk.Scrollbar(right, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.pack(side="left", fill="both", expand=True, padx=(6, 0), pady=6)
        vsb.pack(side="right", fill="y", pady=6)
        self.tree.bind("<Double-1>", self.on_edit)

    def _entry(self, parent, label, row):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", padx=8, pady=4)
        e = ttk.Entry(parent, width=20)
        e.grid(row=row, column=1, sticky="ew", padx=8, pady=4)
        return e

    def _set(self, entry: ttk.Entry, value) -> None:
        entry.delete(0, tk.END)
        entry.insert(0, str(value))

    def _parse_float(self, s: str, default: float = 0.0) -> float:
        try:
            return float(s.replace(",", ".")) if s.strip() else default
        except ValueError:
            return default

    def _update_sell_preview(self):
        buy = self._parse_float(self.p_buy.get())
        margin = self._parse_float(self.p_margin.get())
        sell = self.app.controller.inventory.compute_sell_price(buy, margin)
        self.sell_var.set(f"Sell price: R$ {sell:.2f}")

    def refresh(self, screen: InventoryScreen):
        for item in self.tree.get_children():
            self.tree.delete(item)
        for row in screen.rows:
            tags = []
            if row.low_stock:
                tags.append("low")
            if row.price_mismatch:
                tags.append("mismatch")
            self.tree.insert("", "end", iid=row.id, values=(row.description, row.category, row.quantity, row.sell_price), tags=tags)

    def clear_form(self):
        self.editing_id = None
        self.form_title.set("New product")
        for entry in (self.p_desc, self.p_cat, self.p_qty, self.p_buy, self.p_margin):
            entry.delete(0, tk.END)
        self.sell_var.set("Sell price: R$ 0.00")

    def on_edit(self, _evt=None):
        sel = self.tree.selection()
        if not sel:
            return
        product = next((p for p in self.app.controller.state.products if p.id == sel[0]), None)
        if product is None:
            return
        self.editing_id = product.id
        self.form_title.set("Edit product")
        self._set(self.p_desc, product.description)
        self._set(self.p_cat, product.category)
        self._set(self.p_qty, product.quantity)
        self._set(self.p_buy, product.buy_price)
        self._set(self.p_margin, product.margin)
        self.sell_var.set(f"Sell price: R$ {product.sell_price:.2f}")

    def on_save(self):
        try:
            qty = int(self.p_qty.get().strip() or "0")
            buy = float(self.p_buy.get().strip().replace(",", ".") or "0")
            margin = float(self.p_margin.get().strip().replace(",", ".") or "0")
        except ValueError:
            messagebox.showwarning("Validation", "Quantity, buy price and margin must be numbers.")
            return

        try:
            self.app.controller.save_product(self.editing_id, self.p_desc.get(), self.p_cat.get(), qty, buy, margin)
        except Exception as e:
            self.app.handle_error("Save product", e, "Could not save product.")
            return

        self.app.toast("Product saved.", kind="success")
        self.clear_form()
        self.app.refresh()

    def on_delete(self):
        sel = self.tree.selection()
        if not sel:
            messagebox.showwarning("Delete", "Select a product first.")
            return
        confirmed = messagebox.askyesno("Delete", "Delete this product?")
        try:
            self.app.controller.delete_product(sel[0], confirmed)
        except Exception as e:
            self.app.handle_error("Delete product", e, "Could not delete product.")
            return
        if confirmed:
            self.app.toast("Product deleted.", kind="info")
            self.clear_form()
            self.app.refresh()
