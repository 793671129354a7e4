from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

from gestorpro.application.screens import SalesScreen


class SalesView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Sales")

        self.sale_pick = tk.StringVar()
        self.payment = tk.StringVar()
        self.total_var = tk.StringVar(value="Total: R$ 0.00")
        self.choice_map: dict[str, str] = {}

        self._build()

    def _build(self):
        tab = self.frame

        top = ttk.LabelFrame(tab, text="Point of sale")
        top.pack(fill="x", padx=10, pady=10)

        ttk.Label(top, text="Product").grid(row=0, column=0, padx=10, pady=8, sticky="w")
        self.combo = ttk.Combobox(top, textvariable=self.sale_pick, width=56, state="readonly")
        self.combo.grid(row=0, column=1, padx=10, pady=8, sticky="w")

        ttk.Label(top, text="Qty").grid(row=0, column=2, padx=10, pady=8, sticky="w")
        self.qty_e = ttk.Entry(top, width=10)
        self.qty_e.grid(row=0, column=3, padx=10, pady=8, sticky="w")

        ttk.Button(top, text="Add to cart", style="Big.TButton", command=self.add_to_cart)\
            .grid(row=0, column=4, padx=10, pady=8)
        self.qty_e.bind("<Return>", lambda _e: self.add_to_cart())

        mid = ttk.Frame(tab)
        mid.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        cart_box = ttk.LabelFrame(mid, text="Cart")
        cart_box.pack(side="left", fill="both", expand=True, padx=(0, 10))

        cols = ("desc", "detail", "line")
        self.cart_tree = ttk.Treeview(cart_box, columns=cols, show="headings", height=8)
        heads = {"desc": "Description", "detail": "Qty x Unit", "line": "Line total"}
        widths = {"desc": 380, "detail": 160, "line": 120}
        for c in cols:
            self.cart_tree.heading(c, text=heads[c])
            self.cart_tree.column(c, width=widths[c], anchor="w")
        self.cart_tree.pack(fill="both", expand=True, padx=10, pady=10)

        btnrow = ttk.Frame(cart_box)
        btnrow.pack(fill="x", padx=10, pady=(0, 10))
        ttk.Button(btnrow, text="Remove selected", command=self.remove_selected).pack(side="left")
        ttk.Button(btnrow, text="Clear cart", command=self.clear_cart).pack(side="left", padx=10)

        right = ttk.LabelFrame(mid, text="Confirm sale")
        right.pack(side="right", fill="y")

        ttk.Label(right, text="Payment method").pack(anchor="w", padx=10, pady=(10, 4))
        self.pay_combo = ttk.Combobox(right, textvariable=self.payment, width=24, state="readonly")
        self.pay_combo.pack(padx=10)

        ttk.Label(right, textvariable=self.total_var, style="KPIValue.TLabel").pack(anchor="w", padx=10, pady=10)
        ttk.Button(right, text="Confirm sale", style="Big.TButton", command=self.confirm_sale)\
            .pack(fill="x", padx=10, pady=(0, 10))

        hist = ttk.LabelFrame(tab, text="Sales history")
        hist.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        cols = ("id", "dt", "pay", "items", "total")
        self.sales_tree = ttk.Treeview(hist, columns=cols, show="headings", height=8)
        heads = {"id": "Sale ID", "dt": "Date", "pay": "Payment", "items": "Items", "total": "Total"}
        widths = {"id": 140, "dt": 180, "pay": 140, "items": 70, "total": 120}
        for c in cols:
            self.sales_tree.heading(c, text=heads[c])
            self.sales_tree.column(c, width=widths[c], anchor="w")
        self.sales_tree.pack(fill="both", expand=True, padx=10, pady=(0, 10))

    def refresh(self, screen: SalesScreen):
        self.choice_map = {c.label: c.id for c in screen.product_choices}
        self.combo["values"] = list(self.choice_map)
        if self.sale_pick.get() not in self.choice_map:
            self.sale_pick.set("")

        self.pay_combo["values"] = list(screen.payment_methods)
        if not self.payment.get() and screen.payment_methods:
            self.payment.set(screen.payment_methods[0])

        for item in self.cart_tree.get_children():
            self.cart_tree.delete(item)
        for row in screen.cart:
            self.cart_tree.insert("", "end", iid=str(row.index), values=(row.description.upper(), row.detail, row.total))
        self.total_var.set(f"Total: {screen.cart_total}")

        for item in self.sales_tree.get_children():
            self.sales_tree.delete(item)
        for s in screen.rows:
            self.sales_tree.insert("", "end", values=(f"#{s.id}", s.created_at, s.payment_method, s.item_count, s.total))

    def _parse_int(self, s: str, field: str, min_value: int = 1) -> int:
        try:
            v = int(float(s))
        except ValueError:
            raise ValueError(f"{field} must be an integer.")
        if v < min_value:
            raise ValueError(f"{field} must be >= {min_value}.")
        return v

    def add_to_cart(self):
        product_id = self.choice_map.get(self.sale_pick.get())
        try:
            qty = self._parse_int(self.qty_e.get().strip() or "1", "Qty", 1)
        except ValueError as e:
            messagebox.showwarning("Validation", str(e))
            return

        try:
            self.app.controller.add_to_cart(product_id, qty)
        except Exception as e:
            self.app.handle_error("Cart", e, "Could not add item.")
            return

        self.qty_e.delete(0, tk.END)
        self.app.toast("Added to cart.", kind="success", ms=1500)
        self.app.refresh()

    def remove_selected(self):
        sel = self.cart_tree.selection()
        if not sel:
            return
        self.app.controller.remove_from_cart(int(sel[0]))
        self.app.refresh()

    def clear_cart(self):
        self.app.controller.clear_cart()
        self.app.refresh()

    def confirm_sale(self):
        try:
            sale = self.app.controller.commit_sale(self.payment.get())
        except Exception as e:
            self.app.handle_error("Sale failed", e, "Sale failed.")
            return

        messagebox.showinfo("OK", f"Sale saved. ID: {sale.id}")
        self.app.toast(f"Sale saved (ID {sale.id}).", kind="success")
        self.app.refresh()
