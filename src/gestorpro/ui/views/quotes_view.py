from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

from gestorpro.application.screens import QuotesScreen


class QuotesView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Quotes")

        self.pick = tk.StringVar()
        self.draft_title = tk.StringVar(value="New quote")
        self.total_var = tk.StringVar(value="R$ 0.00")
        self.choice_map: dict[str, str] = {}

        self._build()

    def _build(self):
        tab = self.frame

        draft = ttk.LabelFrame(tab, text="Quote editor")
        draft.pack(fill="x", padx=10, pady=10)

        ttk.Label(draft, textvariable=self.draft_title, style="KPI.TLabel")\
            .grid(row=0, column=0, columnspan=4, sticky="w", padx=10, pady=(8, 4))

        self.q_customer = self._entry(draft, "Customer", 1, 0)
        self.q_email = self._entry(draft, "Email", 1, 2)
        self.q_phone = self._entry(draft, "Phone", 2, 0)
        self.q_validity = self._entry(draft, "Validity (days)", 2, 2)

        ttk.Label(draft, text="Product").grid(row=3, column=0, sticky="w", padx=10, pady=4)
        self.combo = ttk.Combobox(draft, textvariable=self.pick, width=44, state="readonly")
        self.combo.grid(row=3, column=1, sticky="w", padx=10, pady=4)
        ttk.Label(draft, text="Qty").grid(row=3, column=2, sticky="w", padx=10, pady=4)
        self.qty_e = ttk.Entry(draft, width=10)
        self.qty_e.grid(row=3, column=3, sticky="w", padx=10, pady=4)
        ttk.Button(draft, text="Add item", command=self.add_item).grid(row=3, column=4, padx=10, pady=4)

        cols = ("desc", "detail", "line")
        self.items_tree = ttk.Treeview(draft, columns=cols, show="headings", height=5)
        for c, head, w in (("desc", "Description", 360), ("detail", "Qty x Unit", 160), ("line", "Total", 120)):
            self.items_tree.heading(c, text=head)
            self.items_tree.column(c, width=w, anchor="w")
        self.items_tree.grid(row=4, column=0, columnspan=5, sticky="ew", padx=10, pady=6)

        btns = ttk.Frame(draft)
        btns.grid(row=5, column=0, columnspan=5, sticky="ew", padx=10, pady=(0, 10))
        ttk.Button(btns, text="Remove item", command=self.remove_item).pack(side="left")
        ttk.Button(btns, text="New quote", command=self.new_quote).pack(side="left", padx=10)
        ttk.Label(btns, textvariable=self.total_var, style="KPIValue.TLabel").pack(side="left", padx=20)
        ttk.Button(btns, text="Save quote", style="Big.TButton", command=self.save_quote).pack(side="right")

        saved = ttk.LabelFrame(tab, text="Saved quotes")
        saved.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        cols = ("date", "customer", "contact", "items", "total")
        self.quotes_tree = ttk.Treeview(saved, columns=cols, show="headings", height=8)
        heads = {"date": "Date/Time", "customer": "Customer", "contact": "Contact", "items": "Items", "total": "Total"}
        widths = {"date": 150, "customer": 260, "contact": 260, "items": 60, "total": 120}
        for c in cols:
            self.quotes_tree.heading(c, text=heads[c])
            self.quotes_tree.column(c, width=widths[c], anchor="w")
        self.quotes_tree.pack(fill="both", expand=True, padx=10, pady=(10, 6))

        actions = ttk.Frame(saved)
        actions.pack(fill="x", padx=10, pady=(0, 10))
        ttk.Button(actions, text="Print", command=self.print_quote).pack(side="left")
        ttk.Button(actions, text="Edit", command=self.edit_quote).pack(side="left", padx=10)
        ttk.Button(actions, text="Delete", command=self.delete_quote).pack(side="left")

    def _entry(self, parent, label, row, col):
        ttk.Label(parent, text=label).grid(row=row, column=col, sticky="w", padx=10, pady=4)
        e = ttk.Entry(parent, width=36)
        e.grid(row=row, column=col + 1, sticky="w", padx=10, pady=4)
        return e

    def _set(self, entry: ttk.Entry, value: str) -> None:
        entry.delete(0, tk.END)
        entry.insert(0, value)

    def refresh(self, screen: QuotesScreen):
        self.choice_map = {c.label: c.id for c in screen.product_choices}
        self.combo["values"] = list(self.choice_map)

        d = screen.draft
        self.draft_title.set(f"Editing quote {d.quote_id}" if d.quote_id else "New quote")
        self._set(self.q_customer, d.customer)
        self._set(self.q_email, d.customer_email)
        self._set(self.q_phone, d.customer_phone)
        self._set(self.q_validity, d.validity)

        for item in self.items_tree.get_children():
            self.items_tree.delete(item)
        for row in d.lines:
            self.items_tree.insert("", "end", iid=str(row.index), values=(row.description.upper(), row.detail, row.total))
        self.total_var.set(d.total)

        for item in self.quotes_tree.get_children():
            self.quotes_tree.delete(item)
        for q in screen.rows:
            contact = " / ".join(x for x in (q.phone, q.email) if x)
            self.quotes_tree.insert("", "end", iid=q.id, values=(f"{q.date} {q.time}", q.customer, contact, q.item_count, q.total))

    def push_details(self):
        # Keep typed customer fields in the draft before any re-render.
        self.app.controller.update_quote_details(
            customer=self.q_customer.get(),
            customer_email=self.q_email.get(),
            customer_phone=self.q_phone.get(),
            validity=self.q_validity.get(),
        )

    def _selected_quote(self) -> str | None:
        sel = self.quotes_tree.selection()
        if not sel:
            messagebox.showwarning("Quotes", "Select a quote first.")
            return None
        return sel[0]

    def new_quote(self):
        self.app.controller.new_quote()
        self.app.refresh()

    def add_item(self):
        self.push_details()
        try:
            qty = int(self.qty_e.get().strip() or "1")
        except ValueError:
            messagebox.showwarning("Validation", "Qty must be an integer.")
            return
        try:
            self.app.controller.add_to_quote(self.choice_map.get(self.pick.get()), qty)
        except Exception as e:
            self.app.handle_error("Quote", e, "Could not add item.")
            return
        self.qty_e.delete(0, tk.END)
        self.app.refresh()

    def remove_item(self):
        sel = self.items_tree.selection()
        if not sel:
            return
        self.push_details()
        self.app.controller.remove_from_quote(int(sel[0]))
        self.app.refresh()

    def save_quote(self):
        self.push_details()
        try:
            quote = self.app.controller.save_quote()
        except Exception as e:
            self.app.handle_error("Save quote", e, "Could not save quote.")
            return
        self.app.toast(f"Quote {quote.id} saved.", kind="success")
        self.app.refresh()

    def edit_quote(self):
        quote_id = self._selected_quote()
        if quote_id is None:
            return
        try:
            self.app.controller.edit_quote(quote_id)
        except Exception as e:
            self.app.handle_error("Edit quote", e, "Could not load quote.")
            return
        self.app.refresh()

    def delete_quote(self):
        quote_id = self._selected_quote()
        if quote_id is None:
            return
        confirmed = messagebox.askyesno("Delete", "Delete this quote permanently?")
        try:
            self.app.controller.delete_quote(quote_id, confirmed)
        except Exception as e:
            self.app.handle_error("Delete quote", e, "Could not delete quote.")
            return
        self.app.refresh()

    def print_quote(self):
        quote_id = self._selected_quote()
        if quote_id is None:
            return
        try:
            path = self.app.controller.print_quote(quote_id)
        except Exception as e:
            self.app.handle_error("Print quote", e, "Could not print quote.")
            return
        self.app.open_document(path)
        self.app.toast("Quote sent to the browser for printing.", kind="info")
