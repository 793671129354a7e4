from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
import logging
import webbrowser

from gestorpro.application.controller import AppController
from gestorpro.application.state import Tab
from gestorpro.domain.errors import AppError
from gestorpro.ui.views.dashboard_view import DashboardView
from gestorpro.ui.views.inventory_view import InventoryView
from gestorpro.ui.views.login_view import LoginView
from gestorpro.ui.views.quotes_view import QuotesView
from gestorpro.ui.views.sales_view import SalesView

log = logging.getLogger(__name__)

SPLASH_MS = 2800


class App(tk.Tk):
    def __init__(self, controller: AppController, db_path: str, logs_dir: str):
        super().__init__()
        self.title("GestorPro")
        self.geometry("1280x720")
        self.minsize(1120, 640)

        self.controller = controller
        self.db_path = db_path
        self.logs_dir = logs_dir

        self.status_var = tk.StringVar(value="")
        self.user_var = tk.StringVar(value="")
        self._toast_after_id = None

        self._build_styles()

        self.login_view = LoginView(self, self)

        self.main = ttk.Frame(self)
        self._build_topbar()

        body = ttk.Frame(self.main)
        body.pack(fill="both", expand=True, padx=12, pady=(0, 8))

        self.sidebar = ttk.Frame(body)
        self.sidebar.pack(side="left", fill="y", padx=(0, 10))

        content = ttk.Frame(body)
        content.pack(side="right", fill="both", expand=True)

        self.nb = ttk.Notebook(content, style="Side.TNotebook")
        self.nb.pack(fill="both", expand=True)

        # Views (tabs hidden)
        self.views = {
            Tab.DASHBOARD: DashboardView(self.nb, self),
            Tab.INVENTORY: InventoryView(self.nb, self),
            Tab.SALES: SalesView(self.nb, self),
            Tab.QUOTES: QuotesView(self.nb, self),
        }

        self._build_sidebar()
        self._build_status_bar()

        self.protocol("WM_DELETE_WINDOW", self.quit_app)

        self.controller.start()
        self.refresh()
        self.toast("Ready.", kind="info", ms=1200)
        self._show_splash()

    def _show_splash(self, ms: int = SPLASH_MS):
        splash = tk.Toplevel(self)
        splash.overrideredirect(True)
        splash.configure(bg="#0f172a")
        w, h = 420, 200
        x = self.winfo_screenwidth() // 2 - w // 2
        y = self.winfo_screenheight() // 2 - h // 2
        splash.geometry(f"{w}x{h}+{x}+{y}")
        tk.Label(splash, text="GestorPro", fg="white", bg="#0f172a", font=("Segoe UI", 24, "bold"))\
            .pack(expand=True, pady=(40, 0))
        tk.Label(splash, text="Loading...", fg="#94a3b8", bg="#0f172a").pack(pady=(0, 40))
        splash.lift()
        self.after(ms, splash.destroy)

    def _build_styles(self):
        style = ttk.Style(self)
        style.layout("Side.TNotebook.Tab", [])
        style.configure("Side.TNotebook", tabmargins=0)

        try:
            style.configure("Big.TButton", padding=(14, 10))
            style.configure("Title.TLabel", font=("Segoe UI", 16, "bold"))
            style.configure("KPI.TLabel", font=("Segoe UI", 10))
            style.configure("KPIValue.TLabel", font=("Segoe UI", 14, "bold"))
        except tk.TclError as e:
            log.exception("UI style setup failed: %s", e)

    def _build_topbar(self):
        top = ttk.Frame(self.main)
        top.pack(fill="x", padx=12, pady=10)

        ttk.Label(top, text="GestorPro", style="Title.TLabel").pack(side="left")
        ttk.Button(top, text="Quit", command=self.quit_app).pack(side="right")
        ttk.Button(top, text="Log out", command=self.logout).pack(side="right", padx=10)
        ttk.Label(top, textvariable=self.user_var).pack(side="right", padx=10)

    def _build_sidebar(self):
        box = ttk.LabelFrame(self.sidebar, text="Navigation")
        box.pack(fill="x", pady=(0, 10))

        buttons = [
            ("📊 Dashboard", Tab.DASHBOARD),
            ("📦 Inventory", Tab.INVENTORY),
            ("🧾 Sales", Tab.SALES),
            ("📝 Quotes", Tab.QUOTES),
        ]
        for i, (label, tab) in enumerate(buttons):
            ttk.Button(box, text=label, style="Big.TButton", command=lambda t=tab: self.show_tab(t))\
                .pack(fill="x", padx=10, pady=(10 if i == 0 else 6, 6))

        ttk.Button(box, text="🔄 Refresh", style="Big.TButton", command=self.reload)\
            .pack(fill="x", padx=10, pady=(6, 10))

    def _build_status_bar(self):
        bar = ttk.Frame(self.main)
        bar.pack(fill="x", padx=12, pady=(0, 10))
        ttk.Label(bar, textvariable=self.status_var).pack(side="left")
        ttk.Label(bar, text=f"Data: {self.db_path}").pack(side="right")

    def toast(self, msg: str, kind: str = "info", ms: int = 2500):
        prefix = {"info": "ℹ ", "success": "✅ ", "warn": "⚠ ", "error": "❌ "}.get(kind, "")
        self.status_var.set(prefix + msg)
        if self._toast_after_id is not None:
            self.after_cancel(self._toast_after_id)
        self._toast_after_id = self.after(ms, lambda: self.status_var.set(""))

    def handle_error(self, title: str, exc: Exception, fallback: str) -> None:
        if isinstance(exc, AppError):
            messagebox.showwarning(title, str(exc))
            return
        log.exception("%s: %s", title, exc)
        messagebox.showerror(title, f"{fallback}\nSee logs in {self.logs_dir}")

    # ---------- rendering ----------
    def refresh(self):
        state = self.controller.state
        if not state.authenticated:
            self.main.pack_forget()
            self.login_view.show()
            return

        self.login_view.hide()
        self.main.pack(fill="both", expand=True)
        self.user_var.set(f"{state.current_user.name} ({state.current_user.email})")

        view = self.views[state.active_tab]
        self.nb.select(view.frame)
        view.refresh(self.controller.render())

    def _leave_current_tab(self):
        # Typed quote details only reach the draft on push.
        if self.controller.state.active_tab is Tab.QUOTES:
            self.views[Tab.QUOTES].push_details()

    def reload(self):
        try:
            self._leave_current_tab()
            self.controller.reload()
        except Exception as e:
            self.handle_error("Refresh failed", e, "Could not reload data.")
            return
        self.refresh()
        self.toast("Refreshed.", kind="info", ms=1200)

    def show_tab(self, tab: Tab):
        try:
            self._leave_current_tab()
            self.controller.select_tab(tab)
        except Exception as e:
            self.handle_error("Navigation", e, "Could not open tab.")
            return
        self.refresh()

    # ---------- session ----------
    def login(self, email: str, password: str):
        try:
            self.controller.login(email, password)
        except Exception as e:
            self.handle_error("Login", e, "Login failed.")
            return
        self.refresh()

    def register(self, name: str, email: str, password: str):
        try:
            self.controller.register(name, email, password)
        except Exception as e:
            self.handle_error("Register", e, "Registration failed.")
            return
        self.refresh()

    def logout(self):
        self.controller.logout()
        self.refresh()

    def open_document(self, path) -> None:
        webbrowser.open(path.resolve().as_uri())

    def quit_app(self):
        if messagebox.askyesno("Quit", "Do you really want to close GestorPro?"):
            log.info("app_quit")
            self.destroy()
