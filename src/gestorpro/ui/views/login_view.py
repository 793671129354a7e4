from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class LoginView:
    def __init__(self, parent: tk.Misc, app):
        self.app = app
        self.frame = ttk.Frame(parent)
        self.registering = False

        box = ttk.LabelFrame(self.frame, text="GestorPro")
        box.place(relx=0.5, rely=0.45, anchor="center")

        self.subtitle = ttk.Label(box, text="Welcome back", style="Title.TLabel")
        self.subtitle.grid(row=0, column=0, columnspan=2, padx=16, pady=(16, 10))

        self.name_label = ttk.Label(box, text="Name")
        self.name_e = ttk.Entry(box, width=36)

        ttk.Label(box, text="Email").grid(row=2, column=0, sticky="w", padx=16, pady=4)
        self.email_e = ttk.Entry(box, width=36)
        self.email_e.grid(row=2, column=1, padx=16, pady=4)

        ttk.Label(box, text="Password").grid(row=3, column=0, sticky="w", padx=16, pady=4)
        self.pass_e = ttk.Entry(box, width=36, show="•")
        self.pass_e.grid(row=3, column=1, padx=16, pady=4)

        self.submit_btn = ttk.Button(box, text="Sign in", style="Big.TButton", command=self.submit)
        self.submit_btn.grid(row=4, column=0, columnspan=2, sticky="ew", padx=16, pady=(10, 4))

        self.toggle_btn = ttk.Button(box, text="Create a new account", command=self.toggle_mode)
        self.toggle_btn.grid(row=5, column=0, columnspan=2, sticky="ew", padx=16, pady=4)

        ttk.Button(box, text="Quit", command=self.app.quit_app)\
            .grid(row=6, column=0, columnspan=2, sticky="ew", padx=16, pady=(4, 16))

        for entry in (self.name_e, self.email_e, self.pass_e):
            entry.bind("<Return>", lambda _e: self.submit())

    def show(self):
        self.frame.pack(fill="both", expand=True)
        self.email_e.focus_set()

    def hide(self):
        self.frame.pack_forget()
        self.pass_e.delete(0, tk.END)

    def toggle_mode(self):
        self.registering = not self.registering
        if self.registering:
            self.name_label.grid(row=1, column=0, sticky="w", padx=16, pady=4)
            self.name_e.grid(row=1, column=1, padx=16, pady=4)
            self.subtitle.config(text="Create a new admin account")
            self.submit_btn.config(text="Register and sign in")
            self.toggle_btn.config(text="I already have an account")
        else:
            self.name_label.grid_remove()
            self.name_e.grid_remove()
            self.subtitle.config(text="Welcome back")
            self.submit_btn.config(text="Sign in")
            self.toggle_btn.config(text="Create a new account")

    def submit(self):
        email = self.email_e.get()
        password = self.pass_e.get()
        if self.registering:
            self.app.register(self.name_e.get(), email, password)
        else:
            self.app.login(email, password)
