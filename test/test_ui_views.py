from pathlib import Path

from conftest import fixed_ids

from gestorpro.application.container import build_container
from gestorpro.application.state import Tab
from gestorpro.ui import app as ui_app
from gestorpro.ui.app import App
from gestorpro.ui.views.quotes_view import QuotesView


class FakeEntry:
    def __init__(self, value: str):
        self.value = value

    def get(self):
        return self.value


class FakeWidget:
    created: list = []

    def __init__(self, *args, **kwargs):
        self.destroyed = False
        FakeWidget.created.append(self)

    def __getattr__(self, name):
        return lambda *args, **kwargs: None

    def destroy(self):
        self.destroyed = True


def _quotes_view(app, customer: str, phone: str = "") -> QuotesView:
    view = QuotesView.__new__(QuotesView)
    view.app = app
    view.q_customer = FakeEntry(customer)
    view.q_email = FakeEntry("")
    view.q_phone = FakeEntry(phone)
    view.q_validity = FakeEntry("7")
    return view


def _app(controller) -> App:
    app = App.__new__(App)
    app.controller = controller
    app.refresh = lambda: None
    app.toast = lambda *args, **kwargs: None
    return app


def test_leaving_quotes_tab_keeps_typed_customer_details(tmp_path: Path):
    container = build_container(tmp_path, ids=fixed_ids())
    controller = container.controller
    controller.start()
    controller.register("Ana", "ana@shop.com", "secret")
    controller.select_tab(Tab.QUOTES)

    app = _app(controller)
    app.views = {Tab.QUOTES: _quotes_view(app, " Bruno ", "555-0101")}

    app.show_tab(Tab.SALES)

    assert controller.state.active_tab is Tab.SALES
    assert controller.state.quote_draft.customer == "Bruno"
    assert controller.state.quote_draft.customer_phone == "555-0101"


def test_refresh_button_on_quotes_tab_keeps_typed_details(tmp_path: Path):
    container = build_container(tmp_path, ids=fixed_ids())
    controller = container.controller
    controller.start()
    controller.register("Ana", "ana@shop.com", "secret")
    controller.select_tab(Tab.QUOTES)

    app = _app(controller)
    app.views = {Tab.QUOTES: _quotes_view(app, "Carla")}

    app.reload()

    assert controller.state.quote_draft.customer == "Carla"


def test_splash_is_dismissed_after_delay(monkeypatch):
    monkeypatch.setattr(ui_app.tk, "Toplevel", FakeWidget)
    monkeypatch.setattr(ui_app.tk, "Label", FakeWidget)
    FakeWidget.created = []
    scheduled = []

    app = App.__new__(App)
    app.after = lambda ms, fn: scheduled.append((ms, fn))
    app.winfo_screenwidth = lambda: 1920
    app.winfo_screenheight = lambda: 1080

    app._show_splash()

    assert [ms for ms, _fn in scheduled] == [ui_app.SPLASH_MS]
    splash = FakeWidget.created[0]
    assert not splash.destroyed
    scheduled[0][1]()
    assert splash.destroyed
