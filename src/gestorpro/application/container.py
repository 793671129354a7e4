from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gestorpro.application.controller import AppController
from gestorpro.config import AppPaths, get_app_paths
from gestorpro.domain.ids import IdGenerator
from gestorpro.repositories.json_store import JsonDocumentStore
from gestorpro.repositories.session_store import SessionStore
from gestorpro.services.auth_service import AuthService
from gestorpro.services.inventory_service import InventoryService
from gestorpro.services.quote_service import QuoteService
from gestorpro.services.reporting_service import ReportingService
from gestorpro.services.sales_service import SalesService


@dataclass(frozen=True)
class AppContainer:
    paths: AppPaths
    store: JsonDocumentStore
    sessions: SessionStore
    inventory: InventoryService
    sales: SalesService
    quotes: QuoteService
    auth: AuthService
    reporting: ReportingService
    controller: AppController


def build_container(base_dir: Path | str | None = None, ids: IdGenerator | None = None) -> AppContainer:
    paths = get_app_paths(base_dir=base_dir)

    store = JsonDocumentStore(paths.db_path)
    store.initialize()
    sessions = SessionStore(paths.session_path)

    ids = ids or IdGenerator()
    inventory = InventoryService(store, ids)
    sales = SalesService(store, ids)
    quotes = QuoteService(store, ids)
    auth = AuthService(store, sessions, ids)
    reporting = ReportingService(store)
    controller = AppController(
        inventory=inventory,
        sales=sales,
        quotes=quotes,
        auth=auth,
        reporting=reporting,
        exports_dir=paths.exports_dir,
    )

    return AppContainer(
        paths=paths,
        store=store,
        sessions=sessions,
        inventory=inventory,
        sales=sales,
        quotes=quotes,
        auth=auth,
        reporting=reporting,
        controller=controller,
    )
