from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import sys


DB_FILENAME = "database.json"
SESSION_FILENAME = "session.json"


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    db_path: Path
    session_path: Path
    logs_dir: Path
    exports_dir: Path


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def user_data_dir(app_name: str = "GestorPro") -> Path:
    if sys.platform.startswith("win"):
        return _windows_appdata() / app_name
    if sys.platform == "darwin":
        return _mac_app_support() / app_name
    return Path.home() / f".{app_name.lower()}"


def get_app_paths(app_name: str = "GestorPro", base_dir: Path | str | None = None) -> AppPaths:
    base = Path(base_dir) if base_dir is not None else user_data_dir(app_name)

    logs = base / "logs"
    exports = base / "exports"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    exports.mkdir(parents=True, exist_ok=True)

    return AppPaths(
        base_dir=base,
        db_path=base / DB_FILENAME,
        session_path=base / SESSION_FILENAME,
        logs_dir=logs,
        exports_dir=exports,
    )
