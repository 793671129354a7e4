from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gestorpro.repositories.json_store import atomic_write_json

log = logging.getLogger(__name__)

ACTIVE_USER_KEY = "active_user"


class SessionStore:
    """Small key-value file kept apart from the main document."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            log.warning("session_read_failed path=%s error=%s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_json(self.path, data)
            return True
        except OSError:
            log.exception("session_write_failed path=%s", self.path)
            return False

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> bool:
        data = self._read()
        data[key] = value
        return self._write(data)

    def remove(self, key: str) -> bool:
        data = self._read()
        if key not in data:
            return True
        del data[key]
        return self._write(data)
