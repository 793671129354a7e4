from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Sequence

from gestorpro.repositories.contracts import Record

log = logging.getLogger("gestorpro.store")

COLLECTIONS: tuple[str, ...] = ("products", "sales", "users", "quotes")


def empty_document() -> dict[str, list[Record]]:
    return {name: [] for name in COLLECTIONS}


def atomic_write_json(path: Path, data: Any) -> None:
    """Write ``data`` next to ``path`` and swap it in with ``os.replace``."""
    tmp_fd, tmp_name = tempfile.mkstemp(prefix=".tmp_", suffix=".json", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


class JsonDocumentStore:
    """Single JSON document holding every collection of the application.

    Reads and writes always cover the whole document. I/O problems never
    reach the caller: reads fall back to the empty scaffold and writes
    report ``False``.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Document root must be an object, got {type(data).__name__}")
        return data

    def _write(self, data: Mapping[str, Any]) -> None:
        atomic_write_json(self.path, dict(data))

    def initialize(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._write(empty_document())
                log.info("document_created path=%s", self.path)
                return

            data = self._load()
            missing = [name for name in COLLECTIONS if name not in data]
            if missing:
                for name in missing:
                    data[name] = []
                self._write(data)
                log.info("document_migrated path=%s added=%s", self.path, ",".join(missing))
        except (OSError, ValueError):
            log.exception("document_init_failed path=%s", self.path)

    def read_all(self) -> dict[str, list[Record]]:
        try:
            return self._load()
        except (OSError, ValueError) as e:
            log.warning("document_read_failed path=%s error=%s", self.path, e)
            return empty_document()

    def get_collection(self, name: str) -> list[Record]:
        records = self.read_all().get(name)
        return list(records) if isinstance(records, list) else []

    def replace_collection(self, name: str, records: Sequence[Record]) -> bool:
        return self.replace_collections({name: records})

    def replace_collections(self, tables: Mapping[str, Sequence[Record]]) -> bool:
        document = self.read_all()
        for name, records in tables.items():
            document[name] = list(records)
        try:
            self._write(document)
        except OSError:
            log.exception("document_write_failed path=%s tables=%s", self.path, ",".join(tables))
            return False
        log.info("document_saved tables=%s", ",".join(f"{n}:{len(r)}" for n, r in tables.items()))
        return True
