from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from gestorpro.domain.errors import PersistenceError
from gestorpro.repositories.contracts import DocumentStore, Record


@dataclass
class DocumentUnitOfWork:
    """Stages collection replacements and persists them in one document write.

    Nothing is written when the ``with`` block raises. A write reported as
    failed by the store surfaces as :class:`PersistenceError`.
    """

    store: DocumentStore
    _staged: dict[str, list[Record]] = field(default_factory=dict)

    def __enter__(self) -> "DocumentUnitOfWork":
        self._staged = {}
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        self._staged = {}

    def get(self, name: str) -> list[Record]:
        if name in self._staged:
            return self._staged[name]
        return self.store.get_collection(name)

    def stage(self, name: str, records: Sequence[Record]) -> None:
        self._staged[name] = list(records)

    def commit(self) -> None:
        if not self._staged:
            return
        tables = dict(self._staged)
        self._staged = {}
        if not self.store.replace_collections(tables):
            raise PersistenceError(f"Could not save {', '.join(tables)}.")
