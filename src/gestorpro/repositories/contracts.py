from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence


Record = dict[str, Any]


class DocumentStore(Protocol):
    """Whole-collection persistence. There is no per-record write primitive."""

    def initialize(self) -> None: ...
    def read_all(self) -> dict[str, list[Record]]: ...
    def get_collection(self, name: str) -> list[Record]: ...
    def replace_collection(self, name: str, records: Sequence[Record]) -> bool: ...
    def replace_collections(self, tables: Mapping[str, Sequence[Record]]) -> bool: ...


class KeyValueStore(Protocol):
    def get(self, key: str) -> Any: ...
    def set(self, key: str, value: Any) -> bool: ...
    def remove(self, key: str) -> bool: ...
