"""
In-memory sheet backend.

Rows live in process memory and vanish on restart.  Row numbers are
handed out monotonically, so after a deletion they are no longer
contiguous, just like the identities of a real spreadsheet.  Use it
for local development (``SHEETS_BACKEND=memory``) and in tests.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import CollectionNotFoundError
from .sheets import SheetCollection, SheetRow, SheetStore, cell_value, row_at


class MemoryCollection(SheetCollection):
    def __init__(self, name: str, rows: Iterable[Mapping[str, Any]] = ()) -> None:
        self.name = name
        self.headers: List[str] = []
        self._rows: List[SheetRow] = []
        self._next_row_number = 2
        for fields in rows:
            self.add(fields)

    def _extend_headers(self, fields: Mapping[str, Any]) -> None:
        for key in fields:
            if key not in self.headers:
                self.headers.append(key)

    def fetch_all(self) -> List[SheetRow]:
        # Hand out copies: a snapshot must not change under its reader.
        return [
            SheetRow(row.row_number, {header: row.get(header) for header in self.headers})
            for row in self._rows
        ]

    def add(self, fields: Mapping[str, Any]) -> None:
        self._extend_headers(fields)
        values = {name: cell_value(value) for name, value in fields.items()}
        self._rows.append(SheetRow(self._next_row_number, values))
        self._next_row_number += 1

    def update_at(self, index: int, fields: Mapping[str, Any]) -> None:
        row = row_at(self._rows, index)
        self._extend_headers(fields)
        row.values.update({name: cell_value(value) for name, value in fields.items()})

    def delete_at(self, index: int) -> None:
        row_at(self._rows, index)
        del self._rows[index]


class MemoryStore(SheetStore):
    backend_name = "memory"

    def __init__(self, collections: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None) -> None:
        self._collections: Dict[str, MemoryCollection] = {}
        for name, rows in (collections or {}).items():
            self.create_collection(name, rows)

    def create_collection(self, name: str, rows: Iterable[Mapping[str, Any]] = ()) -> MemoryCollection:
        collection = MemoryCollection(name, rows)
        self._collections[name] = collection
        return collection

    def collection(self, name: str) -> SheetCollection:
        try:
            return self._collections[name]
        except KeyError:
            raise CollectionNotFoundError(name) from None
