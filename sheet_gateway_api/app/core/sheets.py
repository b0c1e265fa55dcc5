"""
Storage interface for the external spreadsheet.

The gateway never owns data: every row it sees comes from a fresh
``fetch_all`` call on a ``SheetCollection`` and every change goes
through ``add``, ``update_at`` or ``delete_at``.  Rows are addressed by
their position in the snapshot the caller last read; that position is
not stable once another client inserts or removes rows.  Keeping the
addressing behind this interface lets a backend switch to the
service's row numbers without touching the services.

Two backends exist: ``GoogleSheetStore`` (``core.google_sheets``) and
``MemoryStore`` (``core.memory_store``).  ``get_store`` returns the
one selected by ``settings.sheets_backend`` and is used as a FastAPI
dependency.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Mapping

from .config import settings
from .errors import RowNotFoundError

logger = logging.getLogger(__name__)


def cell_value(value: Any) -> str:
    """Render a payload value the way the spreadsheet stores it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


@dataclass
class SheetRow:
    """One row of a snapshot.

    ``values`` keeps header order.  ``row_number`` is the identity the
    service assigns to the row; it is opaque and not contiguous.
    """

    row_number: int
    values: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str:
        return cell_value(self.values.get(name))

    def to_dict(self) -> Dict[str, str]:
        return dict(self.values)


def row_at(rows: List[SheetRow], index: int) -> SheetRow:
    """Return ``rows[index]`` or raise ``RowNotFoundError``.

    Negative indices never wrap around.
    """
    if index < 0 or index >= len(rows):
        raise RowNotFoundError(index)
    return rows[index]


class SheetCollection(ABC):
    """A named worksheet of the external service."""

    name: str

    @abstractmethod
    def fetch_all(self) -> List[SheetRow]:
        """Return the current rows in sheet order."""

    @abstractmethod
    def add(self, fields: Mapping[str, Any]) -> None:
        """Append a row; unknown fields extend the header row."""

    @abstractmethod
    def update_at(self, index: int, fields: Mapping[str, Any]) -> None:
        """Merge ``fields`` into the row at ``index`` of a fresh snapshot."""

    @abstractmethod
    def delete_at(self, index: int) -> None:
        """Delete the row at ``index`` of a fresh snapshot."""


class SheetStore(ABC):
    """Resolves collection names to collection handles."""

    backend_name: str = "abstract"

    @abstractmethod
    def collection(self, name: str) -> SheetCollection:
        """Return the collection called ``name``.

        Raises ``CollectionNotFoundError`` when the service has no such
        collection.
        """


def build_store() -> SheetStore:
    """Instantiate the backend selected in settings."""
    backend = settings.sheets_backend
    if backend == "memory":
        from .memory_store import MemoryStore

        logger.info("Using in-memory sheet backend")
        return MemoryStore({settings.contact_collection: []})
    if backend == "google":
        from .google_sheets import GoogleSheetStore

        logger.info("Using Google Sheets backend for spreadsheet %s", settings.google_sheet_id or "<unset>")
        return GoogleSheetStore(
            client_email=settings.google_client_email,
            private_key=settings.private_key,
            sheet_id=settings.google_sheet_id,
        )
    raise ValueError(f"Unknown sheets backend '{backend}'")


@lru_cache(maxsize=1)
def get_store() -> SheetStore:
    """FastAPI dependency returning the process-wide store.

    Only the connection handle is shared; no row data is cached between
    requests.
    """
    return build_store()
