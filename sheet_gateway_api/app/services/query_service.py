"""
Filtering and pagination over row snapshots.

Both operations are pure functions of their inputs: they never talk to
the spreadsheet and never keep state.  Filter patterns are matched as
case-insensitive substrings, an empty pattern matches everything and
several patterns must all match.  Each emitted row carries
``originalIndex``, its position in the full snapshot, because updates
and deletes address rows by that position rather than by their place
on the page.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..core.config import settings
from ..core.errors import InvalidRequestError
from ..core.sheets import SheetRow, cell_value
from ..schemas.rows import ORIGINAL_INDEX_KEY, PageResult


class QueryService:
    """Stateless query engine for ``read`` and ``readAll``."""

    @staticmethod
    def matches(row: SheetRow, filters: Mapping[str, Any]) -> bool:
        """Return ``True`` if ``row`` satisfies every non-empty pattern."""
        for name, pattern in filters.items():
            needle = cell_value(pattern).lower()
            if not needle:
                continue
            if needle not in row.get(name).lower():
                return False
        return True

    @classmethod
    def query(
        cls,
        snapshot: List[SheetRow],
        filters: Optional[Mapping[str, Any]] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PageResult:
        """Filter ``snapshot`` and return the requested page.

        ``page`` defaults to 1 and ``limit`` to ``settings.default_page_limit``
        when absent or zero.  A page past the end is empty but still
        reports the full ``total``.
        """
        page = page or 1
        limit = limit or settings.default_page_limit
        if page < 1 or limit < 1:
            raise InvalidRequestError("page and limit must be positive integers.")

        if filters:
            filtered = [row for row in snapshot if cls.matches(row, filters)]
        else:
            filtered = list(snapshot)

        positions = {row.row_number: index for index, row in enumerate(snapshot)}
        window = filtered[(page - 1) * limit : page * limit]
        return PageResult(
            data=[cls._view(row, positions[row.row_number]) for row in window],
            total=len(filtered),
        )

    @classmethod
    def query_all(cls, snapshot: List[SheetRow]) -> List[Dict[str, Any]]:
        return [cls._view(row, index) for index, row in enumerate(snapshot)]

    @staticmethod
    def _view(row: SheetRow, index: int) -> Dict[str, Any]:
        view: Dict[str, Any] = row.to_dict()
        view[ORIGINAL_INDEX_KEY] = index
        return view
