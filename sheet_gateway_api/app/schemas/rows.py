"""
Pydantic models for row listings.

Rows are schema-less, so each entry of ``data`` is the row's field
mapping plus ``originalIndex``, the row's position in the unfiltered
snapshot.  Clients must send that index back for updates and deletes.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

ORIGINAL_INDEX_KEY = "originalIndex"


class PageResult(BaseModel):
    """One page of a filtered snapshot."""

    data: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Number of rows matching the filter before paging")
