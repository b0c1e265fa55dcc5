"""
Pydantic models for the request envelope and per-action payloads.

Clients send ``{"action", "collection", "payload"}``.  Older clients
name the collection ``sheetName``; both spellings are accepted.
Payload field names follow the camelCase used on the wire and are
exposed in snake_case on the models.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class DataRequest(BaseModel):
    """Envelope of every gateway call."""

    action: Optional[str] = Field(None, example="read")
    collection: Optional[str] = Field(None, example="Companies")
    sheet_name: Optional[str] = Field(None, alias="sheetName")
    payload: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
    }

    @property
    def collection_name(self) -> Optional[str]:
        return self.collection or self.sheet_name

    @property
    def payload_dict(self) -> Dict[str, Any]:
        return self.payload or {}


def _blank_to_none(value: Any) -> Any:
    """Treat ``null``, ``""``, ``0`` and ``false`` from the client as absent."""
    return value if value else None


class ReadPayload(BaseModel):
    """Payload of ``read``; absent, empty or zero page/limit fall back to defaults."""

    filter: Optional[Dict[str, Any]] = None
    page: Optional[int] = Field(None, example=1)
    limit: Optional[int] = Field(None, example=15)

    _blank_window = field_validator("page", "limit", mode="before")(_blank_to_none)


class WritePayload(BaseModel):
    """Payload of ``write`` and ``update``.

    ``row_index`` is required for ``update`` and addresses the row by
    its ``originalIndex`` in the last snapshot the client read.
    ``force_save`` is ``None`` unless the client asked to override the
    daily contact guard.
    """

    data: Optional[Dict[str, Any]] = None
    row_index: Optional[int] = Field(None, alias="rowIndex")
    user_role: Optional[str] = Field(None, alias="userRole")
    force_save: Optional[bool] = Field(None, alias="forceSave")

    model_config = {
        "populate_by_name": True,
    }

    _blank_force_save = field_validator("force_save", mode="before")(_blank_to_none)


class DeletePayload(BaseModel):
    row_index: Optional[int] = Field(None, alias="rowIndex")

    model_config = {
        "populate_by_name": True,
    }
