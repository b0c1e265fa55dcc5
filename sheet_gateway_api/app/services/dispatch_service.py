"""
Action dispatcher for the data gateway.

``DispatchService.handle`` takes the raw request body, parses the
``{action, collection, payload}`` envelope, resolves the collection
and routes to the handler for the action:

* ``read``: filter and page a snapshot (``QueryService.query``);
* ``readAll``: return every row with its index;
* ``write`` / ``update``: run the contact rules, then append or merge;
* ``delete``: remove the row at ``rowIndex``.

Each step reads its own snapshot; nothing is carried over between
steps or between requests.  There is no locking: a row index taken
from one snapshot may address a different row by the time it is used
if another client edited the sheet in between.

Every outcome is turned into a ``GatewayResponse``.  ``GatewayError``
keeps its status and body; any other exception is logged and reported
as a 500 with its message.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from fastapi import status

from ..core.errors import GatewayError, InvalidRequestError
from ..core.sheets import SheetCollection, SheetStore
from ..schemas.requests import DataRequest, DeletePayload, ReadPayload, WritePayload
from ..schemas.results import SoftDecline, WriteSuccess
from .query_service import QueryService
from .rule_service import ContactRuleService

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)
Handler = Callable[[DataRequest, SheetCollection], Awaitable[Any]]


@dataclass
class GatewayResponse:
    status_code: int
    body: Any


class DispatchService:
    """Routes gateway requests to the query engine, rules and mutations."""

    @classmethod
    def parse_body(cls, body: Optional[Union[bytes, str]]) -> DataRequest:
        """Decode and validate the request envelope."""
        if not body:
            raise InvalidRequestError("Empty body")
        try:
            raw = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise InvalidRequestError(f"Malformed JSON body: {exc}") from exc
        if not isinstance(raw, dict):
            raise InvalidRequestError("Request body must be a JSON object.")
        try:
            request = DataRequest.model_validate(raw)
        except ValidationError as exc:
            raise InvalidRequestError(f"Malformed request: {_first_error(exc)}") from exc
        if not request.collection_name:
            raise InvalidRequestError("Collection name required.")
        return request

    @classmethod
    async def handle(cls, store: SheetStore, body: Optional[Union[bytes, str]]) -> GatewayResponse:
        action: Optional[str] = None
        try:
            request = cls.parse_body(body)
            action = request.action
            collection = store.collection(request.collection_name)
            result = await cls.route(request, collection)
            return GatewayResponse(status.HTTP_200_OK, result)
        except GatewayError as exc:
            logger.warning("Request for action %s failed with %s: %s", action, exc.status_code, exc.message)
            return GatewayResponse(exc.status_code, exc.to_body())
        except Exception as exc:
            logger.exception("Unhandled error while handling action %s", action)
            return GatewayResponse(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": str(exc)})

    @classmethod
    async def route(cls, request: DataRequest, collection: SheetCollection) -> Any:
        handlers: Dict[str, Handler] = {
            "read": cls._read,
            "readAll": cls._read_all,
            "write": cls._write,
            "update": cls._write,
            "delete": cls._delete,
        }
        handler = handlers.get(request.action or "")
        if handler is None:
            raise InvalidRequestError("Invalid action.")
        logger.info("Dispatching %s on '%s'", request.action, collection.name)
        return await handler(request, collection)

    @classmethod
    async def _read(cls, request: DataRequest, collection: SheetCollection) -> Dict[str, Any]:
        payload = _parse_payload(ReadPayload, request)
        result = QueryService.query(
            collection.fetch_all(),
            filters=payload.filter,
            page=payload.page,
            limit=payload.limit,
        )
        return result.model_dump()

    @classmethod
    async def _read_all(cls, request: DataRequest, collection: SheetCollection) -> Any:
        return QueryService.query_all(collection.fetch_all())

    @classmethod
    async def _write(cls, request: DataRequest, collection: SheetCollection) -> Dict[str, Any]:
        payload = _parse_payload(WritePayload, request)
        is_update = request.action == "update"
        if payload.data is None or (is_update and payload.row_index is None):
            raise InvalidRequestError("Data/rowIndex required.", body_key="message")

        data: Dict[str, Any] = dict(payload.data)
        if ContactRuleService.applies(collection.name, payload.user_role, data):
            outcome = await ContactRuleService.apply(
                request.action,
                collection,
                data,
                row_index=payload.row_index,
                force_save=bool(payload.force_save),
            )
            if isinstance(outcome, SoftDecline):
                return outcome.model_dump(by_alias=True)
            data = outcome

        if is_update:
            collection.update_at(payload.row_index, data)
        else:
            collection.add(data)
        return WriteSuccess().model_dump()

    @classmethod
    async def _delete(cls, request: DataRequest, collection: SheetCollection) -> Dict[str, Any]:
        payload = _parse_payload(DeletePayload, request)
        if payload.row_index is None:
            raise InvalidRequestError("rowIndex required.", body_key="message")
        collection.delete_at(payload.row_index)
        return WriteSuccess().model_dump()


def _parse_payload(model: Type[PayloadT], request: DataRequest) -> PayloadT:
    try:
        return model.model_validate(request.payload_dict)
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid payload for {request.action}: {_first_error(exc)}") from exc


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
