"""
Error taxonomy for the gateway.

Every failure that terminates a request is a ``GatewayError`` carrying
the HTTP status and the key under which the message is reported
(``error`` or ``message``, mirroring the response shapes existing
clients already parse).  A declined write is not an error; see
``schemas.results.SoftDecline``.
"""

from typing import Any, Dict

from fastapi import status


class GatewayError(Exception):
    """Base class for failures reported to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    body_key: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {self.body_key: self.message}


class InvalidRequestError(GatewayError):
    """Malformed body, missing collection, unknown action or missing payload fields."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, body_key: str = "error") -> None:
        super().__init__(message)
        self.body_key = body_key


class NotFoundError(GatewayError):
    status_code = status.HTTP_404_NOT_FOUND


class CollectionNotFoundError(NotFoundError):
    """The named worksheet does not exist.

    Reported as 400 because the collection name is part of the request
    envelope, not a resource path.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, name: str) -> None:
        super().__init__(f"Sheet '{name}' not found.")
        self.name = name


class RowNotFoundError(NotFoundError):
    """No row exists at the requested positional index."""

    def __init__(self, index: int) -> None:
        super().__init__("Row not found.")
        self.index = index


class ServiceError(GatewayError):
    """The tabular service failed (transport, auth, quota, API error)."""
