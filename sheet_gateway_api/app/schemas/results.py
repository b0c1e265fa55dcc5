"""
Result shapes of ``write`` and ``update``.

A write either succeeds or is softly declined by the contact rules.
A soft decline is a normal 200 response: the client is expected to ask
the user and resubmit with ``forceSave``.  Hard failures are raised as
``GatewayError`` instead.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field


class WriteSuccess(BaseModel):
    success: Literal[True] = True


class SoftDecline(BaseModel):
    """The write was withheld pending confirmation."""

    success: Literal[False] = False
    confirmation_required: Literal[True] = Field(True, alias="confirmationRequired")
    message: str

    model_config = {
        "populate_by_name": True,
    }


WriteResult = Union[WriteSuccess, SoftDecline]
