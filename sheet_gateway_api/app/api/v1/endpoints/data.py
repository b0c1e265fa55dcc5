"""
Data gateway endpoint for API v1.

A single POST route accepts the ``{action, collection, payload}``
envelope and returns whatever the dispatcher produced, with the status
code it chose.  The body is read raw so that empty or malformed bodies
are reported in the gateway's own error shape rather than FastAPI's
validation format.

``legacy_router`` exposes the same handler at the path used by the
previous serverless deployment so existing front-ends keep working.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sheet_gateway_api.app.core.sheets import SheetStore, get_store
from sheet_gateway_api.app.services.dispatch_service import DispatchService

router = APIRouter()


@router.post("/data")
async def handle_data(request: Request, store: SheetStore = Depends(get_store)) -> JSONResponse:
    """Run one gateway action.

    - **action**: ``read``, ``readAll``, ``write``, ``update`` or ``delete``.
    - **collection**: worksheet title (``sheetName`` is accepted too).
    - **payload**: action-specific fields (``filter``, ``page``, ``limit``,
      ``data``, ``rowIndex``, ``userRole``, ``forceSave``).

    A write declined by the daily contact guard answers 200 with
    ``success: false`` and ``confirmationRequired: true``.
    """
    body = await request.body()
    result = await DispatchService.handle(store, body)
    return JSONResponse(status_code=result.status_code, content=result.body)


legacy_router = APIRouter()
legacy_router.add_api_route(
    "/.netlify/functions/handleData",
    handle_data,
    methods=["POST"],
    include_in_schema=False,
)
