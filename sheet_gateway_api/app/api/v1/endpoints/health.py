"""
Health endpoint for API v1.

Reports which storage backend is configured without touching the
spreadsheet, so it stays cheap enough for load balancer checks.
"""

from typing import Dict

from fastapi import APIRouter, Depends

from sheet_gateway_api.app.core.sheets import SheetStore, get_store

router = APIRouter()


@router.get("/health", response_model=Dict[str, str])
async def health(store: SheetStore = Depends(get_store)) -> Dict[str, str]:
    return {"status": "ok", "backend": store.backend_name}
