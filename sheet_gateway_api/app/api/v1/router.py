"""
Top‑level router for version 1 of the API.

This router aggregates the endpoint routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import data, health

router = APIRouter()

# Both routers define their paths internally ("/data", "/health").  Do
# not specify a prefix here or the routes would appear under
# ``/data/data``.
router.include_router(data.router, tags=["data"])
router.include_router(health.router, tags=["health"])
