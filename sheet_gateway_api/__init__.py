"""
Top‑level package for the Sheet Gateway API.

This file makes ``sheet_gateway_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``sheet_gateway_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
