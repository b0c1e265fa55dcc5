"""
Application package initializer.

The gateway is organised into a handful of small layers: ``core``
holds configuration, logging, the error taxonomy and the storage
backends for the external spreadsheet; ``schemas`` holds the Pydantic
request and response models; ``services`` holds the query engine, the
business rules and the action dispatcher; ``api`` exposes them over
HTTP.  Versioning is handled by grouping routers under the
``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
