"""
Version 1 of the API.

This subpackage bundles the data gateway endpoint and the health check.
Breaking changes to the request envelope should be introduced in a new
version subpackage to preserve compatibility with existing clients.
"""
