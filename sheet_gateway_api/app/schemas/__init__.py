"""
Pydantic schema definitions for API payloads.

Request envelopes, per-action payloads and the result shapes returned
to clients live here.  Row data itself is schema-less and travels as
plain string mappings.
"""
