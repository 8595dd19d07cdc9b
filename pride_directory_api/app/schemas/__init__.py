"""
Pydantic schema definitions for API payloads.

Each domain (businesses, categories, events, users) defines its own
models for request and response bodies.  Schemas are separated from
the stored documents so the API shape does not follow the store's
field names.
"""
