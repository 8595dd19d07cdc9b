"""
Version 1 of the API.

Breaking changes to response shapes should be introduced in a new
version subpackage (e.g. ``v2``) to keep existing clients working.
"""
