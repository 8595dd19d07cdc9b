"""
Application package initializer.

The directory is organised by domain.  Businesses, categories, events,
search and users each have a schema module, a service module and a
router defined in ``api/v1/endpoints``.  The static category reference
list lives in ``data`` because it is configuration, not store content.
"""

from .main import app  # noqa: F401
