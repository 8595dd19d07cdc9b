"""
Top‑level package for the Pride Directory API.

This file makes ``pride_directory_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``pride_directory_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
