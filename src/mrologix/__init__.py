"""Core package for the MRO Logix backend.

This top-level module exposes the database :func:`get_session` helper for
scripts that need direct access to the record store.
"""

from .db import get_session

__all__ = ["get_session"]
