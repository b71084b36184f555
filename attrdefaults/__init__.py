"""
Persist model attribute values as per-user defaults in session state.

The public entry point is :class:`attrdefaults.services.defaults_persister.DefaultsPersister`.
"""

from attrdefaults.services.defaults_persister import (
    DefaultsError,
    DefaultsPersister,
    InvalidAttributeError,
)

__all__ = ["DefaultsError", "DefaultsPersister", "InvalidAttributeError"]
