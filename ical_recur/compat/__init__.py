"""Compatibility layer for recurrence rule serialization.

This module provides switches that change how recurrence rules are encoded.
"""

from .until_compat import enable_until_serialization, is_until_serialization_enabled

__all__ = [
    "enable_until_serialization",
    "is_until_serialization_enabled",
]
