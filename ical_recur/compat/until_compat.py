"""Compatibility layer for serializing the UNTIL part of a recurrence rule.

Recurrence rules are serialized without UNTIL by default, since the value
type of UNTIL (DATE or DATE-TIME) must agree with the DTSTART of the owning
component, which is not known to the rule itself.
"""

from collections.abc import Generator
import contextlib
import contextvars


_until_serialization = contextvars.ContextVar("until_serialization", default=False)


@contextlib.contextmanager
def enable_until_serialization() -> Generator[None]:
    """Context manager to emit UNTIL when serializing recurrence rules."""
    token = _until_serialization.set(True)
    try:
        yield
    finally:
        _until_serialization.reset(token)


def is_until_serialization_enabled() -> bool:
    """Check if UNTIL serialization is enabled."""
    return _until_serialization.get()
