"""Identifier generation for primary keys."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_id() -> str:
    """Return a new collision-resistant CUID2 string for a primary key."""
    value = _next_cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid generator, got {type(value).__name__}")
    return value
