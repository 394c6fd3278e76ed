"""ID generators for persisted board entities (tasks, groups, audit rows)."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant CUID2 string.

    Raises:
        TypeError: If the underlying generator does not return a str.
    """
    value = _cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid generator, got {type(value).__name__}")
    return value
