from __future__ import annotations

from functools import lru_cache


def to_unicode(value: str | bytes):
    """Converts a string argument to a unicode string.

    If the argument is already a unicode string, it is returned
    unchanged.  Otherwise it must be a byte string and is decoded as utf8.
    """
    return value.decode() if isinstance(value, bytes) else value


@lru_cache(32)
def to_vname(name, upper=True) -> str:
    """
    Turn a Python attribute name into a calendar style name,
    i.e. last_modified -> LAST-MODIFIED.
    """
    if upper:
        name = name.upper()
    return name.strip("_").replace("_", "-")
