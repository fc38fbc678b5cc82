from __future__ import annotations


def backslash_unescape(s: str) -> str:
    """Undo the two escapes Outlook and Google actually emit in text values."""
    return s.replace("\\n", "\n").replace("\\,", ",")


def indent_str(prefix: str = " ", *, level: int = 0, tabwidth: int = 3) -> str:
    return prefix * level * tabwidth


def minutes_to_offset(minutes: int) -> str:
    """
    Format signed minutes the way TZOFFSETTO is written, e.g. -480 -> -0800.
    """
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{minutes:02d}"
