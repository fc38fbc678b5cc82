"""Reading a calendar invitation into a L{CalendarEntry<models.CalendarEntry>}."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .blocks import VCalendarBlock
from .exceptions import CalEntryError, StructuralError
from .helper import Character, get_buffer, to_unicode
from .helper import logger as default_logger
from .helper.imports_ import MappingProxyType, re
from .models import Alarm, CalendarEntry, DateTimeDetail, Period, Timezone
from .patterns import patterns
from .timezone import convert_date_times_to_utc

line_colon_re = re.compile(patterns["line_colon"], re.VERBOSE)
line_semicolon_re = re.compile(patterns["line_semicolon"], re.VERBOSE)


# --------------------------------- Lines --------------------------------------
def unfold_lines(text: str) -> list:
    """
    Join folded lines back into logical lines.

    A physical line starting with a single space continues the previous
    logical line; only that one space is dropped.
    """
    # blank lines around the payload only, a leading space is significant
    text = text.strip(Character.CRLF)
    if not text:
        return []

    logical_lines = []
    for n, line in enumerate(text.split(Character.LF), 1):
        line = line.replace(Character.CR, "")
        if line.startswith(Character.SPACE):
            if not logical_lines:
                raise StructuralError("Continuation line without a preceding line", n)
            logical_lines[-1] += line[1:]
        else:
            logical_lines.append(line)
    return logical_lines


def split_content_line(line: str) -> tuple | None:
    """
    Split a logical line into (command, parameters).

    The colon separator is tried first. Outlook writes ATTENDEE, ORGANIZER and
    TRIGGER with a semicolon after the command, so that is the fallback.
    Returns None for a line that fits neither form.
    """
    match = line_colon_re.match(line) or line_semicolon_re.match(line)
    if match is None:
        return None
    return match.group("name", "value")


# ------------------------------ Parse state -----------------------------------
@dataclass
class ParseState:
    """
    Everything one parse accumulates before the entry is frozen.

    Blocks receive the state together with the line index they start at and
    return the index of the END line they consumed.
    """

    lines: list
    logger: logging.Logger = default_logger
    entry: dict = field(default_factory=dict)
    extras: dict = field(default_factory=dict)
    participants: list = field(default_factory=list)
    timezone: dict = field(default_factory=dict)
    periods: dict = field(default_factory=dict)
    date_times: dict = field(default_factory=dict)
    alarm: dict | None = None
    timezone_count: int = 0

    def content_line(self, index: int) -> tuple | None:
        return split_content_line(self.lines[index])

    def build_timezone(self) -> Timezone | None:
        if not self.timezone_count:
            return None
        periods = {name.lower(): Period(**details) for name, details in self.periods.items()}
        return Timezone(**self.timezone, **periods)

    def build(self) -> CalendarEntry:
        date_times = {name: DateTimeDetail(local=local, tzid=tzid) for name, (tzid, local) in self.date_times.items()}
        return CalendarEntry(
            **self.entry,
            **date_times,
            extras=MappingProxyType(dict(self.extras)),
            participants=tuple(self.participants),
            timezone=self.build_timezone(),
            alarm=None if self.alarm is None else Alarm(**self.alarm),
        )


# -------------------------------- Factory -------------------------------------
def read_one(stream_or_string, logger: logging.Logger = None) -> CalendarEntry:
    """
    Decode the invitation held in stream_or_string.

    Accepts a str, the utf-8 bytes of a mail attachment or a text stream.
    Diagnostics go to logger, the package logger by default.
    """
    logger = logger or default_logger
    text = get_buffer(to_unicode(stream_or_string)).read()
    try:
        state = ParseState(unfold_lines(text), logger)
        if not state.lines:
            raise StructuralError("Empty calendar payload")
        VCalendarBlock.parse(state, 0)
    except CalEntryError as e:
        logger.error(f"Cannot decode calendar: {e}")
        raise

    entry = convert_date_times_to_utc(state.build(), logger)
    logger.debug(f"Decoded {entry!r} with {len(entry.participants)} participant(s)")
    return entry


def read_file(filename, logger: logging.Logger = None) -> CalendarEntry:
    with open(filename, encoding="utf-8") as fp:
        return read_one(fp, logger=logger)
