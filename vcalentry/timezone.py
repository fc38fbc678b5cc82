"""
Interpretation of the one VTIMEZONE an invitation carries.

Only the yearly, Sunday anchored rules Outlook and Google emit are supported,
for instance::

    FREQ=YEARLY;BYMONTH=3;BYDAY=2SU
    FREQ=YEARLY;INTERVAL=1;BYDAY=-1SU;BYMONTH=10
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import replace

from dateutil import tz
from dateutil.relativedelta import SU, relativedelta

from .exceptions import CalEntryError, RecurrenceUnsupportedError, UnknownTimezoneError
from .helper import logger as default_logger
from .helper.imports_ import re
from .models import CalendarEntry, Timezone
from .patterns import patterns

byday_re = re.compile(patterns["byday"], re.VERBOSE)

utc = tz.tzutc()

# fields converted with the invitation's timezone name
STAMP_FIELDS = ("created", "last_modified", "sent")


def parse_rule(rule: str) -> dict:
    """
    Split a recurrence descriptor into a KEY -> value dict and check that it is
    one we can evaluate.
    """
    parts = [part.split("=") for part in rule.split(";")]
    if any(len(part) != 2 for part in parts):
        raise RecurrenceUnsupportedError(f"Parameter cannot be split in {rule!r}")
    params = dict(parts)

    if not params.keys() >= {"FREQ", "BYMONTH", "BYDAY"}:
        raise RecurrenceUnsupportedError(f"Need FREQ, BYMONTH and BYDAY parameters: {rule!r}")
    if params["FREQ"] != "YEARLY":
        raise RecurrenceUnsupportedError(f"Repeat frequency {params['FREQ']!r} is not supported")
    if params.get("INTERVAL", "1") != "1":
        raise RecurrenceUnsupportedError(f"Interval {params['INTERVAL']!r} is not supported")

    match = byday_re.match(params["BYDAY"])
    if match is None:
        raise RecurrenceUnsupportedError(f"Invalid BYDAY parameter: {rule!r}")
    if match.group("weekday") != "SU":
        raise RecurrenceUnsupportedError(f"Start weekday {match.group('weekday')!r} is not supported")
    nth = int(match.group("nth"))
    if nth == 0:
        raise RecurrenceUnsupportedError(f"Invalid BYDAY parameter: {rule!r}")

    try:
        month = int(params["BYMONTH"])
    except ValueError:
        month = 0
    if not 1 <= month <= 12:
        raise RecurrenceUnsupportedError(f"Invalid BYMONTH parameter: {rule!r}")
    return {"month": month, "nth": nth}


def get_transition(rule: str, year: int, epoch_start: dt.datetime = None) -> dt.datetime:
    """
    Local date and time at which rule switches the clocks in year.

    The time of day is taken from epoch_start, midnight if there is none.
    """
    params = parse_rule(rule)
    first = dt.date(year, params["month"], 1)
    nth = params["nth"]
    if nth > 0:
        day = first + relativedelta(weekday=SU(+1), weeks=nth - 1)
    else:
        day = first + relativedelta(day=31, weekday=SU(-1), weeks=nth + 1)

    time = epoch_start.time() if epoch_start is not None else dt.time()
    return dt.datetime.combine(day, time)


def convert_to_utc(local: dt.datetime, tzid: str | None, timezone: Timezone | None) -> dt.datetime:
    """
    Convert a local time in the zone tzid to an aware UTC datetime.

    Without a tzid, or without a daylight rule to go by, local already is UTC.
    Daylight saving time applies from the daylight transition (inclusive) to
    the standard transition (exclusive).
    """
    daylight = timezone.daylight if timezone is not None else None
    if not tzid or daylight is None or not daylight.rule:
        return local.replace(tzinfo=utc)

    if tzid != timezone.name:
        raise UnknownTimezoneError(f"Unknown timezone {tzid!r}; invite time zone is {timezone.name!r}")

    standard = timezone.standard
    if standard is None or not standard.rule:
        raise RecurrenceUnsupportedError(f"No standard time rule for timezone {tzid!r}")

    dst_start = get_transition(daylight.rule, local.year, daylight.start)
    dst_end = get_transition(standard.rule, local.year, daylight.start)
    period = daylight if dst_start <= local < dst_end else standard
    offset = period.offset_to or 0
    return (local - dt.timedelta(minutes=offset)).replace(tzinfo=utc)


def convert_date_times_to_utc(entry: CalendarEntry, logger: logging.Logger = default_logger) -> CalendarEntry:
    """
    Fill in the UTC counterpart of every local timestamp of entry.

    Stamps that carried a Z are aware already and only change representation.
    A conversion that fails is logged and leaves its UTC value as None.
    """
    timezone = entry.timezone
    tz_name = timezone.name if timezone is not None else None

    def convert(local, tzid, label):
        if local.tzinfo is not None:
            return local.astimezone(utc)
        try:
            return convert_to_utc(local, tzid, timezone)
        except CalEntryError as e:
            logger.error(f"Cannot convert {label} {local.isoformat()} to UTC: {e.msg}")
            return None

    changes = {}
    for name in STAMP_FIELDS:
        local = getattr(entry, name)
        if local is not None:
            changes[f"{name}_utc"] = convert(local, tz_name, name)
    for name in ("start", "end"):
        detail = getattr(entry, name)
        if detail is not None:
            changes[name] = replace(detail, utc=convert(detail.local, detail.tzid, name))
    return replace(entry, **changes)
