"""Decoders turning the parameter string of one content line into a value."""

from __future__ import annotations

import datetime as dt

from .exceptions import FieldFormatError
from .helper import backslash_unescape
from .helper import logger as default_logger
from .helper.constants import DATETIME_FORMAT, SHORT_DATETIME_FORMAT
from .helper.imports_ import re
from .models import Person
from .patterns import patterns

person_re = re.compile(patterns["person"], re.VERBOSE | re.IGNORECASE)
person_param_re = re.compile(patterns["person_param"], re.VERBOSE)
datetime_tzid_re = re.compile(patterns["datetime_tzid"], re.VERBOSE)
datetime_floating_re = re.compile(patterns["datetime_floating"], re.VERBOSE)
text_language_re = re.compile(patterns["text_language"], re.VERBOSE | re.DOTALL)
trigger_re = re.compile(patterns["trigger"], re.VERBOSE)
offset_re = re.compile(patterns["offset"], re.VERBOSE)
duration_re = re.compile(patterns["duration"], re.VERBOSE)

# attribute name in the person details -> Person field
PERSON_PARAMS = {
    "CN": "name",
    "CUTYPE": "type",
    "PARTSTAT": "participation_status",
    "ROLE": "role",
    "RSVP": "rsvp",
    "X-NUM-GUESTS": "guest_count",
}


def string_to_person(s: str, role: str = None, logger=default_logger) -> Person:
    """
    Decode ATTENDEE / ORGANIZER details.

    Outlook sends ``ROLE=REQ-PARTICIPANT;PARTSTAT=NEEDS-ACTION;RSVP=TRUE;CN=Jane
    Doe:mailto:jane.doe@bar.com``, Google adds CUTYPE and X-NUM-GUESTS.
    If role is given it overrides whatever ROLE the details carry.
    """
    match = person_re.match(s)
    if match is None:
        raise FieldFormatError(f"Expected :mailto: in person details, got this: {s!r}", inputs=s)

    details = {"email": match.group("email")}
    params = match.group("params")
    for part in params.split(";") if params else ():
        param = person_param_re.match(part)
        if param is None:
            raise FieldFormatError(f"Invalid part {part!r} encountered in person details: {s!r}", inputs=s)
        key, value = param.group("key", "value")
        if key in PERSON_PARAMS:
            details[PERSON_PARAMS[key]] = value
        else:
            logger.info(f"Unknown parameter name {key!r} encountered in person details: {s!r}")

    if role is not None:
        details["role"] = role
    return Person(**details)


def parse_fixed_width(value: str, formats) -> dt.datetime | None:
    """
    Try each strptime format in turn, None if none of them fits.
    """
    for fmt in formats:
        # strptime happily reads single digit fields, the formats are fixed width
        if len(value) != len(dt.datetime(2000, 1, 1).strftime(fmt)):
            continue
        try:
            return dt.datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def string_to_date_time(s: str) -> tuple:
    """
    Returns (tzid, dt.datetime), tzid is None for floating or UTC values.

    Both ``TZID=Pacific Standard Time:20290303T060000`` and ``20230306T090000Z``
    are accepted; the minute-precision form only without a TZID.
    """
    match = datetime_tzid_re.match(s)
    if match is not None:
        tzid, value = match.group("tzid", "datetime")
        formats = (DATETIME_FORMAT,)
    else:
        match = datetime_floating_re.match(s)
        if match is None:
            raise FieldFormatError(f"Malformed time details: {s!r}", inputs=s)
        tzid, value = None, match.group("datetime")
        formats = (DATETIME_FORMAT, SHORT_DATETIME_FORMAT)

    date_time = parse_fixed_width(value, formats)
    if date_time is None:
        raise FieldFormatError(f"Malformed date/time: {value!r}", inputs=s)
    return tzid, date_time


def string_to_stamp(s: str, allow_short=False) -> tuple:
    """
    Parse a fixed width ``yyyyMMddThhmmss[Z]`` stamp.

    Returns (dt.datetime, is_utc).
    """
    is_utc = s.endswith("Z")
    value = s[:-1] if is_utc else s
    formats = (DATETIME_FORMAT, SHORT_DATETIME_FORMAT) if allow_short else (DATETIME_FORMAT,)
    date_time = parse_fixed_width(value, formats)
    if date_time is None:
        raise FieldFormatError(f"Invalid date/time format: {s!r}", inputs=s)
    return date_time, is_utc


def string_to_local_date_time(s: str) -> dt.datetime:
    """
    Parse the local epoch start of a STANDARD / DAYLIGHT period, no ``Z`` allowed.
    """
    if s.endswith("Z"):
        raise FieldFormatError(f"Invalid timezone start date/time format: {s!r}", inputs=s)
    return string_to_stamp(s)[0]


def string_to_text(s: str) -> tuple:
    """
    Returns (language, text), language is "" when none is given.
    """
    match = text_language_re.match(s)
    if match is not None:
        language, text = match.group("language", "text")
    else:
        language, text = "", s
    return language, backslash_unescape(text)


def string_to_trigger(s: str) -> tuple:
    """
    Returns (related, duration) for ``RELATED=START:-PT15M``.

    Only offsets before the anchor are supported.
    """
    match = trigger_re.match(s)
    if match is None:
        raise FieldFormatError(f"Invalid alarm details format: {s!r}", inputs=s)
    related, duration = match.group("related", "duration")
    try:
        string_to_duration(f"-PT{duration}")
    except FieldFormatError:
        raise FieldFormatError(f"Invalid alarm offset {duration!r}: {s!r}", inputs=s) from None
    return related, duration


def string_to_offset(s: str) -> int:
    """
    Convert ``-0800`` to signed minutes (-480).
    """
    match = offset_re.match(s)
    if match is None:
        raise FieldFormatError(f"Invalid timezone offset format: {s!r}", inputs=s)
    sign = -1 if match.group("sign") == "-" else 1
    return sign * (int(match.group("hours")) * 60 + int(match.group("minutes")))


def string_to_duration(s: str) -> dt.timedelta:
    """
    Convert ``PT15M`` style durations, a leading - makes them negative.
    """
    s = s.strip()
    match = duration_re.match(s)
    params = {} if match is None else {k: int(v) for k, v in match.groupdict().items() if k != "sign" and v}
    if not params or s.endswith("T"):
        raise FieldFormatError(f"Invalid duration string : {s}", inputs=s)
    sign = -1 if match.group("sign") == "-" else 1
    return sign * dt.timedelta(**params)
