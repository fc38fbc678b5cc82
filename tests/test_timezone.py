import datetime as dt

import pytest
from dateutil.tz import tzutc

from vcalentry import Period, RecurrenceUnsupportedError, Timezone, UnknownTimezoneError, convert_to_utc, get_transition
from vcalentry.timezone import parse_rule

PACIFIC = Timezone(
    name="Pacific Standard Time",
    standard=Period(
        start=dt.datetime(1601, 1, 1, 2, 0),
        offset_from=-420,
        offset_to=-480,
        rule="FREQ=YEARLY;INTERVAL=1;BYDAY=1SU;BYMONTH=11",
    ),
    daylight=Period(
        start=dt.datetime(1601, 1, 1, 2, 0),
        offset_from=-480,
        offset_to=-420,
        rule="FREQ=YEARLY;INTERVAL=1;BYDAY=2SU;BYMONTH=3",
    ),
)


def test_parse_rule():
    assert parse_rule("FREQ=YEARLY;INTERVAL=1;BYDAY=-1SU;BYMONTH=10") == {"month": 10, "nth": -1}
    assert parse_rule("FREQ=YEARLY;BYMONTH=3;BYDAY=2SU") == {"month": 3, "nth": 2}


@pytest.mark.parametrize(
    "rule, year, expected",
    [
        # November 1 2026 is a Sunday
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=1SU;BYMONTH=11", 2026, dt.date(2026, 11, 1)),
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=1SU;BYMONTH=11", 2029, dt.date(2029, 11, 4)),
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=2SU;BYMONTH=3", 2029, dt.date(2029, 3, 11)),
        ("FREQ=YEARLY;BYMONTH=3;BYDAY=2SU", 2023, dt.date(2023, 3, 12)),
        # March 31 2023 is a Friday
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=-1SU;BYMONTH=3", 2023, dt.date(2023, 3, 26)),
        # March 31 2024 is a Sunday
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=-1SU;BYMONTH=3", 2024, dt.date(2024, 3, 31)),
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=-1SU;BYMONTH=10", 2023, dt.date(2023, 10, 29)),
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=-2SU;BYMONTH=10", 2023, dt.date(2023, 10, 22)),
        ("FREQ=YEARLY;INTERVAL=1;BYDAY=-1SU;BYMONTH=2", 2024, dt.date(2024, 2, 25)),
    ],
)
def test_get_transition_date(rule, year, expected):
    assert get_transition(rule, year) == dt.datetime.combine(expected, dt.time())


def test_get_transition_time_of_day():
    rule = "FREQ=YEARLY;INTERVAL=1;BYDAY=2SU;BYMONTH=3"
    assert get_transition(rule, 2029, dt.datetime(1601, 1, 1, 2, 0)) == dt.datetime(2029, 3, 11, 2, 0)


@pytest.mark.parametrize(
    "rule",
    [
        "FREQ=MONTHLY;BYDAY=2SU;BYMONTH=3",
        "FREQ=YEARLY;INTERVAL=2;BYDAY=2SU;BYMONTH=3",
        "FREQ=YEARLY;BYDAY=2SA;BYMONTH=3",
        "FREQ=YEARLY;BYDAY=SU;BYMONTH=3",
        "FREQ=YEARLY;BYDAY=2SU",
        "FREQ=YEARLY;BYDAY=2SU;BYMONTH=13",
        "FREQ=YEARLY;BYDAY=0SU;BYMONTH=3",
        "FREQ=YEARLY;BYDAY;BYMONTH=3",
        "",
    ],
)
def test_get_transition_unsupported(rule):
    with pytest.raises(RecurrenceUnsupportedError):
        get_transition(rule, 2029)


@pytest.mark.parametrize(
    "local, expected",
    [
        # standard time before the second Sunday of March
        (dt.datetime(2029, 3, 3, 6, 0), dt.datetime(2029, 3, 3, 14, 0)),
        (dt.datetime(2029, 3, 11, 1, 59), dt.datetime(2029, 3, 11, 9, 59)),
        # daylight time from the transition on
        (dt.datetime(2029, 3, 11, 2, 0), dt.datetime(2029, 3, 11, 9, 0)),
        (dt.datetime(2029, 7, 4, 12, 0), dt.datetime(2029, 7, 4, 19, 0)),
        (dt.datetime(2029, 11, 4, 1, 59), dt.datetime(2029, 11, 4, 8, 59)),
        # standard time again
        (dt.datetime(2029, 11, 4, 2, 0), dt.datetime(2029, 11, 4, 10, 0)),
        (dt.datetime(2029, 12, 24, 18, 0), dt.datetime(2029, 12, 25, 2, 0)),
    ],
)
def test_convert_to_utc(local, expected):
    assert convert_to_utc(local, "Pacific Standard Time", PACIFIC) == expected.replace(tzinfo=tzutc())


def test_convert_to_utc_identity():
    """Without a tzid or without a daylight rule the time is taken as UTC"""
    local = dt.datetime(2029, 3, 3, 6, 0)
    expected = local.replace(tzinfo=tzutc())
    assert convert_to_utc(local, None, PACIFIC) == expected
    assert convert_to_utc(local, "", PACIFIC) == expected
    assert convert_to_utc(local, "Pacific Standard Time", None) == expected
    assert convert_to_utc(local, "Somewhere Else", Timezone(name="Pacific Standard Time")) == expected


def test_convert_to_utc_unknown_timezone():
    with pytest.raises(UnknownTimezoneError):
        convert_to_utc(dt.datetime(2029, 3, 3, 6, 0), "Eastern Standard Time", PACIFIC)


def test_convert_to_utc_missing_standard_rule():
    timezone = Timezone(name=PACIFIC.name, daylight=PACIFIC.daylight)
    with pytest.raises(RecurrenceUnsupportedError):
        convert_to_utc(dt.datetime(2029, 3, 3, 6, 0), PACIFIC.name, timezone)
