"""Immutable result of decoding one calendar invitation."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, fields
from typing import Mapping, Optional

from .helper import indent_str, minutes_to_offset, to_vname
from .helper.constants import ORGANIZER_ROLE
from .helper.imports_ import MappingProxyType


def details(obj) -> dict:
    """
    Map field name -> value for every field of obj that is set.
    """
    return {f.name: getattr(obj, f.name) for f in fields(obj) if getattr(obj, f.name) not in (None, "", ())}


def print_details(obj, level=0, tabwidth=3, skip=()):
    pre = indent_str(level=level, tabwidth=tabwidth)
    for name, value in details(obj).items():
        if name not in skip:
            print(pre, f"{name}:", value)


@dataclass(frozen=True)
class Person:
    """
    A participant or the organizer of an event.

    Every value is kept the way the invitation spells it (e.g. rsvp is "TRUE").
    """

    email: str
    name: Optional[str] = None
    type: Optional[str] = None
    role: Optional[str] = None
    participation_status: Optional[str] = None
    rsvp: Optional[str] = None
    guest_count: Optional[str] = None

    @property
    def is_organizer(self) -> bool:
        return self.role == ORGANIZER_ROLE


@dataclass(frozen=True)
class Period:
    """
    The STANDARD or DAYLIGHT half of a timezone.

    @ivar start:
        Local datetime the period's rule was first in effect; only its time of
        day matters for the transition.
    @ivar offset_from / offset_to:
        Signed minutes east of UTC.
    @ivar rule:
        The recurrence descriptor, e.g. FREQ=YEARLY;INTERVAL=1;BYDAY=2SU;BYMONTH=3
    """

    name: Optional[str] = None
    start: Optional[dt.datetime] = None
    offset_from: Optional[int] = None
    offset_to: Optional[int] = None
    rule: Optional[str] = None


@dataclass(frozen=True)
class Timezone:
    name: Optional[str] = None
    location: Optional[str] = None
    standard: Optional[Period] = None
    daylight: Optional[Period] = None

    def pretty_print(self, level=0, tabwidth=3):
        pre = indent_str(level=level, tabwidth=tabwidth)
        print(pre, "VTIMEZONE")
        print_details(self, level + 1, tabwidth, skip=("standard", "daylight"))
        for name in ("standard", "daylight"):
            period = getattr(self, name)
            if period is not None:
                print(pre, to_vname(name))
                print_details(period, level + 1, tabwidth, skip=("offset_from", "offset_to"))
                for offset in ("offset_from", "offset_to"):
                    if getattr(period, offset) is not None:
                        print(pre + " " * tabwidth, f"{offset}:", minutes_to_offset(getattr(period, offset)))


@dataclass(frozen=True)
class DateTimeDetail:
    """
    Start or end of an event.

    utc is filled in once the whole invitation has been read; it stays None
    when the local value could not be converted.
    """

    local: dt.datetime
    tzid: Optional[str] = None
    utc: Optional[dt.datetime] = None


@dataclass(frozen=True)
class Alarm:
    description: Optional[str] = None
    trigger_related: Optional[str] = None
    trigger_offset: Optional[str] = None
    action: Optional[str] = None

    @property
    def trigger(self) -> Optional[dt.timedelta]:
        """
        The trigger offset relative to trigger_related, always negative.
        """
        if self.trigger_offset is None:
            return None
        from .fields import string_to_duration

        return string_to_duration(f"-PT{self.trigger_offset}")


@dataclass(frozen=True)
class CalendarEntry:
    """
    Everything that was recovered from one VCALENDAR.

    Plain attributes hold the entry details; vendor extension lines nobody
    asked for explicitly end up in extras, keyed by their command name.
    Build instances with L{read_one<vcalentry.base.read_one>} or the
    from_string / from_file constructors.
    """

    # VCALENDAR
    method: Optional[str] = None
    product: Optional[str] = None
    version: Optional[str] = None
    calendar_scale: Optional[str] = None

    # VEVENT
    uid: Optional[str] = None
    summary: Optional[str] = None
    summary_language: Optional[str] = None
    description: Optional[str] = None
    description_language: Optional[str] = None
    location: Optional[str] = None
    location_language: Optional[str] = None
    categories: Optional[str] = None
    class_: Optional[str] = None
    priority: Optional[str] = None
    recurrence_id: Optional[str] = None
    sequence: Optional[str] = None
    status: Optional[str] = None
    transparency: Optional[str] = None
    created: Optional[dt.datetime] = None
    created_utc: Optional[dt.datetime] = None
    last_modified: Optional[dt.datetime] = None
    last_modified_utc: Optional[dt.datetime] = None
    sent: Optional[dt.datetime] = None
    sent_utc: Optional[dt.datetime] = None

    # vendor extensions
    x_alt_description: Optional[str] = None
    x_all_day_event: Optional[str] = None
    x_appointment_sequence: Optional[str] = None
    x_busy_status: Optional[str] = None
    x_disallow_counterpropose: Optional[str] = None
    x_do_not_forward_meeting: Optional[str] = None
    x_google_conference: Optional[str] = None
    x_importance: Optional[str] = None
    x_inst_type: Optional[str] = None
    x_intended_status: Optional[str] = None
    x_is_response_requested: Optional[str] = None
    x_latitude: Optional[str] = None
    x_location_display_name: Optional[str] = None
    x_locations: Optional[str] = None
    x_location_uri: Optional[str] = None
    x_location_source: Optional[str] = None
    x_longitude: Optional[str] = None
    x_online_meeting_conference_id: Optional[str] = None
    x_online_meeting_conference_link: Optional[str] = None
    x_online_meeting_external_link: Optional[str] = None
    x_online_meeting_information: Optional[str] = None
    x_online_meeting_toll_number: Optional[str] = None
    x_owner_appointment_id: Optional[str] = None
    x_scheduling_service_update_url: Optional[str] = None
    x_skype_teams_meeting_url: Optional[str] = None
    x_skype_teams_properties: Optional[str] = None
    extras: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    # sub-structures
    participants: tuple = ()
    timezone: Optional[Timezone] = None
    start: Optional[DateTimeDetail] = None
    end: Optional[DateTimeDetail] = None
    alarm: Optional[Alarm] = None

    @classmethod
    def from_string(cls, text, logger=None) -> CalendarEntry:
        from .base import read_one

        return read_one(text, logger=logger)

    @classmethod
    def from_file(cls, filename, logger=None) -> CalendarEntry:
        from .base import read_file

        return read_file(filename, logger=logger)

    @property
    def organizer(self) -> Optional[Person]:
        """
        The first participant whose role is organizer, or None.
        """
        return next((p for p in self.participants if p.is_organizer), None)

    def entry_details(self) -> dict:
        """
        Entry level attributes that are set, without the sub-structures.
        """
        nested = ("extras", "participants", "timezone", "start", "end", "alarm")
        return {k: v for k, v in details(self).items() if k not in nested}

    def __repr__(self):
        return f"<VCALENDAR| {self.uid or 'No UID'}: {self.summary or ''}>"

    def pretty_print(self, level=0, tabwidth=3):
        pre = indent_str(level=level, tabwidth=tabwidth)
        print(pre, "Entry Details")
        for name, value in self.entry_details().items():
            print(pre + " " * tabwidth, f"{to_vname(name)}:", value)
        for name, value in self.extras.items():
            print(pre + " " * tabwidth, f"{name}:", value)

        print(pre, "Participants Details")
        for index, person in enumerate(self.participants):
            print(pre + " " * tabwidth, f"Participant {index}")
            print_details(person, level + 2, tabwidth)

        if self.timezone is not None:
            self.timezone.pretty_print(level, tabwidth)

        for name in ("start", "end", "alarm"):
            value = getattr(self, name)
            if value is not None:
                print(pre, f"{name.title()} Details")
                print_details(value, level + 1, tabwidth)
