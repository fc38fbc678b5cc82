"""Parsers for the BEGIN/END delimited blocks of an invitation."""

from __future__ import annotations

from .exceptions import CalEntryError, FieldFormatError, StructuralError
from .fields import (
    string_to_date_time,
    string_to_local_date_time,
    string_to_offset,
    string_to_person,
    string_to_stamp,
    string_to_text,
    string_to_trigger,
)
from .helper import Block as Tag
from .helper.constants import ORGANIZER_ROLE
from .timezone import utc


# ------------------------ Abstract class for blocks ----------------------------
class Block:
    """
    Parsing rules for one kind of block.

    Block subclasses are not meant to be instantiated, all methods are
    classmethods receiving the L{ParseState<base.ParseState>} of the running
    parse and the index of the line to start at.

    @cvar name:
        The uppercase tag of the block, as in BEGIN:VEVENT.
    @cvar children:
        Tags of the blocks that may be nested in this one; they are looked up
        with L{get_block}.
    @cvar verbatim:
        A dictionary mapping commands whose parameters are stored unchanged to
        the name they are stored under.
    @cvar handlers:
        A dictionary mapping commands to the name of the classmethod decoding
        them, called as handler(state, parameters).
    @cvar lenient:
        Commands whose decoding errors are logged and the line skipped, instead
        of failing the parse.
    @cvar keep_extras:
        If True, unknown X- commands are kept in the entry's extras.
    """

    name = ""
    children = ()
    verbatim = {}
    handlers = {}
    lenient = ()
    keep_extras = False

    def __init__(self):
        raise CalEntryError("Block subclasses are not meant to be instantiated")

    @classmethod
    def details(cls, state) -> dict:
        """The dictionary verbatim values of this block are stored in."""
        return state.entry

    @classmethod
    def begin(cls, state, index):
        """Hook run once BEGIN has been verified."""

    @classmethod
    def parse(cls, state, index: int) -> int:
        """
        Parse the block whose BEGIN line is at index.

        Returns the index of the matching END line, or len(state.lines) if the
        input ran out first.
        """
        if state.content_line(index) != ("BEGIN", cls.name):
            raise StructuralError(f"Expected BEGIN:{cls.name}, got {state.lines[index]!r}", index + 1)
        cls.begin(state, index)
        state.logger.debug(f"Parsing {cls.name} starting at line {index + 1}")

        index += 1
        while index < len(state.lines):
            line = state.lines[index]
            if not line:
                index += 1
                continue

            split = state.content_line(index)
            if split is None:
                state.logger.info(f"Line {index + 1} cannot be split into command and parameters: {line!r}")
            elif split[0] == "BEGIN":
                index = cls.parse_child(state, index, split[1])
            elif split[0] == "END":
                if split[1] != cls.name:
                    raise StructuralError(f"END:{split[1]} found inside {cls.name}", index + 1)
                return index
            else:
                cls.dispatch(state, index, *split)
            index += 1

        return cls.exhausted(state)

    @classmethod
    def exhausted(cls, state) -> int:
        state.logger.warning(f"Input ended before END:{cls.name}")
        return len(state.lines)

    @classmethod
    def parse_child(cls, state, index, tag) -> int:
        if tag in cls.children:
            return get_block(tag).parse(state, index)
        state.logger.info(f"Skipping unsupported block {tag!r} in {cls.name} at line {index + 1}")
        return skip_block(state, index, tag)

    @classmethod
    def dispatch(cls, state, index, command, parameters):
        if command in cls.verbatim:
            cls.details(state)[cls.verbatim[command]] = parameters
        elif command in cls.handlers:
            try:
                getattr(cls, cls.handlers[command])(state, parameters)
            except FieldFormatError as e:
                if e.line_number is None:
                    e.line_number = index + 1
                if command not in cls.lenient:
                    raise
                state.logger.error(f"Skipped {command} line: {e}")
        elif cls.keep_extras and command.startswith("X-"):
            state.extras[command] = parameters
        else:
            state.logger.info(f"Content line has unknown command {command!r} in {cls.name}: {parameters!r}")


def skip_block(state, index: int, tag: str) -> int:
    """
    Return the index of the END line matching the BEGIN:tag at index.
    """
    depth = 0
    for n in range(index, len(state.lines)):
        split = state.content_line(n)
        if split == ("BEGIN", tag):
            depth += 1
        elif split == ("END", tag):
            depth -= 1
            if not depth:
                return n
    state.logger.warning(f"Input ended before END:{tag}")
    return len(state.lines)


# ------------------------------- Blocks ---------------------------------------
class VCalendarBlock(Block):
    name = Tag.VCALENDAR
    children = (Tag.VTIMEZONE, Tag.VEVENT)
    verbatim = {"METHOD": "method", "PRODID": "product", "VERSION": "version", "CALSCALE": "calendar_scale"}
    keep_extras = True

    @classmethod
    def exhausted(cls, state) -> int:
        raise StructuralError(f"Input ended before END:{cls.name}", len(state.lines))


class VTimezoneBlock(Block):
    name = Tag.VTIMEZONE
    children = (Tag.STANDARD, Tag.DAYLIGHT)
    verbatim = {"TZID": "name", "X-LIC-LOCATION": "location"}

    @classmethod
    def details(cls, state) -> dict:
        return state.timezone

    @classmethod
    def begin(cls, state, index):
        state.timezone_count += 1
        if state.timezone_count > 1:
            raise StructuralError("More than one VTIMEZONE is not supported", index + 1)


class PeriodBlock(Block):
    """STANDARD and DAYLIGHT only differ in where their details go."""

    verbatim = {"TZNAME": "name", "RRULE": "rule"}
    handlers = {"DTSTART": "decode_start", "TZOFFSETFROM": "decode_offset_from", "TZOFFSETTO": "decode_offset_to"}

    @classmethod
    def details(cls, state) -> dict:
        return state.periods.setdefault(cls.name, {})

    @classmethod
    def decode_start(cls, state, parameters):
        cls.details(state)["start"] = string_to_local_date_time(parameters)

    @classmethod
    def decode_offset_from(cls, state, parameters):
        cls.details(state)["offset_from"] = string_to_offset(parameters)

    @classmethod
    def decode_offset_to(cls, state, parameters):
        cls.details(state)["offset_to"] = string_to_offset(parameters)


class StandardBlock(PeriodBlock):
    name = Tag.STANDARD


class DaylightBlock(PeriodBlock):
    name = Tag.DAYLIGHT


class VEventBlock(Block):
    name = Tag.VEVENT
    children = (Tag.VALARM,)
    verbatim = {
        "CATEGORIES": "categories",
        "CLASS": "class_",
        "PRIORITY": "priority",
        "RECURRENCE-ID": "recurrence_id",
        "SEQUENCE": "sequence",
        "STATUS": "status",
        "TRANSP": "transparency",
        "UID": "uid",
        "X-ALT-DESC": "x_alt_description",
        "X-GOOGLE-CONFERENCE": "x_google_conference",
        "X-MICROSOFT-CDO-ALLDAYEVENT": "x_all_day_event",
        "X-MICROSOFT-CDO-APPT-SEQUENCE": "x_appointment_sequence",
        "X-MICROSOFT-CDO-BUSYSTATUS": "x_busy_status",
        "X-MICROSOFT-CDO-IMPORTANCE": "x_importance",
        "X-MICROSOFT-CDO-INSTTYPE": "x_inst_type",
        "X-MICROSOFT-CDO-INTENDEDSTATUS": "x_intended_status",
        "X-MICROSOFT-CDO-OWNERAPPTID": "x_owner_appointment_id",
        "X-MICROSOFT-DISALLOW-COUNTER": "x_disallow_counterpropose",
        "X-MICROSOFT-DONOTFORWARDMEETING": "x_do_not_forward_meeting",
        "X-MICROSOFT-ISRESPONSEREQUESTED": "x_is_response_requested",
        "X-MICROSOFT-LATITUDE": "x_latitude",
        "X-MICROSOFT-LOCATIONDISPLAYNAME": "x_location_display_name",
        "X-MICROSOFT-LOCATIONS": "x_locations",
        "X-MICROSOFT-LOCATIONSOURCE": "x_location_source",
        "X-MICROSOFT-LOCATIONURI": "x_location_uri",
        "X-MICROSOFT-LONGITUDE": "x_longitude",
        "X-MICROSOFT-ONLINEMEETINGCONFERENCEID": "x_online_meeting_conference_id",
        "X-MICROSOFT-ONLINEMEETINGCONFLINK": "x_online_meeting_conference_link",
        "X-MICROSOFT-ONLINEMEETINGEXTERNALLINK": "x_online_meeting_external_link",
        "X-MICROSOFT-ONLINEMEETINGINFORMATION": "x_online_meeting_information",
        "X-MICROSOFT-ONLINEMEETINGTOLLNUMBER": "x_online_meeting_toll_number",
        "X-MICROSOFT-SCHEDULINGSERVICEUPDATEURL": "x_scheduling_service_update_url",
        "X-MICROSOFT-SKYPETEAMSMEETINGURL": "x_skype_teams_meeting_url",
        "X-MICROSOFT-SKYPETEAMSPROPERTIES": "x_skype_teams_properties",
    }
    handlers = {
        "ATTENDEE": "decode_attendee",
        "ORGANIZER": "decode_organizer",
        "CREATED": "decode_created",
        "LAST-MODIFIED": "decode_last_modified",
        "DTSTAMP": "decode_sent",
        "DTSTART": "decode_start",
        "DTEND": "decode_end",
        "DESCRIPTION": "decode_description",
        "SUMMARY": "decode_summary",
        "LOCATION": "decode_location",
    }
    lenient = ("ATTENDEE", "ORGANIZER")
    keep_extras = True

    @classmethod
    def decode_attendee(cls, state, parameters):
        state.participants.append(string_to_person(parameters, logger=state.logger))

    @classmethod
    def decode_organizer(cls, state, parameters):
        state.participants.append(string_to_person(parameters, role=ORGANIZER_ROLE, logger=state.logger))

    @classmethod
    def store_stamp(cls, state, key, parameters, allow_short=False):
        stamp, is_utc = string_to_stamp(parameters, allow_short)
        # a Z stamp is kept aware, the others are local to the invitation's timezone
        state.entry[key] = stamp.replace(tzinfo=utc) if is_utc else stamp

    @classmethod
    def decode_created(cls, state, parameters):
        cls.store_stamp(state, "created", parameters)

    @classmethod
    def decode_last_modified(cls, state, parameters):
        cls.store_stamp(state, "last_modified", parameters)

    @classmethod
    def decode_sent(cls, state, parameters):
        cls.store_stamp(state, "sent", parameters, allow_short=True)

    @classmethod
    def decode_start(cls, state, parameters):
        state.date_times["start"] = string_to_date_time(parameters)

    @classmethod
    def decode_end(cls, state, parameters):
        state.date_times["end"] = string_to_date_time(parameters)

    @classmethod
    def store_text(cls, state, key, parameters):
        state.entry[f"{key}_language"], state.entry[key] = string_to_text(parameters)

    @classmethod
    def decode_description(cls, state, parameters):
        cls.store_text(state, "description", parameters)

    @classmethod
    def decode_summary(cls, state, parameters):
        cls.store_text(state, "summary", parameters)

    @classmethod
    def decode_location(cls, state, parameters):
        cls.store_text(state, "location", parameters)


class VAlarmBlock(Block):
    name = Tag.VALARM
    verbatim = {"DESCRIPTION": "description", "ACTION": "action"}
    handlers = {"TRIGGER": "decode_trigger"}
    lenient = ("TRIGGER",)

    @classmethod
    def details(cls, state) -> dict:
        if state.alarm is None:
            state.alarm = {}
        return state.alarm

    @classmethod
    def begin(cls, state, index):
        cls.details(state)

    @classmethod
    def decode_trigger(cls, state, parameters):
        details = cls.details(state)
        details["trigger_related"], details["trigger_offset"] = string_to_trigger(parameters)


# ------------------------------ block registry --------------------------------
__block_registry = {}


def register_block(block, name=None):
    """
    Register the given block class under name, its tag by default.
    """
    __block_registry[(name or block.name).upper()] = block


def get_block(name):
    """
    Return the block class registered for name, or None.
    """
    return __block_registry.get(name.upper())


register_block(VCalendarBlock)
register_block(VTimezoneBlock)
register_block(StandardBlock)
register_block(DaylightBlock)
register_block(VEventBlock)
register_block(VAlarmBlock)
