"""
vcalentry: decoder for calendar invitations as sent by Outlook and Google.

Usage
-----
    >>> import vcalentry
    >>> entry = vcalentry.read_one(text)
    >>> entry.summary, entry.start.utc, entry.organizer.email

All timestamps are also available in UTC, worked out from the daylight saving
rules the invitation carries.
"""

from .base import ParseState, read_file, read_one, split_content_line, unfold_lines
from .exceptions import (
    CalEntryError,
    FieldFormatError,
    RecurrenceUnsupportedError,
    StructuralError,
    UnknownTimezoneError,
)
from .models import Alarm, CalendarEntry, DateTimeDetail, Period, Person, Timezone
from .timezone import convert_to_utc, get_transition

VERSION = "0.1.0"
