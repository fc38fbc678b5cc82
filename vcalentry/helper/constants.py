class Character:
    """Space and Line-break characters"""

    CR = "\r"
    LF = "\n"
    CRLF = CR + LF
    SPACE = " "


class Block:
    """Tags of the BEGIN/END delimited regions"""

    VCALENDAR = "VCALENDAR"
    VTIMEZONE = "VTIMEZONE"
    STANDARD = "STANDARD"
    DAYLIGHT = "DAYLIGHT"
    VEVENT = "VEVENT"
    VALARM = "VALARM"


ORGANIZER_ROLE = "organizer"
DATETIME_FORMAT = "%Y%m%dT%H%M%S"
SHORT_DATETIME_FORMAT = "%Y%m%dT%H%M"
