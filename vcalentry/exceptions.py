class CalEntryError(Exception):
    def __init__(self, msg, line_number=None):
        super().__init__(msg)
        self.msg = msg
        self.line_number = line_number

    def __str__(self):
        if self.line_number is None:
            return repr(self.msg)
        return f"At line {self.line_number!s}: {self.msg!s}"


class StructuralError(CalEntryError):
    """Broken BEGIN/END nesting, truncated input or a dangling continuation."""


class FieldFormatError(CalEntryError):
    def __init__(self, msg, line_number=None, *, inputs=None):
        super().__init__(msg, line_number)
        self.inputs = inputs


class UnknownTimezoneError(CalEntryError):
    pass


class RecurrenceUnsupportedError(CalEntryError):
    pass
