"""Error types raised by the journal engine."""

from typing import Iterable


class JournalError(Exception):
    """Base class for all journal errors."""


class ValidationError(JournalError, ValueError):
    """A required field is missing or not a valid number.

    Attributes:
        fields: Names of the offending fields.
    """

    def __init__(self, fields: Iterable[str], message: str | None = None):
        self.fields = tuple(fields)
        if message is None:
            message = "Missing or invalid field(s): " + ", ".join(self.fields)
        super().__init__(message)


class DegenerateInputError(JournalError, ValueError):
    """The inputs make the computation mathematically undefined."""


class RejectedError(JournalError):
    """The operation is not allowed in the record's current state."""
