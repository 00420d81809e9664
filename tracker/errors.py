from __future__ import annotations

from typing import Optional

EX_USAGE = 64
EX_SOFTWARE = 70
EX_IOERR = 74
EX_CONFIG = 78


class DaycountError(Exception):
    """Base class for every error raised by daycount."""


class FatalError(DaycountError):
    """Aborts the current run; ``exit_code`` is what the process should return."""

    exit_code = EX_SOFTWARE


class ConfigurationError(FatalError):
    exit_code = EX_CONFIG


class ReadError(FatalError):
    exit_code = EX_IOERR


class WriteError(FatalError):
    exit_code = EX_IOERR


class DateComputationError(FatalError):
    exit_code = EX_SOFTWARE


class RowError(DaycountError):
    """A single record could not be decoded. Callers skip the row and carry on."""

    INVALID_DATE = "invalid_date"
    FIELD_COUNT = "field_count"
    MISSING_DESCRIPTION = "missing_description"

    def __init__(
        self,
        kind: str,
        text: str,
        description: Optional[str] = None,
        line: Optional[int] = None,
    ):
        self.kind = kind
        self.text = text
        self.description = description
        self.line = line
        super().__init__(self._message())

    def _message(self) -> str:
        if self.kind == self.INVALID_DATE:
            message = f"invalid date {self.text!r}"
        elif self.kind == self.FIELD_COUNT:
            message = f"expected 3 fields, got {self.text}"
        else:
            message = "missing description"
        if self.description:
            message += f" (description: {self.description!r})"
        return message
