"""Exception types raised by the pay and withholding core.

Callers (CLI, settings screens) catch ShiftPayError to report input problems;
ScheduleValidationError is only raised while loading the bundled tax tables
and is meant to stop the process.
"""


class ShiftPayError(Exception):
    """Base class for shift-pay errors."""
    pass


class InvalidIntervalError(ShiftPayError, ValueError):
    """Raised when a shift does not end strictly after it starts."""
    pass


class InvalidDateError(ShiftPayError, ValueError):
    """Raised when a date, datetime or time string cannot be parsed."""
    pass


class UnsupportedFrequencyError(ShiftPayError, ValueError):
    """Raised when a pay frequency is missing from a schedule table."""
    pass


class ScheduleValidationError(ShiftPayError):
    """Raised when a bundled regulatory schedule fails schema validation."""
    pass
