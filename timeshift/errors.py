from dataclasses import dataclass
from typing import Any, Callable, Optional


class DateTimeError(ValueError):
    """Base class for every failure raised by timeshift"""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class NoMatchingFormat(DateTimeError):
    """The string matches no catalog pattern after the round-trip check"""

    def __init__(self, value: str):
        super().__init__(f"Invalid date/time format: {value}", value)


class InvalidDateTimeFormat(DateTimeError):
    """The string does not conform to a specific pattern"""


class UnknownUnit(DateTimeError):
    def __init__(self, unit: str):
        super().__init__(f"Unknown unit: {unit}", unit)


class InvalidTimestampType(DateTimeError, TypeError):
    def __init__(self, value: Any):
        super().__init__(f"Invalid timestamp format: {type(value).__name__}", value)


@dataclass(frozen=True)
class Result:
    """Either a value or the DateTimeError that prevented it"""
    value: Any = None
    error: Optional[DateTimeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: DateTimeError) -> 'Result':
        return cls(error=error)


def attempt(func: Callable, *args, **kwargs) -> Result:
    """Call func and capture timeshift failures as a Result.

    Anything that is not a DateTimeError is a bug and propagates.
    """
    try:
        return Result.success(func(*args, **kwargs))
    except DateTimeError as e:
        return Result.failure(e)
