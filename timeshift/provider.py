"""Calendar provider: the thin layer over datetime and dateutil.

Every call takes an explicit Context instead of relying on a process-wide
timezone, so the functions here can be used from any thread.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Dict

from dateutil import tz
from dateutil.relativedelta import relativedelta

from timeshift.errors import InvalidDateTimeFormat
from timeshift.patterns import (MONTH_NAMES, MONTH_ABBREVIATIONS, WEEKDAY_NAMES,
                                WEEKDAY_ABBREVIATIONS, Pattern)

UNIT_FIELDS = {
    'year': 'years',
    'month': 'months',
    'day': 'days',
    'hour': 'hours',
    'minute': 'minutes',
    'second': 'seconds',
}

_MONTHS_BY_NAME = {name.lower(): number for number, name in enumerate(MONTH_NAMES, 1)}
_MONTHS_BY_ABBREVIATION = {name.lower(): number for number, name in enumerate(MONTH_ABBREVIATIONS, 1)}
_WEEKDAYS_BY_NAME = {name.lower() for name in WEEKDAY_NAMES}
_WEEKDAYS_BY_ABBREVIATION = {name.lower() for name in WEEKDAY_ABBREVIATIONS}


@dataclass(frozen=True)
class Context:
    timezone: str = 'UTC'

    def __post_init__(self):
        if not self.timezone or tz.gettz(self.timezone) is None:
            raise ValueError(f"Unknown timezone: {self.timezone}")

    @property
    def tzinfo(self) -> tzinfo:
        return tz.gettz(self.timezone)


class Ordering(Enum):
    BEFORE = 'before'
    SAME = 'same'
    AFTER = 'after'


def now(context: Context) -> datetime:
    return datetime.now(context.tzinfo).replace(microsecond=0)


def _month(kind: str, text: str, raw: str) -> int:
    table = _MONTHS_BY_NAME if kind == '%B' else _MONTHS_BY_ABBREVIATION
    month = table.get(text.lower())
    if month is None:
        raise InvalidDateTimeFormat(f"Unknown month name '{text}' in {raw}", raw)
    return month


def _check_weekday(kind: str, text: str, raw: str):
    names = _WEEKDAYS_BY_NAME if kind == '%A' else _WEEKDAYS_BY_ABBREVIATION
    if text.lower() not in names:
        raise InvalidDateTimeFormat(f"Unknown weekday name '{text}' in {raw}", raw)


def _collect_fields(pattern: Pattern, raw: str) -> Dict[str, object]:
    match = pattern.regex.fullmatch(raw)
    if not match:
        raise InvalidDateTimeFormat(f"Invalid date/time format: {raw} does not match {pattern}", raw)

    fields = {}
    values = iter(match.groups())
    for kind in pattern.directives:
        text = next(values)
        if kind == '%Y':
            fields['year'] = int(text)
        elif kind == '%y':
            # POSIX pivot: 69-99 -> 1900s, 00-68 -> 2000s
            short = int(text)
            fields['year'] = short + (1900 if short >= 69 else 2000)
        elif kind in ('%m', '%-m'):
            fields['month'] = int(text)
        elif kind in ('%b', '%B'):
            fields['month'] = _month(kind, text, raw)
        elif kind in ('%d', '%-d'):
            fields['day'] = int(text)
        elif kind in ('%a', '%A'):
            _check_weekday(kind, text, raw)
        elif kind in ('%H', '%-H'):
            fields['hour'] = int(text)
        elif kind in ('%I', '%-I'):
            fields['hour12'] = int(text)
        elif kind == '%M':
            fields['minute'] = int(text)
        elif kind == '%S':
            fields['second'] = int(text)
        elif kind in ('%p', '%P'):
            fields['pm'] = text.lower() == 'pm'
    return fields


def _resolve_hour(fields: Dict[str, object], raw: str) -> int:
    pm = fields.get('pm')
    if 'hour12' in fields:
        hour = fields['hour12']
        if not 1 <= hour <= 12:
            raise InvalidDateTimeFormat(f"Hour {hour} is not on a 12-hour clock in {raw}", raw)
        if pm is None:
            return hour
        if pm and hour != 12:
            return hour + 12
        if not pm and hour == 12:
            return 0
        return hour
    if 'hour' in fields:
        return fields['hour']
    if pm is not None:
        return 12 if pm else 0
    return 0


def parse(pattern: Pattern, raw: str, context: Context) -> datetime:
    """Parse raw with pattern into a timezone-aware datetime.

    Date fields the pattern lacks come from today in the context timezone;
    time fields it lacks are zero.
    """
    if not pattern.parseable:
        raise InvalidDateTimeFormat(f"Pattern {pattern} cannot be used for parsing", raw)

    fields = _collect_fields(pattern, raw)
    if {'year', 'month', 'day'} <= fields.keys():
        year, month, day = fields['year'], fields['month'], fields['day']
    else:
        today = now(context)
        year = fields.get('year', today.year)
        month = fields.get('month', today.month)
        day = fields.get('day', today.day)
    hour = _resolve_hour(fields, raw)
    try:
        return datetime(
            year,
            month,
            day,
            hour,
            fields.get('minute', 0),
            fields.get('second', 0),
            tzinfo=context.tzinfo,
        )
    except ValueError as e:
        raise InvalidDateTimeFormat(f"Invalid date/time format: {raw} ({e})", raw) from e


def _render_token(value: datetime, kind: str) -> str:
    twelve = value.hour % 12 or 12
    if kind == '%Y':
        return f'{value.year:04d}'
    if kind == '%y':
        return f'{value.year % 100:02d}'
    if kind == '%m':
        return f'{value.month:02d}'
    if kind == '%-m':
        return str(value.month)
    if kind == '%b':
        return MONTH_ABBREVIATIONS[value.month - 1]
    if kind == '%B':
        return MONTH_NAMES[value.month - 1]
    if kind == '%d':
        return f'{value.day:02d}'
    if kind == '%-d':
        return str(value.day)
    if kind == '%a':
        return WEEKDAY_ABBREVIATIONS[value.weekday()]
    if kind == '%A':
        return WEEKDAY_NAMES[value.weekday()]
    if kind == '%H':
        return f'{value.hour:02d}'
    if kind == '%-H':
        return str(value.hour)
    if kind == '%I':
        return f'{twelve:02d}'
    if kind == '%-I':
        return str(twelve)
    if kind == '%M':
        return f'{value.minute:02d}'
    if kind == '%S':
        return f'{value.second:02d}'
    if kind == '%p':
        return 'AM' if value.hour < 12 else 'PM'
    if kind == '%P':
        return 'am' if value.hour < 12 else 'pm'
    # Anything else (%j, %Z, ...) is left to strftime
    return value.strftime(kind)


def render(value: datetime, pattern: Pattern) -> str:
    return ''.join(
        token.text if token.is_literal else _render_token(value, token.kind)
        for token in pattern.tokens
    )


def to_relativedelta(modifier) -> relativedelta:
    """Sum a normalized modifier into a single relativedelta"""
    delta = relativedelta()
    for part in modifier:
        amount = part.magnitude if part.sign == '+' else -part.magnitude
        delta += relativedelta(**{UNIT_FIELDS[part.unit]: amount})
    return delta


def add_interval(value: datetime, modifier) -> datetime:
    try:
        return value + to_relativedelta(modifier)
    except (OverflowError, ValueError) as e:
        raise InvalidDateTimeFormat(f"Date/time out of range: {value:%Y-%m-%d %H:%M:%S} shifted by {modifier}",
                                    value) from e


def interval_between(first: datetime, second: datetime) -> relativedelta:
    """Calendar-aware distance between two instants, every field non-negative"""
    earlier, later = sorted((first, second))
    return relativedelta(later, earlier)


def compare(first: datetime, second: datetime) -> Ordering:
    if first < second:
        return Ordering.BEFORE
    if first > second:
        return Ordering.AFTER
    return Ordering.SAME


def attach_timezone(value: datetime, context: Context) -> datetime:
    """Give a naive datetime the context timezone, convert an aware one into it"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=context.tzinfo)
    else:
        value = value.astimezone(context.tzinfo)
    return value.replace(microsecond=0)
