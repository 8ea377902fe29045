# Date/time strings in, date/time strings out, whatever the layout

from timeshift.converter import (current_time, format_timestamp, modify, reformat,
                                 resolve_timestamp, to_12h, to_24h)
from timeshift.detector import detect_format, parse_with_format, resolve_datetime
from timeshift.difference import CalendarInterval, diff
from timeshift.errors import (DateTimeError, InvalidDateTimeFormat, InvalidTimestampType,
                              NoMatchingFormat, Result, UnknownUnit, attempt)
from timeshift.modifier import ModifierPart, NormalizedModifier, normalize_modifier
from timeshift.patterns import CATALOG, Pattern, compile_pattern
from timeshift.provider import Context

__all__ = [
    'CATALOG',
    'CalendarInterval',
    'Context',
    'DateTimeError',
    'InvalidDateTimeFormat',
    'InvalidTimestampType',
    'ModifierPart',
    'NoMatchingFormat',
    'NormalizedModifier',
    'Pattern',
    'Result',
    'UnknownUnit',
    'attempt',
    'compile_pattern',
    'current_time',
    'detect_format',
    'diff',
    'format_timestamp',
    'modify',
    'normalize_modifier',
    'parse_with_format',
    'reformat',
    'resolve_datetime',
    'resolve_timestamp',
    'to_12h',
    'to_24h',
]
