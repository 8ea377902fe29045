from datetime import datetime
from typing import Optional, Union

from timeshift.config import get_testing_mode
from timeshift.detector import detect, resolve_datetime
from timeshift.errors import InvalidDateTimeFormat, InvalidTimestampType
from timeshift.logger import setup_logger
from timeshift.modifier import normalize_modifier
from timeshift.patterns import Pattern, as_pattern
from timeshift.provider import Context, add_interval, now, render

logger = setup_logger('converter', testing=get_testing_mode())

DEFAULT_FORMAT = '%Y-%m-%d %H:%M:%S'
DEFAULT_12H_FORMAT = '%-I:%M:%S %p'
DEFAULT_24H_FORMAT = '%H:%M:%S'

Timestamp = Union[int, float, str]


def _convert(raw: str, output: Union[Pattern, str], twelve_hour: bool, context: Optional[Context]) -> str:
    source, value = detect(raw, context or Context())
    output = as_pattern(output)
    if twelve_hour:
        output = output.with_twelve_hour_clock()
    result = render(value, output)
    logger.debug(f"Converted '{raw}' ({source}) to '{result}' ({output})")
    return result


def reformat(raw: str, output: Union[Pattern, str], context: Optional[Context] = None) -> str:
    """Render a date/time string of any known layout in another layout"""
    return _convert(raw, output, False, context)


def to_12h(raw: str, output: Union[Pattern, str] = DEFAULT_12H_FORMAT, context: Optional[Context] = None) -> str:
    """Render with every 24-hour token of output switched to the 12-hour clock"""
    return _convert(raw, output, True, context)


def to_24h(raw: str, output: Union[Pattern, str] = DEFAULT_24H_FORMAT, context: Optional[Context] = None) -> str:
    return _convert(raw, output, False, context)


def modify(raw: Union[str, datetime], modifier: str, output: Union[Pattern, str] = DEFAULT_FORMAT,
           context: Optional[Context] = None) -> str:
    """Shift a date/time by an interval string like '+7d -1y' and render it"""
    context = context or Context()
    value = resolve_datetime(raw, context)
    shifted = add_interval(value, normalize_modifier(modifier))
    return render(shifted, as_pattern(output))


def current_time(output: Union[Pattern, str] = DEFAULT_FORMAT, context: Optional[Context] = None) -> str:
    return render(now(context or Context()), as_pattern(output))


def resolve_timestamp(timestamp: Timestamp, context: Context) -> datetime:
    """Unix epoch numbers and date/time strings both become an aware datetime"""
    # bool is an int subclass but never a timestamp
    if isinstance(timestamp, bool):
        raise InvalidTimestampType(timestamp)
    if isinstance(timestamp, (int, float)):
        try:
            return datetime.fromtimestamp(timestamp, context.tzinfo).replace(microsecond=0)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDateTimeFormat(f"Timestamp out of range: {timestamp}", timestamp) from e
    if isinstance(timestamp, str):
        return resolve_datetime(timestamp, context)
    raise InvalidTimestampType(timestamp)


def format_timestamp(timestamp: Timestamp, output: Union[Pattern, str] = DEFAULT_FORMAT,
                     context: Optional[Context] = None) -> str:
    """Render an epoch number or a date/time string in output"""
    value = resolve_timestamp(timestamp, context or Context())
    return render(value, as_pattern(output))
