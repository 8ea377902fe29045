from datetime import datetime
from typing import Optional, Union

from dateutil import parser

from timeshift.config import get_testing_mode
from timeshift.errors import InvalidDateTimeFormat, NoMatchingFormat
from timeshift.logger import setup_logger
from timeshift.patterns import CATALOG, Pattern, as_pattern
from timeshift.provider import Context, attach_timezone, parse, render

logger = setup_logger('detector', testing=get_testing_mode())


def parse_with_format(raw: str, pattern: Union[Pattern, str], context: Optional[Context] = None) -> datetime:
    """Parse raw with one specific pattern, raising InvalidDateTimeFormat if it does not conform"""
    return parse(as_pattern(pattern), raw, context or Context())


def _round_trips(raw: str, pattern: Pattern, context: Context) -> Optional[datetime]:
    try:
        value = parse(pattern, raw, context)
    except InvalidDateTimeFormat:
        return None
    # A loose pattern can swallow characters meant for another field;
    # only an exact reproduction counts as a match
    if render(value, pattern) != raw:
        return None
    return value


def detect(raw: str, context: Optional[Context] = None):
    """Return (pattern, value) for the first catalog pattern that round-trips raw"""
    context = context or Context()
    for pattern in CATALOG:
        value = _round_trips(raw, pattern, context)
        if value is not None:
            logger.debug(f"Detected '{pattern}' for '{raw}'")
            return pattern, value

    logger.debug(f"No format matches '{raw}'")
    raise NoMatchingFormat(raw)


def detect_format(raw: str, context: Optional[Context] = None) -> Pattern:
    """Find the catalog pattern a date/time string is written in"""
    pattern, _ = detect(raw, context)
    return pattern


def resolve_datetime(raw: Union[str, datetime], context: Optional[Context] = None) -> datetime:
    """Turn a date/time string or datetime into an aware datetime in the context timezone.

    Strings are matched against the catalog first; anything the catalog does
    not know is handed to dateutil's free-form parser.
    """
    context = context or Context()
    if isinstance(raw, datetime):
        return attach_timezone(raw, context)

    try:
        _, value = detect(raw, context)
        return value
    except NoMatchingFormat:
        pass

    try:
        value = parser.parse(raw, default=datetime.now(context.tzinfo).replace(
            hour=0, minute=0, second=0, microsecond=0, tzinfo=None))
    except (ValueError, OverflowError) as e:
        raise InvalidDateTimeFormat(f"Invalid date/time format: {raw}", raw) from e

    logger.debug(f"Parsed '{raw}' free-form as {value.isoformat()}")
    return attach_timezone(value, context)
