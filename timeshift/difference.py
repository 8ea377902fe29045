from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, Optional, Union

from timeshift.config import get_testing_mode
from timeshift.detector import resolve_datetime
from timeshift.logger import setup_logger
from timeshift.provider import Context, Ordering, compare, interval_between, now

logger = setup_logger('difference', testing=get_testing_mode())


@dataclass(frozen=True)
class CalendarInterval:
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    expired: bool = False

    def as_dict(self) -> Dict[str, object]:
        """Plain dict with the 'expire' key used by the CLI output"""
        result = asdict(self)
        result['expire'] = result.pop('expired')
        return result


def diff(first: Union[str, datetime],
         second: Optional[Union[str, datetime]] = None,
         context: Optional[Context] = None) -> CalendarInterval:
    """Calendar-aware difference between two instants.

    ``expired`` is True when ``first`` is at or after ``second``, which
    defaults to now: read ``first`` as a deadline checked against ``second``.
    """
    context = context or Context()
    start = resolve_datetime(first, context)
    end = now(context) if second is None else resolve_datetime(second, context)

    delta = interval_between(start, end)
    interval = CalendarInterval(
        years=delta.years,
        months=delta.months,
        days=delta.days,
        hours=delta.hours,
        minutes=delta.minutes,
        seconds=delta.seconds,
        expired=compare(start, end) is not Ordering.BEFORE,
    )
    logger.debug(f"Difference between {start.isoformat()} and {end.isoformat()}: {interval}")
    return interval
