"""Utility functions for Trade Log Analyzer."""

import calendar
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_datetime(value: str) -> datetime:
    """Parse a DATETIME argument in the YYYY-mm-dd HH:MM:SS format."""
    return datetime.strptime(value.strip(), DATETIME_FORMAT)


def is_canonical_datetime(value: str) -> bool:
    """Check that value is a zero-padded YYYY-mm-dd HH:MM:SS string."""
    try:
        return parse_datetime(value).strftime(DATETIME_FORMAT) == value
    except ValueError:
        return False


def to_epoch(value: str) -> int:
    """Convert a DATETIME string to whole epoch seconds."""
    return calendar.timegm(parse_datetime(value).timetuple())


def from_epoch(seconds: int) -> str:
    """Convert epoch seconds back to the canonical DATETIME string."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(DATETIME_FORMAT)


def datetime_intersect(first: str, second: str) -> str:
    """Midpoint of two datetimes, rounded down to a whole second."""
    return from_epoch((to_epoch(first) + to_epoch(second)) // 2)


def resolve_bound(values: Sequence[str]) -> Optional[str]:
    """Fold repeated -a/-b values into one bound.

    Every value after the first is combined with the bound collected so far
    using datetime_intersect, so the result depends on argument order.
    """
    bound = None
    for value in values:
        if bound is None:
            bound = parse_datetime(value).strftime(DATETIME_FORMAT)
        else:
            bound = datetime_intersect(bound, value)
    if len(values) > 1:
        logger.debug(f"Resolved {len(values)} bounds to {bound}")
    return bound


def parse_width(width_arg: str) -> int:
    """Convert graph width argument to a positive number of characters."""
    try:
        width = int(width_arg)
        if width <= 0:
            raise ValueError("Width must be positive")
        return width
    except ValueError:
        logger.error(f"Invalid width format: {width_arg}")
        raise
