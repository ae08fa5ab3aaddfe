"""Trade log reader module."""

import gzip
import logging
import re
import sys
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Sequence

from .models import Side, TradeRecord
from .utils import is_canonical_datetime

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ';'
MIN_FIELDS = 6
PRICE_PATTERN = re.compile(r'[0-9]+(\.[0-9]+)?')
VOLUME_PATTERN = re.compile(r'[0-9]+')
# undecodable bytes are replaced with this on read
REPLACEMENT_CHAR = '\ufffd'


def parse_record(line: str) -> Optional[TradeRecord]:
    """Parse one log line, returning None when it is not a valid record."""
    text = line.rstrip('\r\n')
    if REPLACEMENT_CHAR in text:
        return None
    fields = text.split(FIELD_SEPARATOR)
    if len(fields) < MIN_FIELDS:
        return None

    timestamp, ticker, side, price, currency, volume = fields[:MIN_FIELDS]
    if not is_canonical_datetime(timestamp) or not ticker:
        return None
    if not PRICE_PATTERN.fullmatch(price) or not VOLUME_PATTERN.fullmatch(volume):
        return None

    try:
        side = Side(side)
    except ValueError:
        return None

    return TradeRecord(
        timestamp=timestamp,
        ticker=ticker,
        side=side,
        unit_price=Decimal(price),
        volume=int(volume),
        currency=currency,
        line=text
    )


def read_records(lines: Iterable[str]) -> Iterator[TradeRecord]:
    """Parse a stream of log lines, skipping malformed ones."""
    skipped = 0
    for line in lines:
        record = parse_record(line)
        if record is None:
            skipped += 1
            continue
        yield record
    if skipped:
        logger.debug(f"Skipped {skipped:,} malformed lines")


def iter_log_lines(file_paths: Sequence[str]) -> Iterator[str]:
    """Yield lines of all log files in order, or of stdin if none are given."""
    if not file_paths:
        logger.info("Reading trade log from standard input")
        if hasattr(sys.stdin, 'reconfigure'):
            sys.stdin.reconfigure(errors='replace')
        yield from sys.stdin
        return

    for file_path in file_paths:
        logger.info(f"Reading trade log from: {file_path}")
        if file_path.endswith('.gz'):
            handle = gzip.open(file_path, 'rt', encoding='utf-8', errors='replace')
        else:
            handle = open(file_path, encoding='utf-8', errors='replace')
        with handle:
            yield from handle
