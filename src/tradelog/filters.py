"""Record filters for Trade Log Analyzer.

The chain applies the ticker filter first and the time filter second; a
record survives only if it passes both.
"""

import logging
from typing import Iterable, Iterator, Optional

from .config import AnalyzerConfig
from .models import TradeRecord

logger = logging.getLogger(__name__)


class TickerFilter:
    """Keep records of the selected tickers; an empty selection keeps all."""

    def __init__(self, tickers: Iterable[str] = ()):
        self.tickers = frozenset(tickers)

    def __call__(self, record: TradeRecord) -> bool:
        return not self.tickers or record.ticker in self.tickers


class TimeFilter:
    """Keep records strictly between the optional after/before bounds."""

    def __init__(self, after: Optional[str] = None, before: Optional[str] = None):
        self.after = after
        self.before = before

    def __call__(self, record: TradeRecord) -> bool:
        if self.after is not None and not self.after < record.timestamp:
            return False
        if self.before is not None and not record.timestamp < self.before:
            return False
        return True


def filter_records(records: Iterable[TradeRecord], config: AnalyzerConfig) -> Iterator[TradeRecord]:
    """Apply the ticker and time filters from config to a record stream."""
    stages = (
        TickerFilter(config.tickers),
        TimeFilter(config.time_after, config.time_before),
    )
    if config.tickers:
        logger.info(f"Filtering for tickers: {', '.join(sorted(config.tickers))}")
    for record in records:
        if all(stage(record) for stage in stages):
            yield record
