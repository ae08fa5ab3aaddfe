"""Trade log analysis module.

Each aggregator consumes an already filtered record stream exactly once and
returns plain rows; rendering lives in the report module.
"""

import logging
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Tuple

from .config import AnalyzerConfig
from .filters import filter_records
from .models import TickerStats, TradeRecord
from .reader import read_records
from .report import format_money, render_histogram, render_position_graph, render_value_table

logger = logging.getLogger(__name__)


def collect_ticker_stats(records: Iterable[TradeRecord]) -> Dict[str, TickerStats]:
    """Accumulate last price, net units and order count for every ticker."""
    stats: Dict[str, TickerStats] = {}
    for record in records:
        stats.setdefault(record.ticker, TickerStats()).update(record)
    return stats


def list_tickers(records: Iterable[TradeRecord]) -> List[str]:
    """Distinct tickers in ascending order."""
    return sorted({record.ticker for record in records})


def compute_profit(records: Iterable[TradeRecord]) -> Decimal:
    """Sell proceeds minus buy costs over all records."""
    return sum((record.cash_flow for record in records), Decimal(0))


def compute_positions(records: Iterable[TradeRecord]) -> List[Tuple[str, Decimal]]:
    """Value of each ticker's position at its last known price, largest first."""
    stats = collect_ticker_stats(records)
    rows = [(ticker, stats[ticker].position_value) for ticker in sorted(stats)]
    # sort is stable, so equal values stay in ticker order
    rows.sort(key=lambda row: row[1], reverse=True)
    return rows


def compute_last_prices(records: Iterable[TradeRecord]) -> List[Tuple[str, Decimal]]:
    """Last known price per ticker, ordered by ticker."""
    stats = collect_ticker_stats(records)
    return [(ticker, stats[ticker].last_price) for ticker in sorted(stats)]


def compute_order_histogram(records: Iterable[TradeRecord]) -> List[Tuple[str, int]]:
    """Number of records per ticker, ordered by ticker."""
    stats = collect_ticker_stats(records)
    return [(ticker, stats[ticker].orders) for ticker in sorted(stats)]


def compute_position_graph(records: Iterable[TradeRecord]) -> List[Tuple[str, Decimal]]:
    """Position values reordered by ticker for graphing."""
    return sorted(compute_positions(records), key=lambda row: row[0])


def _report_list_tick(records: Iterable[TradeRecord], config: AnalyzerConfig) -> List[str]:
    return list_tickers(records)


def _report_profit(records: Iterable[TradeRecord], config: AnalyzerConfig) -> List[str]:
    return [format_money(compute_profit(records))]


def _report_pos(records: Iterable[TradeRecord], config: AnalyzerConfig) -> List[str]:
    return render_value_table(compute_positions(records), config.label_width)


def _report_last_price(records: Iterable[TradeRecord], config: AnalyzerConfig) -> List[str]:
    return render_value_table(compute_last_prices(records), config.label_width)


def _report_hist_ord(records: Iterable[TradeRecord], config: AnalyzerConfig) -> List[str]:
    return render_histogram(compute_order_histogram(records), config.bar_width, config.label_width)


def _report_graph_pos(records: Iterable[TradeRecord], config: AnalyzerConfig) -> List[str]:
    return render_position_graph(compute_position_graph(records), config.bar_width,
                                 config.graph_scale, config.label_width)


REPORTS: Dict[str, Callable[[Iterable[TradeRecord], AnalyzerConfig], List[str]]] = {
    'list-tick': _report_list_tick,
    'profit': _report_profit,
    'pos': _report_pos,
    'last-price': _report_last_price,
    'hist-ord': _report_hist_ord,
    'graph-pos': _report_graph_pos,
}


def run_command(records: Iterable[TradeRecord], config: AnalyzerConfig) -> List[str]:
    """Produce the output lines of the configured command.

    Without a command the raw lines of the records are passed through.
    """
    if config.command is None:
        return [record.line for record in records]

    report = REPORTS.get(config.command)
    if report is None:
        raise ValueError(f"Unknown command: {config.command}")
    logger.info(f"Running command: {config.command}")
    return report(records, config)


def analyze(lines: Iterable[str], config: AnalyzerConfig) -> List[str]:
    """Parse, filter and aggregate raw log lines into report lines."""
    records = filter_records(read_records(lines), config)
    return run_command(records, config)
