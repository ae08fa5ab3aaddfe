"""Data models for Trade Log Analyzer."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class Side(Enum):
    """Direction of a trade as written in the log."""
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class TradeRecord:
    """Represents a single trade log record."""
    timestamp: str
    ticker: str
    side: Side
    unit_price: Decimal
    volume: int
    currency: str = ""
    line: str = field(default="", repr=False, compare=False)

    @property
    def signed_volume(self) -> int:
        """Volume with BUY counted as positive and SELL as negative."""
        return self.volume if self.side is Side.BUY else -self.volume

    @property
    def cash_flow(self) -> Decimal:
        """Sell proceeds are positive, buy costs negative."""
        amount = self.unit_price * self.volume
        return amount if self.side is Side.SELL else -amount

    def __str__(self) -> str:
        """String representation of a trade record."""
        return f"TradeRecord(timestamp='{self.timestamp}', ticker='{self.ticker}', side='{self.side.value}', unit_price={self.unit_price}, volume={self.volume})"


@dataclass
class TickerStats:
    """Running per-ticker state collected during one aggregation pass."""
    last_price: Optional[Decimal] = None
    last_timestamp: str = ""
    net_units: int = 0
    orders: int = 0

    def update(self, record: TradeRecord) -> None:
        self.net_units += record.signed_volume
        self.orders += 1
        # equal timestamps: the later record in the stream wins
        if self.last_price is None or record.timestamp >= self.last_timestamp:
            self.last_price = record.unit_price
            self.last_timestamp = record.timestamp

    @property
    def position_value(self) -> Decimal:
        return (self.last_price or Decimal(0)) * self.net_units
