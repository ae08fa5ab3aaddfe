"""Text rendering of analysis reports."""

from decimal import Decimal
from typing import List, Optional, Sequence, Tuple, Union

Number = Union[int, Decimal]

BAR_GLYPH = '#'
NEGATIVE_BAR_GLYPH = '!'


def format_money(value: Decimal) -> str:
    """Format a money amount with exactly two fraction digits."""
    return f"{value:.2f}"


def format_label(ticker: str, label_width: int) -> str:
    return f"{ticker[:label_width]:<{label_width}}"


def render_value_table(rows: Sequence[Tuple[str, Decimal]], label_width: int) -> List[str]:
    """Render ticker/value rows with values right-aligned in one column.

    The column width depends on every row, so all values are formatted in a
    first pass and padded to the widest one in a second pass.
    """
    formatted = [(ticker, format_money(value)) for ticker, value in rows]
    width = max((len(text) for _, text in formatted), default=0)
    return [f"{format_label(ticker, label_width)}: {text:>{width}}" for ticker, text in formatted]


def scale_bars(values: Sequence[Number], width: Optional[int], scale: int = 1) -> List[int]:
    """Compute bar lengths for the given values.

    Without a width each bar has |value| // scale characters. With a width
    the largest magnitude gets exactly `width` characters and the others are
    scaled linearly against it, rounding down.
    """
    magnitudes = [abs(value) for value in values]
    if width is None:
        return [int(magnitude // scale) for magnitude in magnitudes]

    largest = max(magnitudes, default=0)
    if largest == 0:
        return [0] * len(magnitudes)
    return [int(magnitude * width // largest) for magnitude in magnitudes]


def render_bar(length: int, glyph: str = BAR_GLYPH) -> str:
    return f" {glyph * length}" if length > 0 else ""


def render_histogram(rows: Sequence[Tuple[str, int]], width: Optional[int], label_width: int) -> List[str]:
    """Render per-ticker order counts as '#' bars, one character per order by default."""
    lengths = scale_bars([count for _, count in rows], width)
    return [f"{format_label(ticker, label_width)}:{render_bar(length)}"
            for (ticker, _), length in zip(rows, lengths)]


def render_position_graph(rows: Sequence[Tuple[str, Decimal]], width: Optional[int],
                          scale: int, label_width: int) -> List[str]:
    """Render position values as bars, '#' for long and '!' for short positions."""
    lengths = scale_bars([value for _, value in rows], width, scale)
    lines = []
    for (ticker, value), length in zip(rows, lengths):
        glyph = NEGATIVE_BAR_GLYPH if value < 0 else BAR_GLYPH
        lines.append(f"{format_label(ticker, label_width)}:{render_bar(length, glyph)}")
    return lines
