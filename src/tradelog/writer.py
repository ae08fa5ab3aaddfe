"""Filtered record export module."""

import logging
from typing import Iterable, List

import duckdb
import pandas as pd

from .models import TradeRecord

logger = logging.getLogger(__name__)

COLUMNS = ['timestamp', 'ticker', 'side', 'unit_price', 'currency', 'volume']


def records_to_dataframe(records: Iterable[TradeRecord]) -> pd.DataFrame:
    """Convert trade records to a DataFrame with one row per record."""
    return pd.DataFrame([{
        'timestamp': r.timestamp,
        'ticker': r.ticker,
        'side': r.side.value,
        'unit_price': float(r.unit_price),
        'currency': r.currency,
        'volume': r.volume
    } for r in records], columns=COLUMNS)


def save_records_to_csv(records: List[TradeRecord], output_file: str) -> None:
    """Save records to a CSV file."""
    logger.info(f"Saving {len(records)} records to {output_file}")
    df = records_to_dataframe(records)
    df.to_csv(output_file, index=False)
    logger.info(f"Successfully saved records to {output_file}")


def save_records_to_parquet(records: List[TradeRecord], output_file: str) -> None:
    """Save records to a Parquet file."""
    logger.info(f"Saving {len(records)} records to {output_file}")
    df = records_to_dataframe(records)

    # Use DuckDB to save to Parquet with compression
    con = duckdb.connect(database=':memory:')
    try:
        con.register('records_df', df)
        con.execute(f"""
            COPY (SELECT * FROM records_df)
            TO '{output_file}' (FORMAT 'parquet', COMPRESSION 'ZSTD')
        """)
    finally:
        con.close()
    logger.info(f"Successfully saved records to {output_file}")


def save_records(records: List[TradeRecord], output_file: str) -> None:
    """Save records as Parquet or CSV depending on the file extension."""
    if output_file.endswith('.parquet'):
        save_records_to_parquet(records, output_file)
    else:
        save_records_to_csv(records, output_file)
