"""
Row filtering and ordering helpers for fao-tidy.

- drop_countries: remove aggregate / defunct reporters (``Totals``,
  ``Yugoslavia SFR``) that would double-count or have no successor mapping.
- arrange_rows: drop columns not needed downstream (``trade_flow``) and
  sort so each country/commodity series reads chronologically with
  missing values last.
"""

from __future__ import annotations

import pandas as pd

from fao_tidy.exceptions import SchemaError

SORT_COLUMNS = ["country", "commodity", "value", "year"]


def drop_countries(df: pd.DataFrame, countries: list[str]) -> pd.DataFrame:
    """Return *df* without rows whose ``country`` is in *countries*."""
    if not countries or "country" not in df.columns:
        return df
    return df[~df["country"].isin(countries)].reset_index(drop=True)


def arrange_rows(
    df: pd.DataFrame,
    drop_columns: list[str] | None = None,
) -> pd.DataFrame:
    """Drop helper columns and sort by country, commodity, missingness, year.

    Within a country/commodity series, rows with a value come before rows
    without one; each block is ordered by year. The sort is stable.

    Args:
        df: Normalized table (``value`` numeric, ``year`` integer).
        drop_columns: Columns to remove. Defaults to ``["trade_flow"]``.

    Raises:
        SchemaError: If a sort column is missing.
    """
    missing_cols = [c for c in SORT_COLUMNS if c not in df.columns]
    if missing_cols:
        raise SchemaError(f"arrange_rows: missing columns {missing_cols}")

    if drop_columns is None:
        drop_columns = ["trade_flow"]
    df = df.drop(columns=[c for c in drop_columns if c in df.columns])

    df = df.assign(_missing=df["value"].isna())
    df = df.sort_values(
        ["country", "commodity", "_missing", "year"],
        kind="mergesort",
        na_position="last",
    )
    return df.drop(columns="_missing").reset_index(drop=True)
