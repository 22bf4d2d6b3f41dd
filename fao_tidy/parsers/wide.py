"""
Wide-format parser for FAO fisheries commodity exports.

Input structure:
  - Header row: ``Country (Country)``, ``Commodity (Commodity)``,
    ``Trade flow (Trade flow)``, then one column per year (``1976``, ...).
  - Data rows: one per (country, commodity, trade flow); cells hold FAO
    value codes as text (``"1234"``, ``"12 F"``, ``"0 0"``, ``"-"``, ``"..."``).

Key transformation:
  Melt every non-identifier column into (year, value) pairs, giving one
  row per (country, commodity, trade_flow, year). No value interpretation
  happens here; cells stay as text for the Value Normalizer.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from fao_tidy.exceptions import ParsingError
from fao_tidy.parsers.base import BaseParser, ParseResult

logger = logging.getLogger(__name__)

# FAO header -> tidy column name
COLUMN_MAP: dict[str, str] = {
    "Country (Country)": "country",
    "Commodity (Commodity)": "commodity",
    "Trade flow (Trade flow)": "trade_flow",
}

ID_COLUMNS = list(COLUMN_MAP.values())


def reshape_long(df: pd.DataFrame) -> pd.DataFrame:
    """Rename FAO identifier headers and melt year columns into rows.

    All columns other than the three identifiers are treated as year
    labels. Rows are emitted year-major (every row for the first year,
    then every row for the second, ...), matching ``DataFrame.melt``.

    Raises:
        ParsingError: If any identifier column is missing.
    """
    df = df.rename(columns=COLUMN_MAP)
    missing_cols = [c for c in ID_COLUMNS if c not in df.columns]
    if missing_cols:
        raise ParsingError(
            f"Expected columns {missing_cols} not found. "
            f"Columns found: {list(df.columns[:10])}"
        )

    year_columns = [c for c in df.columns if c not in ID_COLUMNS]
    return df.melt(
        id_vars=ID_COLUMNS,
        value_vars=year_columns,
        var_name="year",
        value_name="value",
    )


class FaoWideParser(BaseParser):
    """Parser for FishStat wide-format commodity CSV exports."""

    def parse(self, path: str | Path) -> ParseResult:
        path = Path(path)
        logger.info("Parsing FAO wide file: %s", path)

        try:
            df = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                encoding="utf-8-sig",
            )
        except pd.errors.EmptyDataError as exc:
            raise ParsingError(f"File has no header row: {path}") from exc

        df.columns = [str(c).strip() for c in df.columns]
        for col in df.columns:
            df[col] = df[col].str.strip()

        year_columns = [c for c in df.columns if c not in COLUMN_MAP]
        if not year_columns:
            raise ParsingError(f"No year columns found in {path.name}.")

        logger.info("Found %d year columns, %d data rows", len(year_columns), len(df))
        long_df = reshape_long(df)
        logger.info("Melted to %d rows", len(long_df))

        return ParseResult(
            df=long_df,
            source_path=path,
            rows_wide=len(df),
            year_columns=year_columns,
        )
