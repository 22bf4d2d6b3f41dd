"""
Unit labelling for fao-tidy.

FAO ships quantity and value tables as separate files. The measure is
only recorded in the file name, e.g. ``commodities_quantity.csv`` or
``commodities_value.csv``. Once cleaned, the generic ``value`` column is
renamed to the unit it carries:

  quant -> tonnes
  value -> usd

Keeping the unit in the column name lets quantity and value tables be
joined later without ambiguity.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from fao_tidy.exceptions import ParsingError, SchemaError

# File-name substring -> unit label, checked in order
UNIT_PATTERNS: dict[str, str] = {
    "quant": "tonnes",
    "value": "usd",
}


def detect_units(path: str | Path) -> str:
    """Derive the unit label from a source file name.

    Args:
        path: e.g. ``"raw/commodities_quantity.csv"``.

    Returns:
        ``"tonnes"`` or ``"usd"``.

    Raises:
        ParsingError: If no pattern or more than one pattern matches.
    """
    name = Path(path).name.lower()
    matches = [unit for pattern, unit in UNIT_PATTERNS.items() if pattern in name]
    if len(matches) != 1:
        raise ParsingError(
            f"Cannot derive unit from file name '{Path(path).name}': expected "
            f"exactly one of {list(UNIT_PATTERNS)} in the name, matched {matches}"
        )
    return matches[0]


def rename_value_column(df: pd.DataFrame, units: str) -> pd.DataFrame:
    """Rename ``value`` to *units* (e.g. ``"tonnes"``), keeping its position."""
    if "value" not in df.columns:
        raise SchemaError("rename_value_column: table has no 'value' column")
    return df.rename(columns={"value": units})
