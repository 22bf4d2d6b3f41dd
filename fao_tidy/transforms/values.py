"""
Value normalization transform for fao-tidy.

FAO fisheries commodity exports encode values as annotated text:
- ``"123 F"``: an FAO estimate; the ``F`` flag is dropped.
- ``"..."``: data not available.
- ``"0 0"``: more than zero but less than half the reporting unit.
- ``"-"``: a true zero.
- ``""``: no entry.

This transform rewrites the ``value`` column into ``float64`` (``NaN`` is
the missing marker) and the ``year`` column into nullable ``Int64``.

Order matters: the ``F`` flag can sit on the ``...`` sentinel, so it is
stripped first, and the empty-string check runs after the code
substitutions.

Coercion is silent: text that still fails to parse after the rules
becomes missing rather than raising. The number of such cells is logged
at WARNING level so irregular source data does not vanish unnoticed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

import numpy as np
import pandas as pd

from fao_tidy.exceptions import SchemaError

logger = logging.getLogger(__name__)

DEFAULT_SUB_0_0 = 0.1


@dataclass(frozen=True)
class ValueRule:
    """One step of the FAO code translation.

    ``kind="replace"`` swaps the first occurrence of ``pattern`` for
    ``replacement``; ``kind="missing"`` marks the cell missing when it
    equals ``pattern`` exactly.
    """
    kind: Literal["replace", "missing"]
    pattern: str
    replacement: str = ""
    description: str = ""


def value_rules(sub_0_0: float = DEFAULT_SUB_0_0) -> list[ValueRule]:
    """Return the ordered FAO code rules for a given ``'0 0'`` substitute."""
    return [
        ValueRule("replace", " F", "", "estimated value flag"),
        ValueRule("missing", "...", description="data not available"),
        ValueRule("replace", "0 0", str(sub_0_0), "more than zero, less than half a unit"),
        ValueRule("replace", "-", "0", "true zero"),
        ValueRule("missing", "", description="no entry"),
    ]


def apply_value_rules(values: pd.Series, rules: list[ValueRule]) -> pd.Series:
    """Apply *rules* in order to a Series of FAO value text.

    Returns a ``string`` dtype Series where missing cells are ``<NA>``.
    """
    text = values.astype("string")
    for rule in rules:
        if rule.kind == "replace":
            text = text.str.replace(rule.pattern, rule.replacement, n=1, regex=False)
        else:
            hit = (text == rule.pattern).fillna(False).astype(bool)
            text = text.mask(hit)
    return text


def _coerce_numeric(text: pd.Series) -> pd.Series:
    """``pd.to_numeric(errors='coerce')`` over nullable text, as float64."""
    obj = text.astype(object).where(text.notna(), None)
    return pd.to_numeric(obj, errors="coerce").astype("float64")


def normalize_values(df: pd.DataFrame, sub_0_0: float = DEFAULT_SUB_0_0) -> pd.DataFrame:
    """Translate FAO value codes and parse ``value`` / ``year`` as numbers.

    Row count and order are preserved and the input is not modified.

    Args:
        df: Long-format table with text ``value`` and ``year`` columns.
        sub_0_0: Number substituted for the ``'0 0'`` code.

    Returns:
        Copy of *df* with ``value`` as ``float64`` and ``year`` as ``Int64``.

    Raises:
        SchemaError: If ``value`` or ``year`` is missing from *df*.
    """
    missing_cols = [c for c in ("value", "year") if c not in df.columns]
    if missing_cols:
        raise SchemaError(f"normalize_values: missing columns {missing_cols}")

    df = df.copy()

    text = apply_value_rules(df["value"], value_rules(sub_0_0))
    value = _coerce_numeric(text)

    unparsed = int((text.notna() & value.isna()).sum())
    if unparsed:
        sample = text[text.notna() & value.isna()].unique()[:5].tolist()
        logger.warning(
            "%d value cell(s) could not be parsed and were set to missing "
            "(e.g. %s)",
            unparsed,
            sample,
        )
    df["value"] = value

    year = _coerce_numeric(df["year"].astype("string").str.strip())
    year = year.where(np.isfinite(year) & (year.abs() < 2**63))
    bad_years = int(year.isna().sum() - df["year"].isna().sum())
    if bad_years > 0:
        logger.warning("%d year label(s) could not be parsed as integers", bad_years)
    df["year"] = np.trunc(year).astype("Int64")

    return df
