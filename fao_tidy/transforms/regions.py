"""
Region splitter transform for fao-tidy.

FAO keeps reporting some commodity series under "Netherlands Antilles",
which was dissolved in 2010. Downstream analyses work with its successor
territories, so each Netherlands Antilles row is replaced by one row per
successor carrying an equal share of the value.

Guard:
  If *any* successor already appears in the table, the split is skipped.
  This makes the transform idempotent and leaves data that already
  reports the successors alone. Partial presence also skips; pass
  ``strict=True`` to raise ``SplitConflictError`` in that case instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Sequence

import pandas as pd

from fao_tidy.config import DEFAULT_SOURCE_REGION, DEFAULT_SUCCESSORS
from fao_tidy.exceptions import SchemaError, SplitConflictError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["country", "commodity", "product", "year", "value"]

SplitStatus = Literal["split", "already_split", "no_source_rows"]


@dataclass
class SplitResult:
    """Result of the region-splitting step."""
    df: pd.DataFrame
    status: SplitStatus
    rows_removed: int = 0
    rows_added: int = 0

    @property
    def performed(self) -> bool:
        return self.status == "split"


def split_region(
    df: pd.DataFrame,
    source_region: str = DEFAULT_SOURCE_REGION,
    successors: Sequence[str] = tuple(DEFAULT_SUCCESSORS),
    strict: bool = False,
) -> SplitResult:
    """Replace *source_region* rows with equal shares for each successor.

    Every source row becomes ``len(successors)`` rows that are identical
    except for ``country`` (the successor name) and ``value`` (the
    original value divided by the number of successors). The original
    rows are removed, all other rows keep their content and relative
    order, and the new rows are appended grouped by successor in the
    order given.

    Args:
        df: Table with at least ``country``, ``commodity``, ``product``,
            ``year`` and ``value`` columns (after the product join).
        source_region: Name of the deprecated aggregate region.
        successors: Names of the regions that replace it.
        strict: If True, raise when some but not all successors are
            already present.

    Returns:
        SplitResult with the new table and what happened.

    Raises:
        SchemaError: If a required column is missing or *successors* is empty.
        SplitConflictError: In strict mode, on partial successor presence.
    """
    missing_cols = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing_cols:
        raise SchemaError(
            f"split_region: missing columns {missing_cols}. "
            f"Columns found: {list(df.columns)}"
        )

    successors = list(successors)
    if not successors:
        raise SchemaError(f"split_region: no successor regions given for '{source_region}'")
    countries = set(df["country"].dropna())
    present = [s for s in successors if s in countries]
    if present:
        if strict and len(present) < len(successors):
            raise SplitConflictError(
                f"Only some successors of '{source_region}' are present: "
                f"{present} (expected all or none of {successors})"
            )
        logger.info(
            "Region split SKIPPED: successors of '%s' already present %s",
            source_region,
            present,
        )
        return SplitResult(df=df, status="already_split")

    is_source = (df["country"] == source_region).fillna(False).astype(bool)
    source_rows = df[is_source]
    if source_rows.empty:
        logger.info("Region split: no '%s' rows, nothing to do", source_region)
        return SplitResult(df=df, status="no_source_rows")

    share = source_rows["value"] / len(successors)
    fanned = pd.concat(
        [source_rows.assign(country=name, value=share) for name in successors],
        ignore_index=True,
    )
    result = pd.concat([df[~is_source], fanned], ignore_index=True)

    logger.info(
        "Region split: '%s' -> %s (%d rows removed, %d added)",
        source_region,
        successors,
        len(source_rows),
        len(fanned),
    )
    return SplitResult(
        df=result,
        status="split",
        rows_removed=len(source_rows),
        rows_added=len(fanned),
    )
