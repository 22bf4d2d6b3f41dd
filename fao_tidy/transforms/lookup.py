"""
Commodity -> product lookup join for fao-tidy.

FAO commodity names are fine-grained (e.g. "Ornamental saltwater fish");
analyses group them into products (e.g. "fish_ornamental"). The mapping
lives in a two-column CSV that is inner-joined onto the cleaned table.

Rows whose commodity has no product are dropped by the inner join. The
unmatched commodity names are logged so that gaps in the lookup file can
be fixed; the counts are returned for the _meta table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from fao_tidy.exceptions import SchemaError

logger = logging.getLogger(__name__)

LOOKUP_COLUMNS = ["commodity", "product"]


@dataclass
class JoinResult:
    """Result of the product join step."""
    df: pd.DataFrame
    rows_total: int
    rows_dropped: int
    unmatched_commodities: list[str] = field(default_factory=list)


def validate_lookup(lookup: pd.DataFrame) -> pd.DataFrame:
    """Check the lookup has ``commodity``/``product`` and unique commodities.

    Returns the lookup restricted to those two columns.

    Raises:
        SchemaError: On missing columns or duplicate commodity keys.
    """
    missing_cols = [c for c in LOOKUP_COLUMNS if c not in lookup.columns]
    if missing_cols:
        raise SchemaError(f"Product lookup is missing columns {missing_cols}")

    dupes = lookup.loc[lookup["commodity"].duplicated(), "commodity"].unique().tolist()
    if dupes:
        raise SchemaError(f"Product lookup has duplicate commodity keys: {dupes}")

    return lookup[LOOKUP_COLUMNS]


def load_product_lookup(path: str | Path) -> pd.DataFrame:
    """Read the commodity -> product CSV. Empty cells become missing."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Product lookup not found: {path}")
    lookup = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        na_values=[""],
        encoding="utf-8-sig",
    )
    lookup.columns = [c.strip() for c in lookup.columns]
    logger.info("Loaded product lookup from %s (%d commodities)", path, len(lookup))
    return validate_lookup(lookup)


def join_products(df: pd.DataFrame, lookup: pd.DataFrame) -> JoinResult:
    """Inner-join ``product`` onto *df* by ``commodity``.

    Row order of *df* is preserved for the rows that match.

    Args:
        df: Table with a ``commodity`` column.
        lookup: Table with unique ``commodity`` keys and a ``product`` column.

    Raises:
        SchemaError: If *df* has no ``commodity`` column or the lookup is invalid.
    """
    if "commodity" not in df.columns:
        raise SchemaError("join_products: table has no 'commodity' column")
    lookup = validate_lookup(lookup)

    known = set(lookup["commodity"].dropna())
    unmatched = sorted(set(df["commodity"].dropna()) - known)
    if unmatched:
        logger.warning(
            "%d commodit(ies) have no product mapping and will be dropped: %s",
            len(unmatched),
            unmatched,
        )

    # Keys are unique: filter, then left-merge to keep the left row order.
    matched = df[df["commodity"].isin(known)]
    joined = matched.merge(lookup, on="commodity", how="left")
    return JoinResult(
        df=joined,
        rows_total=len(df),
        rows_dropped=len(df) - len(joined),
        unmatched_commodities=unmatched,
    )
