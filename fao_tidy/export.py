"""
Writers for the cleaned FAO tables.

Each source file yields one table named after its unit, so a standard
run produces ``tonnes.csv`` and ``usd.csv`` next to ``_meta.csv``.

CSV output is meant to be read back with ``read.csv`` in R or opened in
a spreadsheet: no index column, missing values as empty fields, plain
UTF-8 (country names such as "Côte d'Ivoire" survive). Parquet keeps the
nullable ``Int64`` year column intact for pandas users.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from fao_tidy.exceptions import ExportError

logger = logging.getLogger(__name__)

_WRITERS = {
    "csv": lambda df, path: df.to_csv(path, index=False, na_rep="", encoding="utf-8"),
    "parquet": lambda df, path: df.to_parquet(path, index=False, engine="pyarrow"),
}


def _write(df: pd.DataFrame, path: Path, output_format: str) -> str:
    """Write *df* to *path*; any failure surfaces as ``ExportError``."""
    try:
        _WRITERS[output_format](df, path)
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc
    logger.info("Wrote %s (%d rows, %d cols)", path.name, len(df), len(df.columns))
    return str(path)


def export_tables(
    tables: dict[str, pd.DataFrame],
    output_dir: str | Path,
    output_format: Literal["csv", "parquet"] = "csv",
    meta_df: pd.DataFrame | None = None,
) -> list[str]:
    """Write one file per unit table, then ``_meta`` if given.

    Args:
        tables: Unit label (``tonnes`` / ``usd``) -> cleaned table.
        output_dir: Target directory; created when missing.
        output_format: ``"csv"`` or ``"parquet"``.
        meta_df: Lineage table from ``build_meta_table``, or ``None``.

    Returns:
        Paths written, unit tables first and ``_meta`` last.

    Raises:
        ExportError: On an unknown format or a failed write.
    """
    if output_format not in _WRITERS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_WRITERS)}"
        )

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    written = [
        _write(df, out / f"{units}.{output_format}", output_format)
        for units, df in tables.items()
    ]
    if meta_df is not None:
        written.append(_write(meta_df, out / f"_meta.{output_format}", output_format))
    return written
