"""
Meta table builder for fao-tidy.

Builds the flat _meta table that is output alongside the cleaned tables.
One row per source file.

Purpose:
  The _meta table is DESCRIPTIVE -- it records what the pipeline did to
  each file (data lineage), complementing faoconfig.yaml which is
  PRESCRIPTIVE (records what the user wants).

  Key information captured:
  - Source-level: filename, hash, unit label, output table name.
  - Processing: row counts at each step, whether the region split ran,
    the '0 0' substitute used, timestamp.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from fao_tidy.config import CleanConfig
from fao_tidy.parsers.base import ParseResult
from fao_tidy.transforms.pipeline import PipelineResult

logger = logging.getLogger(__name__)

META_COLUMNS = [
    "table_name", "source_file", "source_hash", "units", "sub_0_0",
    "rows_wide", "rows_long", "rows_excluded", "rows_unmatched",
    "unmatched_commodities", "split_status", "split_rows_removed",
    "split_rows_added", "rows_out", "processed_at",
]


def _compute_file_hash(path: Path) -> str:
    """Compute SHA-256 hash of a file for reproducibility tracking."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def build_meta_row(
    config: CleanConfig,
    parse_result: ParseResult,
    pipeline_result: PipelineResult,
) -> dict:
    """Describe one cleaned source file as a _meta row."""
    source_path = Path(parse_result.source_path)
    try:
        source_hash = _compute_file_hash(source_path)
    except FileNotFoundError:
        logger.warning(
            "Source file not found for hashing: %s (using empty hash)",
            source_path,
        )
        source_hash = ""

    split = pipeline_result.split_result
    join = pipeline_result.join_result
    return {
        "table_name": pipeline_result.units,
        "source_file": source_path.name,
        "source_hash": source_hash,
        "units": pipeline_result.units,
        "sub_0_0": config.cleaning.sub_0_0,
        "rows_wide": parse_result.rows_wide,
        "rows_long": pipeline_result.rows_in,
        "rows_excluded": pipeline_result.rows_excluded,
        "rows_unmatched": join.rows_dropped,
        "unmatched_commodities": "; ".join(join.unmatched_commodities),
        "split_status": pipeline_result.split_status,
        "split_rows_removed": split.rows_removed if split is not None else 0,
        "split_rows_added": split.rows_added if split is not None else 0,
        "rows_out": len(pipeline_result.df),
        "processed_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }


def build_meta_table(rows: list[dict]) -> pd.DataFrame:
    """Assemble _meta rows into a DataFrame with a fixed column order.

    Explicit columns keep the schema stable even when *rows* is empty.
    """
    logger.info("Built _meta table: %d rows", len(rows))
    return pd.DataFrame(rows, columns=META_COLUMNS)
