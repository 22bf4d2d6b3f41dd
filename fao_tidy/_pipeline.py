"""
Internal pipeline orchestration for fao-tidy.

Extracted from ``__init__.py`` so that both ``init()`` and ``run()`` can
reuse the same parse -> transform -> meta -> export sequence.

This module is **not** part of the public API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from fao_tidy.config import CleanConfig, resolve_input_files
from fao_tidy.exceptions import ConfigValidationError
from fao_tidy.export import export_tables
from fao_tidy.meta import build_meta_row, build_meta_table
from fao_tidy.parsers.base import ParseResult
from fao_tidy.parsers.wide import FaoWideParser
from fao_tidy.transforms.lookup import load_product_lookup
from fao_tidy.transforms.pipeline import PipelineResult, TransformPipeline
from fao_tidy.transforms.units import detect_units

logger = logging.getLogger(__name__)


@dataclass
class CleanResult:
    """Everything produced while cleaning one source file."""

    parse_result: ParseResult
    pipeline_result: PipelineResult

    @property
    def df(self) -> pd.DataFrame:
        return self.pipeline_result.df

    @property
    def units(self) -> str:
        return self.pipeline_result.units


def clean_file(
    path: str | Path,
    lookup: pd.DataFrame,
    config: CleanConfig,
) -> CleanResult:
    """Parse and clean a single FAO export in memory.

    The unit label comes from ``config.source.units`` when set, otherwise
    from the file name.

    Raises:
        ParsingError: If the file is malformed or its unit is ambiguous.
        SchemaError: If the lookup is invalid.
    """
    path = Path(path)
    units = config.source.units or detect_units(path)

    parse_result = FaoWideParser().parse(path)
    pipeline_result = TransformPipeline(config).run(
        parse_result.df,
        lookup=lookup,
        units=units,
    )
    logger.info(
        "Cleaned %s: %d rows -> %d rows (%s)",
        path.name,
        pipeline_result.rows_in,
        len(pipeline_result.df),
        units,
    )
    return CleanResult(parse_result=parse_result, pipeline_result=pipeline_result)


def run_pipeline_and_export(config: CleanConfig) -> list[str]:
    """Clean every source file in the config and export the results.

    Steps:
      1. Resolve source files and load the product lookup.
      2. Clean each file independently.
      3. Build the ``_meta`` DataFrame (if enabled).
      4. Export all tables (+ ``_meta``) to disk.

    Returns:
        List of output file paths that were written.

    Raises:
        ConfigValidationError: If no files match, or two files map to the
            same unit label (their outputs would overwrite each other).
    """
    # 1. Inputs
    files = resolve_input_files(config)
    lookup = load_product_lookup(config.source.lookup_path)

    # 2. Clean each file
    tables: dict[str, pd.DataFrame] = {}
    sources: dict[str, str] = {}
    meta_rows: list[dict] = []
    for path in files:
        logger.info("Processing: %s", path.name)
        result = clean_file(path, lookup, config)
        if result.units in tables:
            raise ConfigValidationError(
                f"Both '{sources[result.units]}' and '{path.name}' produce "
                f"the '{result.units}' table; outputs would overwrite each other"
            )
        tables[result.units] = result.df
        sources[result.units] = path.name
        meta_rows.append(build_meta_row(config, result.parse_result, result.pipeline_result))

    # 3. _meta
    meta_df = build_meta_table(meta_rows) if config.output.write_meta else None

    # 4. Export
    written = export_tables(
        tables=tables,
        output_dir=config.output.output_dir,
        output_format=config.output.output_format,
        meta_df=meta_df,
    )

    logger.info("Pipeline complete: wrote %d files", len(written))
    return written
