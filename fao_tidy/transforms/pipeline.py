"""
Transform pipeline orchestrator for fao-tidy.

Runs the fixed sequence of cleaning steps on a parsed long-format table:

1. **CountryFilter**: Drop aggregate rows (``Totals``, ``Yugoslavia SFR``).
2. **ValueNormalizer**: Translate FAO value codes, parse value/year.
3. **Arrange**: Drop ``trade_flow``, sort by country/commodity/year.
4. **ProductJoin**: Inner-join the commodity -> product lookup.
5. **RegionSplitter**: Split Netherlands Antilles across its successors.
6. **UnitRename**: Rename ``value`` to the unit label (tonnes / usd).

The pipeline receives the full ``CleanConfig`` so each step can read its
settings (``sub_0_0``, ``exclude_countries``, ``region_split``).

Returns a ``PipelineResult`` with the cleaned table plus the row
statistics the ``_meta`` table records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from fao_tidy.config import CleanConfig
from fao_tidy.transforms.lookup import JoinResult, join_products
from fao_tidy.transforms.regions import SplitResult, split_region
from fao_tidy.transforms.tidy import arrange_rows, drop_countries
from fao_tidy.transforms.units import rename_value_column
from fao_tidy.transforms.values import normalize_values

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Output of the transform pipeline.

    Attributes:
        df: The cleaned table, value column renamed to ``units``.
        units: Unit label the value column was renamed to.
        rows_in: Rows in the long-format input.
        rows_excluded: Rows removed by the country filter.
        join_result: Product join statistics.
        split_result: Region split outcome. ``None`` if splitting is
            disabled in config.
    """

    df: pd.DataFrame
    units: str
    rows_in: int
    rows_excluded: int
    join_result: JoinResult
    split_result: SplitResult | None = None

    @property
    def split_status(self) -> str:
        if self.split_result is None:
            return "disabled"
        return self.split_result.status


class TransformPipeline:
    """Orchestrates the sequence of cleaning transforms.

    The pipeline is **stateless** -- each call to ``run()`` processes a
    fresh DataFrame independently, so the same instance can be reused
    across source files.
    """

    def __init__(self, config: CleanConfig) -> None:
        self.config = config

    def run(
        self,
        df: pd.DataFrame,
        lookup: pd.DataFrame,
        units: str,
    ) -> PipelineResult:
        """Run all transforms on one long-format table.

        Args:
            df: Long-format table from a parser (all cells text).
            lookup: Commodity -> product lookup table.
            units: Unit label for the value column (``tonnes`` / ``usd``).

        Returns:
            ``PipelineResult`` with the cleaned table and row statistics.
        """
        cleaning = self.config.cleaning
        rows_in = len(df)

        # -- Step 1: Aggregate country filter ------------------------------
        logger.info("Step 1/6: Dropping countries %s", cleaning.exclude_countries)
        df = drop_countries(df, cleaning.exclude_countries)
        rows_excluded = rows_in - len(df)
        logger.info("  %d row(s) excluded", rows_excluded)

        # -- Step 2: Value normalization ------------------------------------
        logger.info("Step 2/6: Normalizing values (sub_0_0=%s)", cleaning.sub_0_0)
        df = normalize_values(df, sub_0_0=cleaning.sub_0_0)

        # -- Step 3: Drop trade_flow, sort -----------------------------------
        logger.info("Step 3/6: Arranging rows")
        df = arrange_rows(df)

        # -- Step 4: Product lookup join -------------------------------------
        logger.info("Step 4/6: Joining product lookup")
        join_result = join_products(df, lookup)
        df = join_result.df
        logger.info(
            "  Rows: %d total, %d dropped (no product)",
            join_result.rows_total,
            join_result.rows_dropped,
        )

        # -- Step 5: Region split (configurable) -----------------------------
        split_cfg = self.config.region_split
        split_result: SplitResult | None = None
        if split_cfg.enabled:
            logger.info("Step 5/6: Splitting '%s'", split_cfg.source_region)
            split_result = split_region(
                df,
                source_region=split_cfg.source_region,
                successors=split_cfg.successors,
                strict=split_cfg.strict,
            )
            df = split_result.df
        else:
            logger.info("Step 5/6: Region split SKIPPED (disabled in config)")

        # -- Step 6: Rename value column -------------------------------------
        logger.info("Step 6/6: Renaming value column to '%s'", units)
        df = rename_value_column(df, units)

        return PipelineResult(
            df=df,
            units=units,
            rows_in=rows_in,
            rows_excluded=rows_excluded,
            join_result=join_result,
            split_result=split_result,
        )
