"""
Configuration models and YAML I/O for fao-tidy.

This module defines the Pydantic models that map 1:1 to faoconfig.yaml,
plus helper functions for loading, saving, and auto-generating the config.

Key models:
- CleanConfig: Top-level config (source + cleaning + region_split + output).
- SourceConfig: Where the raw FAO exports and the commodity lookup live.
- CleaningConfig: Value normalization and aggregate-row exclusion settings.
- RegionSplitConfig: Which deprecated region is split into which successors.
- OutputConfig: Output directory, format, and _meta toggle.

Key functions:
- load_config(path) -> CleanConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- generate_default_config(...) -> CleanConfig: Build a config for a data directory.
- resolve_input_files(config) -> list[Path]: Expand the source glob.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from fao_tidy.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_COUNTRIES = ["Totals", "Yugoslavia SFR"]
DEFAULT_SOURCE_REGION = "Netherlands Antilles"
DEFAULT_SUCCESSORS = ["Bonaire", "Saba", "Sint Maarten", "Sint Eustatius"]


class SourceConfig(BaseModel):
    """Source file information."""

    input_dir: str = Field(..., description="Directory holding raw FAO CSV exports")
    pattern: str = Field("*.csv", description="Glob for source files inside input_dir")
    lookup_path: str = Field(
        ..., description="CSV mapping commodity -> product (columns: commodity, product)"
    )
    units: Literal["tonnes", "usd"] | None = Field(
        None,
        description=(
            "Force the unit label for every source file. If None, the unit "
            "is derived from the file name ('quant' -> tonnes, 'value' -> usd)."
        ),
    )


class CleaningConfig(BaseModel):
    """Value normalization settings."""

    sub_0_0: float = Field(
        0.1,
        ge=0,
        description="Substitute for FAO's '0 0' code (> 0 but < half a unit)",
    )
    exclude_countries: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_COUNTRIES),
        description="Aggregate or defunct rows dropped before normalization",
    )


class RegionSplitConfig(BaseModel):
    """Deprecated-region redistribution settings."""

    enabled: bool = True
    source_region: str = DEFAULT_SOURCE_REGION
    successors: list[str] = Field(default_factory=lambda: list(DEFAULT_SUCCESSORS))
    strict: bool = Field(
        False,
        description=(
            "If True, fail when only some successors are already present "
            "instead of silently skipping the split"
        ),
    )

    @model_validator(mode="after")
    def _check_successors(self) -> RegionSplitConfig:
        if not self.successors:
            raise ValueError("region_split.successors must not be empty.")
        if len(set(self.successors)) != len(self.successors):
            raise ValueError(
                f"region_split.successors contains duplicates: {self.successors}"
            )
        if self.source_region in self.successors:
            raise ValueError(
                f"Source region '{self.source_region}' cannot also be a successor."
            )
        return self


class OutputConfig(BaseModel):
    """Output settings."""

    output_dir: str = Field("outputs/", description="Directory for output files")
    output_format: Literal["csv", "parquet"] = Field("csv", description="Output format")
    write_meta: bool = Field(True, description="If True, also write the _meta table")


class CleanConfig(BaseModel):
    """Top-level configuration for fao-tidy.

    Maps 1:1 to faoconfig.yaml.
    """

    source: SourceConfig
    cleaning: CleaningConfig = Field(default_factory=CleaningConfig)
    region_split: RegionSplitConfig = Field(default_factory=RegionSplitConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: str | Path) -> CleanConfig:
    """Load and validate faoconfig.yaml into a CleanConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return CleanConfig.model_validate(raw)


def save_config(config: CleanConfig, path: str | Path) -> None:
    """Serialize a CleanConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# fao-tidy configuration\n")
        f.write("# Edit this file to change value codes, region splits, output format, etc.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def generate_default_config(
    input_dir: str,
    lookup_path: str,
    output_dir: str = "outputs/",
) -> CleanConfig:
    """Build a CleanConfig with default cleaning rules for a data directory."""
    return CleanConfig(
        source=SourceConfig(input_dir=input_dir, lookup_path=lookup_path),
        output=OutputConfig(output_dir=output_dir),
    )


def resolve_input_files(config: CleanConfig) -> list[Path]:
    """Return the sorted list of source files matched by the config.

    The lookup file is excluded even when it sits in ``input_dir`` and
    matches the glob.

    Raises:
        ConfigValidationError: If no files match.
    """
    input_dir = Path(config.source.input_dir)
    lookup = Path(config.source.lookup_path).resolve()
    files = sorted(
        p for p in input_dir.glob(config.source.pattern)
        if p.is_file() and p.resolve() != lookup
    )
    if not files:
        raise ConfigValidationError(
            f"No source files matching '{config.source.pattern}' in {input_dir}"
        )
    logger.info("Found %d source file(s) in %s", len(files), input_dir)
    return files
