"""
fao-tidy: clean FAO fisheries commodity trade exports into tidy tables.

Public API surface:

- ``init(...)`` -- First-run workflow. Generates ``faoconfig.yaml`` for a
  directory of raw exports and optionally builds the outputs.

- ``run(...)`` -- Subsequent-run workflow. Loads and validates
  ``faoconfig.yaml``, then rebuilds every output table.

- ``clean_file(...)`` -- Clean a single export in memory (no I/O besides
  reading the file); returns a ``CleanResult``.

- ``normalize_values`` / ``split_region`` -- the two core transforms, for
  callers that already hold a long-format DataFrame.
"""

from __future__ import annotations

import logging

from fao_tidy._pipeline import CleanResult, clean_file, run_pipeline_and_export
from fao_tidy.config import generate_default_config, load_config, save_config
from fao_tidy.transforms.regions import SplitResult, split_region
from fao_tidy.transforms.values import normalize_values

__all__ = [
    "init",
    "run",
    "clean_file",
    "CleanResult",
    "normalize_values",
    "split_region",
    "SplitResult",
]

logger = logging.getLogger(__name__)


def init(
    input_dir: str,
    lookup_path: str,
    output_dir: str = "outputs/",
    config_path: str = "faoconfig.yaml",
    run_immediately: bool = True,
) -> list[str]:
    """First-run entry point: generate config, optionally build outputs.

    Args:
        input_dir: Directory holding the raw FAO CSV exports.
        lookup_path: CSV mapping ``commodity`` -> ``product``.
        output_dir: Directory where cleaned tables will be written.
        config_path: Where to write the generated faoconfig.yaml.
        run_immediately: If True, also run the pipeline after writing the
            config. If False, only generate the config file and stop.

    Returns:
        Paths of the files written by the pipeline (empty when
        *run_immediately* is False).
    """
    logger.info("init() -- input_dir=%s, output_dir=%s", input_dir, output_dir)

    config = generate_default_config(
        input_dir=input_dir,
        lookup_path=lookup_path,
        output_dir=output_dir,
    )
    save_config(config, config_path)

    if not run_immediately:
        return []
    logger.info("run_immediately=True -- running pipeline")
    return run_pipeline_and_export(config)


def run(config_path: str = "faoconfig.yaml") -> list[str]:
    """Subsequent-run entry point: load config, rebuild every output table.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        pydantic.ValidationError: If config fails Pydantic validation.
        ConfigValidationError: If the config matches no source files.
        ParsingError: If a source file is malformed.
        SchemaError: If the lookup is invalid.
        ExportError: If writing outputs fails.
    """
    logger.info("run() -- config_path=%s", config_path)
    config = load_config(config_path)
    return run_pipeline_and_export(config)
