"""
Demo script: clean all FAO commodity exports in data/raw via the public API.

Usage:
    uv run python scripts/run_clean.py                      # uses faoconfig.yaml
    uv run python scripts/run_clean.py path/to/config.yaml
    uv run python scripts/run_clean.py --force              # regenerate the config

On first run (no config yet), a default faoconfig.yaml is generated for
data/raw + data/commodities2products.csv and the pipeline is run.
On subsequent runs, the existing config is loaded (edit it to change the
'0 0' substitute, excluded countries, output format, ...).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_CONFIG = "faoconfig.yaml"
INPUT_DIR = "data/raw"
LOOKUP_PATH = "data/commodities2products.csv"
OUTPUT_DIR = "data"

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_clean")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import fao_tidy

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    force = "--force" in sys.argv
    config_path = args[0] if args else DEFAULT_CONFIG

    if force or not Path(config_path).exists():
        log.info("Generating %s for %s", config_path, INPUT_DIR)
        written = fao_tidy.init(
            input_dir=INPUT_DIR,
            lookup_path=LOOKUP_PATH,
            output_dir=OUTPUT_DIR,
            config_path=config_path,
        )
    else:
        written = fao_tidy.run(config_path)

    for path in written:
        log.info("  wrote %s", path)
    log.info("All files processed.")


if __name__ == "__main__":
    main()
