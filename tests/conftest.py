"""
Shared test fixtures and sample data for fao-tidy tests.

The sample raw export mimics a FishStat commodity trade CSV: identifier
columns with FAO's ``Name (Name)`` headers, one column per year, and the
usual value codes (``F`` flags, ``...``, ``0 0``, ``-``, blanks).
"""

from __future__ import annotations

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample data -- edit here to change what the fixtures write
# ---------------------------------------------------------------------------
RAW_EXPORT = """\
Country (Country),Commodity (Commodity),Trade flow (Trade flow),2000,2001
Netherlands Antilles,Fish fillets,Exports,100,... F
Netherlands Antilles,Shrimps,Exports,0 0,-
Norway,Fish fillets,Exports,1500 F,1600
Norway,Seaweed,Exports,12,
Totals,Fish fillets,Exports,1600,1600
"""

LOOKUP = """\
commodity,product
Fish fillets,fish_fillets
Shrimps,crustaceans
"""

SUCCESSORS = ["Bonaire", "Saba", "Sint Maarten", "Sint Eustatius"]


@pytest.fixture()
def raw_dir(tmp_path: Path) -> Path:
    """A directory with one quantity and one value export."""
    d = tmp_path / "raw"
    d.mkdir()
    (d / "commodities_quantity.csv").write_text(RAW_EXPORT, encoding="utf-8")
    (d / "commodities_value.csv").write_text(RAW_EXPORT, encoding="utf-8")
    return d


@pytest.fixture()
def lookup_csv(tmp_path: Path) -> Path:
    """The commodity -> product lookup file."""
    p = tmp_path / "commodities2products.csv"
    p.write_text(LOOKUP, encoding="utf-8")
    return p


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the full file pipeline)",
    )
