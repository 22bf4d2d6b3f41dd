"""
Base parser protocol / ABC for fao-tidy.

The contract is:
1. parse() takes a file path and returns a ParseResult.
2. ParseResult contains the long-format DataFrame (all cells still text)
   plus the bookkeeping the _meta table needs (row counts, year labels).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd


@dataclass
class ParseResult:
    """Standardized output from any parser.

    Attributes:
        df: Long-format DataFrame with columns ``country``, ``commodity``,
            ``trade_flow``, ``year``, ``value``. Every cell is a string.
        source_path: The file that was parsed.
        rows_wide: Number of data rows in the wide source table.
        year_columns: The year labels found in the header, in file order.
    """
    df: pd.DataFrame
    source_path: Path
    rows_wide: int = 0
    year_columns: list[str] = field(default_factory=list)


class BaseParser(ABC):
    """Abstract base class for FAO export parsers."""

    @abstractmethod
    def parse(self, path: str | Path) -> ParseResult:
        """Parse an FAO export file.

        Raises:
            ParsingError: If the file structure is unexpected.
        """
