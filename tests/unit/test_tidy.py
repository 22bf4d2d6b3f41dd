"""
Unit tests for row filtering and ordering (fao_tidy.transforms.tidy).
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from fao_tidy.exceptions import SchemaError
from fao_tidy.transforms.tidy import arrange_rows, drop_countries


class TestDropCountries:
    """Tests for drop_countries()."""

    def test_aggregates_removed(self):
        df = pd.DataFrame({"country": ["Totals", "Norway", "Yugoslavia SFR", "Chile"]})
        result = drop_countries(df, ["Totals", "Yugoslavia SFR"])
        assert result["country"].tolist() == ["Norway", "Chile"]

    def test_empty_list_is_noop(self):
        df = pd.DataFrame({"country": ["Totals"]})
        assert drop_countries(df, []) is df


class TestArrangeRows:
    """Tests for arrange_rows()."""

    @pytest.fixture()
    def df(self) -> pd.DataFrame:
        return pd.DataFrame({
            "country": ["Norway", "Chile", "Chile", "Chile", "Chile"],
            "commodity": ["X", "X", "X", "X", "A"],
            "trade_flow": ["Exports"] * 5,
            "year": pd.array([2000, 2002, 2001, 2000, 2000], dtype="Int64"),
            "value": [1.0, 2.0, np.nan, 3.0, 4.0],
        })

    def test_trade_flow_dropped(self, df):
        assert "trade_flow" not in arrange_rows(df).columns

    def test_sort_order(self, df):
        """Country, commodity, then present values before missing, then year."""
        result = arrange_rows(df)
        assert result["country"].tolist() == ["Chile", "Chile", "Chile", "Chile", "Norway"]
        assert result["commodity"].tolist() == ["A", "X", "X", "X", "X"]
        assert result["year"].tolist() == [2000, 2000, 2002, 2001, 2000]

    def test_helper_column_removed(self, df):
        assert "_missing" not in arrange_rows(df).columns

    def test_custom_drop_columns(self, df):
        result = arrange_rows(df, drop_columns=[])
        assert "trade_flow" in result.columns

    def test_missing_sort_column_raises(self, df):
        with pytest.raises(SchemaError):
            arrange_rows(df.drop(columns="year"))
