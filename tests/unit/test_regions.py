"""
Unit tests for the region splitter (fao_tidy.transforms.regions).

Tests the Netherlands Antilles fan-out, value conservation, the
"already split" guard (including strict mode), and schema checks.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from fao_tidy.exceptions import SchemaError, SplitConflictError
from fao_tidy.transforms.regions import SplitResult, split_region

SUCCESSORS = ["Bonaire", "Saba", "Sint Maarten", "Sint Eustatius"]


def _make_df(rows: list[tuple]) -> pd.DataFrame:
    """Helper: (country, commodity, product, year, value) tuples -> DataFrame."""
    df = pd.DataFrame(rows, columns=["country", "commodity", "product", "year", "value"])
    df["year"] = df["year"].astype("Int64")
    df["value"] = df["value"].astype("float64")
    return df


class TestSplitRegion:
    """Tests for split_region()."""

    @pytest.fixture()
    def sample_df(self) -> pd.DataFrame:
        return _make_df([
            ("Aruba", "X", "P", 2000, 5.0),
            ("Netherlands Antilles", "X", "P", 2000, 100.0),
            ("Netherlands Antilles", "X", "P", 2001, 40.0),
            ("Netherlands Antilles", "Y", "Q", 2000, np.nan),
            ("Norway", "Y", "Q", 2000, 7.5),
        ])

    # -----------------------------------------------------------------
    # Fan-out
    # -----------------------------------------------------------------

    def test_single_row_becomes_four_quarters(self):
        """One Netherlands Antilles row -> four successor rows of 25."""
        df = _make_df([("Netherlands Antilles", "X", "P", 2000, 100.0)])
        result = split_region(df)

        assert isinstance(result, SplitResult)
        assert result.performed
        out = result.df
        assert len(out) == 4
        assert out["country"].tolist() == SUCCESSORS
        assert out["value"].tolist() == [25.0] * 4
        assert (out["commodity"] == "X").all()
        assert (out["product"] == "P").all()
        assert (out["year"] == 2000).all()
        assert "Netherlands Antilles" not in set(out["country"])

    def test_value_conservation(self, sample_df: pd.DataFrame):
        """The successor shares sum back to the original value."""
        out = split_region(sample_df).df
        shares = out[out["country"].isin(SUCCESSORS)]
        sums = shares.groupby(["commodity", "year"])["value"].sum(min_count=1)
        assert sums.loc[("X", 2000)] == pytest.approx(100.0)
        assert sums.loc[("X", 2001)] == pytest.approx(40.0)
        x2001 = shares[(shares["commodity"] == "X") & (shares["year"] == 2001)]
        assert x2001["value"].tolist() == [10.0] * 4

    def test_missing_value_stays_missing(self, sample_df: pd.DataFrame):
        out = split_region(sample_df).df
        y = out[(out["commodity"] == "Y") & out["country"].isin(SUCCESSORS)]
        assert len(y) == 4
        assert y["value"].isna().all()

    def test_row_count(self, sample_df: pd.DataFrame):
        """rows_out = rows_in - source_rows + 4 * source_rows."""
        result = split_region(sample_df)
        assert result.rows_removed == 3
        assert result.rows_added == 12
        assert len(result.df) == len(sample_df) - 3 + 12

    def test_successor_rows_appended_in_order(self, sample_df: pd.DataFrame):
        out = split_region(sample_df).df
        assert out["country"].iloc[:2].tolist() == ["Aruba", "Norway"]
        appended = out["country"].iloc[2:].tolist()
        assert appended == [name for name in SUCCESSORS for _ in range(3)]

    def test_other_rows_untouched(self, sample_df: pd.DataFrame):
        out = split_region(sample_df).df
        others_after = out[~out["country"].isin(SUCCESSORS)].reset_index(drop=True)
        others_before = sample_df[
            sample_df["country"] != "Netherlands Antilles"
        ].reset_index(drop=True)
        pd.testing.assert_frame_equal(others_after, others_before)

    def test_extra_columns_are_carried(self):
        df = _make_df([("Netherlands Antilles", "X", "P", 2000, 8.0)])
        df["note"] = "kept"
        out = split_region(df).df
        assert (out["note"] == "kept").all()

    def test_does_not_mutate_input(self, sample_df: pd.DataFrame):
        before = sample_df.copy()
        split_region(sample_df)
        pd.testing.assert_frame_equal(sample_df, before)

    # -----------------------------------------------------------------
    # Guard
    # -----------------------------------------------------------------

    def test_idempotent(self, sample_df: pd.DataFrame):
        """Applying the split twice equals applying it once."""
        once = split_region(sample_df)
        twice = split_region(once.df)
        assert twice.status == "already_split"
        assert not twice.performed
        pd.testing.assert_frame_equal(twice.df, once.df)

    def test_any_successor_present_skips(self, sample_df: pd.DataFrame):
        """Partial presence also short-circuits (non-strict mode)."""
        df = pd.concat(
            [sample_df, _make_df([("Saba", "X", "P", 2000, 1.0)])],
            ignore_index=True,
        )
        result = split_region(df)
        assert result.status == "already_split"
        assert result.df is df
        assert result.rows_added == 0

    def test_strict_partial_presence_raises(self, sample_df: pd.DataFrame):
        df = pd.concat(
            [sample_df, _make_df([("Saba", "X", "P", 2000, 1.0)])],
            ignore_index=True,
        )
        with pytest.raises(SplitConflictError):
            split_region(df, strict=True)

    def test_strict_full_presence_skips(self):
        df = _make_df([(name, "X", "P", 2000, 1.0) for name in SUCCESSORS])
        result = split_region(df, strict=True)
        assert result.status == "already_split"

    def test_no_source_rows_is_noop(self):
        df = _make_df([("Norway", "X", "P", 2000, 1.0)])
        result = split_region(df)
        assert result.status == "no_source_rows"
        assert not result.performed
        pd.testing.assert_frame_equal(result.df, df)

    # -----------------------------------------------------------------
    # Configuration and schema
    # -----------------------------------------------------------------

    def test_custom_region_and_successors(self):
        df = _make_df([("Serbia and Montenegro", "X", "P", 2000, 10.0)])
        result = split_region(
            df,
            source_region="Serbia and Montenegro",
            successors=["Serbia", "Montenegro"],
        )
        assert result.df["country"].tolist() == ["Serbia", "Montenegro"]
        assert result.df["value"].tolist() == [5.0, 5.0]

    def test_missing_product_column_raises(self):
        df = _make_df([("Netherlands Antilles", "X", "P", 2000, 1.0)]).drop(columns="product")
        with pytest.raises(SchemaError, match="product"):
            split_region(df)

    def test_empty_table(self):
        df = _make_df([])
        result = split_region(df)
        assert result.status == "no_source_rows"
        assert len(result.df) == 0

    def test_empty_successors_raises(self):
        df = _make_df([("Netherlands Antilles", "X", "P", 2000, 1.0)])
        with pytest.raises(SchemaError, match="no successor"):
            split_region(df, successors=[])
