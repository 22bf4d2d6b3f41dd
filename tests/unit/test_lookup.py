"""
Unit tests for the product lookup join (fao_tidy.transforms.lookup).
"""

from __future__ import annotations

import pandas as pd
import pytest

from fao_tidy.exceptions import SchemaError
from fao_tidy.transforms.lookup import join_products, load_product_lookup, validate_lookup


@pytest.fixture()
def lookup() -> pd.DataFrame:
    return pd.DataFrame({
        "commodity": ["Fish fillets", "Shrimps"],
        "product": ["fish_fillets", "crustaceans"],
    })


@pytest.fixture()
def table() -> pd.DataFrame:
    return pd.DataFrame({
        "country": ["Norway", "Norway", "Chile", "Chile"],
        "commodity": ["Shrimps", "Seaweed", "Fish fillets", "Shrimps"],
        "year": [2000, 2000, 2000, 2001],
        "value": [1.0, 2.0, 3.0, 4.0],
    })


class TestJoinProducts:
    """Tests for join_products()."""

    def test_product_column_added(self, table, lookup):
        result = join_products(table, lookup)
        assert "product" in result.df.columns
        norway = result.df[result.df["country"] == "Norway"]
        assert norway["product"].tolist() == ["crustaceans"]

    def test_unmatched_rows_dropped(self, table, lookup):
        """Inner join: Seaweed has no product and is dropped."""
        result = join_products(table, lookup)
        assert "Seaweed" not in set(result.df["commodity"])
        assert result.rows_total == 4
        assert result.rows_dropped == 1
        assert result.unmatched_commodities == ["Seaweed"]

    def test_left_order_preserved(self, table, lookup):
        result = join_products(table, lookup)
        assert result.df["value"].tolist() == [1.0, 3.0, 4.0]

    def test_unmatched_logged(self, table, lookup, caplog):
        join_products(table, lookup)
        assert "Seaweed" in caplog.text

    def test_missing_commodity_column_raises(self, lookup):
        with pytest.raises(SchemaError):
            join_products(pd.DataFrame({"country": ["Norway"]}), lookup)

    def test_duplicate_lookup_keys_raise(self, table):
        dup = pd.DataFrame({
            "commodity": ["Shrimps", "Shrimps"],
            "product": ["crustaceans", "shellfish"],
        })
        with pytest.raises(SchemaError, match="duplicate"):
            join_products(table, dup)


class TestValidateLookup:
    """Tests for validate_lookup()."""

    def test_extra_columns_dropped(self, lookup):
        lookup["notes"] = "x"
        assert list(validate_lookup(lookup).columns) == ["commodity", "product"]

    def test_missing_product_column(self):
        with pytest.raises(SchemaError, match="product"):
            validate_lookup(pd.DataFrame({"commodity": ["Shrimps"]}))


class TestLoadProductLookup:
    """Tests for load_product_lookup()."""

    def test_load(self, tmp_path):
        p = tmp_path / "c2p.csv"
        p.write_text("commodity,product\nShrimps,crustaceans\nSeaweed,\n", encoding="utf-8")
        lookup = load_product_lookup(p)
        assert len(lookup) == 2
        assert lookup["product"].iloc[0] == "crustaceans"
        assert pd.isna(lookup["product"].iloc[1])

    def test_na_text_is_not_missing(self, tmp_path):
        """Only empty cells are missing; 'NA' is a legitimate name."""
        p = tmp_path / "c2p.csv"
        p.write_text("commodity,product\nNA,other\n", encoding="utf-8")
        lookup = load_product_lookup(p)
        assert lookup["commodity"].iloc[0] == "NA"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_product_lookup(tmp_path / "nope.csv")
