"""
Tests for the record loader: id assignment, null handling and the
structural errors that abort a load.
"""

import pandas as pd
import pytest

from inventory_insights.exceptions import MalformedRecordError
from inventory_insights.loader import load_csv_file, load_records


def test_assigns_sequential_ids_in_input_order(make_row):
    table = load_records([make_row(name="A"), make_row(name="B"), make_row(name="C")])

    assert table.ids == [1, 2, 3]
    assert list(table.df["name"]) == ["A", "B", "C"]


def test_new_table_is_not_normalized(make_row):
    table = load_records([make_row()])

    assert table.normalized is False
    # Prices are kept exactly as received (minor units).
    assert table.df.loc[0, "mrp"] == 10000
    assert table.df.loc[0, "discountedSellingPrice"] == 8000


def test_names_may_repeat(make_row):
    table = load_records([make_row(name="Milk"), make_row(name="Milk", mrp=5000)])

    assert len(table) == 2
    assert table.ids == [1, 2]


def test_non_numeric_price_names_the_row(make_row):
    rows = [make_row(), make_row(mrp="ten rupees"), make_row()]

    with pytest.raises(MalformedRecordError) as excinfo:
        load_records(rows)

    assert excinfo.value.row_index == 1
    assert excinfo.value.field == "mrp"
    assert "row 1" in str(excinfo.value)


def test_fractional_quantity_is_malformed(make_row):
    with pytest.raises(MalformedRecordError) as excinfo:
        load_records([make_row(availableQuantity=2.5)])

    assert excinfo.value.row_index == 0
    assert excinfo.value.field == "availableQuantity"


def test_unreadable_stock_flag_is_malformed(make_row):
    with pytest.raises(MalformedRecordError) as excinfo:
        load_records([make_row(), make_row(outOfStock="maybe")])

    assert excinfo.value.row_index == 1
    assert excinfo.value.field == "outOfStock"


def test_missing_column_is_malformed(make_row):
    row = make_row()
    del row["discountedSellingPrice"]

    with pytest.raises(MalformedRecordError) as excinfo:
        load_records([row])

    assert excinfo.value.field == "discountedSellingPrice"


def test_blank_cells_become_nulls(make_row):
    table = load_records([make_row(weightInGms="", category=None, name="  ")])

    assert pd.isna(table.df.loc[0, "weightInGms"])
    assert table.df.loc[0, "category"] is None
    assert table.df.loc[0, "name"] is None


def test_accepts_a_dataframe(make_row):
    df = pd.DataFrame([make_row(name="A"), make_row(name="B")], index=[10, 20])

    table = load_records(df)

    assert table.ids == [1, 2]


def test_empty_input_gives_empty_table():
    table = load_records([])

    assert len(table) == 0
    assert table.ids == []


def test_load_csv_file(tmp_path):
    csv_path = tmp_path / "zepto_inventory_2024-06-30.csv"
    csv_path.write_text(
        "category,name,mrp,discountPercent,availableQuantity,"
        "discountedSellingPrice,weightInGms,outOfStock,quantity\n"
        "Fruits & Vegetables,Onion,2500,16,3,2100,1000,false,1\n"
        "Beverages,Cola,,0,0,4000,,true,6\n",
        encoding="utf-8",
    )

    table = load_csv_file(csv_path)

    assert len(table) == 2
    assert table.source == csv_path.name
    assert table.df.loc[0, "mrp"] == 2500
    assert table.df.loc[0, "availableQuantity"] == 3
    assert bool(table.df.loc[1, "outOfStock"]) is True
    assert pd.isna(table.df.loc[1, "mrp"])
    assert pd.isna(table.df.loc[1, "weightInGms"])


def test_load_csv_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv_file(tmp_path / "nope.csv")
