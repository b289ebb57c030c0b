"""
Data-quality checks over the inventory table.

Each rule is an independent predicate returning a boolean mask over the
table's rows. `validate` runs all of them and collects the offending ids;
it never mutates the table.
"""

import logging

import pandas as pd

from .schemas import ValidationReport
from .table import InventoryTable

logger = logging.getLogger(__name__)

# Columns that are nullable in the schema but should be populated for analysis.
COMPLETENESS_COLUMNS = [
    "category",
    "mrp",
    "discountPercent",
    "discountedSellingPrice",
    "availableQuantity",
    "weightInGms",
    "outOfStock",
    "quantity",
]


def _as_mask(series: pd.Series) -> pd.Series:
    return series.fillna(False).astype(bool)


def missing_required_fields(table: InventoryTable) -> pd.Series:
    """Rows without a product name."""
    names = table.df["name"]
    blank = names.astype(str).str.strip().eq("")
    return _as_mask(names.isna() | blank)


def price_inconsistent(table: InventoryTable) -> pd.Series:
    """Rows whose discounted selling price is above the MRP."""
    df = table.df
    return _as_mask(df["discountedSellingPrice"] > df["mrp"])


def non_positive_price(table: InventoryTable) -> pd.Series:
    """Rows with a zero or negative MRP or selling price."""
    df = table.df
    return _as_mask((df["mrp"] <= 0) | (df["discountedSellingPrice"] <= 0))


def stock_flag_mismatch(table: InventoryTable) -> pd.Series:
    """Rows where the out-of-stock flag disagrees with the available quantity."""
    df = table.df
    flag = df["outOfStock"]
    qty = df["availableQuantity"]
    flagged_but_stocked = _as_mask(flag) & _as_mask(qty > 0)
    unflagged_but_empty = _as_mask(flag.eq(False)) & _as_mask(qty == 0)
    return flagged_but_stocked | unflagged_but_empty


def incomplete_fields(table: InventoryTable) -> pd.Series:
    """Rows with a null in any column used by the analysis queries."""
    return _as_mask(table.df[COMPLETENESS_COLUMNS].isna().any(axis=1))


def validate(table: InventoryTable) -> ValidationReport:
    """Runs every data-quality rule and reports the offending record ids."""
    report = ValidationReport(
        missing_fields=table.ids_where(missing_required_fields(table)),
        price_inconsistent=table.ids_where(price_inconsistent(table)),
        non_positive_price=table.ids_where(non_positive_price(table)),
        stock_flag_mismatch=table.ids_where(stock_flag_mismatch(table)),
        incomplete_fields=table.ids_where(incomplete_fields(table)),
    )
    for category, count in report.summary().items():
        if count:
            logger.warning(f"  > ⚠️  {category}: {count} record(s)")
    if report.is_clean:
        logger.info("  > ✅ No data-quality violations found.")
    return report
