"""
Exploratory profiling of the inventory table: duplicated product names,
category and stock distributions, and a cross-check of the stated discount
against the one implied by the prices.
"""

import logging
from typing import Callable

import pandas as pd

from .table import InventoryTable

logger = logging.getLogger(__name__)


def duplicate_product_names(table: InventoryTable) -> pd.DataFrame:
    """Product names listed under more than one SKU."""
    counts = table.df.groupby("name").size().rename("sku_count").reset_index()
    counts = counts[counts["sku_count"] > 1]
    return counts.sort_values("sku_count", ascending=False, kind="stable").reset_index(
        drop=True
    )


def category_product_counts(table: InventoryTable) -> pd.DataFrame:
    """Number of SKUs per category."""
    counts = (
        table.df.groupby("category", dropna=False).size().rename("product_count").reset_index()
    )
    return counts.sort_values("product_count", ascending=False, kind="stable").reset_index(
        drop=True
    )


def stock_status_counts(table: InventoryTable) -> pd.DataFrame:
    """In-stock versus out-of-stock SKU counts."""
    return (
        table.df.groupby("outOfStock", dropna=False)
        .size()
        .rename("product_count")
        .reset_index()
    )


def discount_consistency(table: InventoryTable) -> pd.DataFrame:
    """
    Compares discountPercent with the discount implied by mrp and the
    selling price, largest deviation first.
    """
    table.require_normalized()
    df = table.df[table.df["mrp"] > 0]
    result = df[["name", "mrp", "discountedSellingPrice", "discountPercent"]].copy()
    implied = (result["mrp"] - result["discountedSellingPrice"]) / result["mrp"] * 100
    result["calculated_discount_percent"] = implied.round(2)
    result["discount_deviation"] = (result["discountPercent"] - implied).abs().round(2)
    return result.sort_values(
        "discount_deviation", ascending=False, kind="stable"
    ).reset_index(drop=True)


PROFILE_CATALOG: dict[str, Callable[[InventoryTable], pd.DataFrame]] = {
    "duplicate_product_names": duplicate_product_names,
    "category_product_counts": category_product_counts,
    "stock_status_counts": stock_status_counts,
    "discount_consistency": discount_consistency,
}


def run_profile(table: InventoryTable) -> dict[str, pd.DataFrame]:
    """Runs every profiling check against the table."""
    results = {}
    for check_name, check in PROFILE_CATALOG.items():
        results[check_name] = check(table)
        logger.info(f"  > {check_name}: {len(results[check_name])} row(s)")
    return results
