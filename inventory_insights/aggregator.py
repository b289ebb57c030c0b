"""
The catalog of business questions answered over the cleaned inventory table.

Every query is a pure function: it reads the table, never mutates it, and
returns a fresh DataFrame. Queries can run in any order and any number of
times. Prices must already be in major currency units.
"""

import logging
from typing import Callable, Optional

import pandas as pd

from . import settings
from .table import InventoryTable

logger = logging.getLogger(__name__)


def _frame(table: InventoryTable) -> pd.DataFrame:
    table.require_normalized()
    return table.df


def _revenue(df: pd.DataFrame) -> pd.Series:
    return df["discountedSellingPrice"] * df["availableQuantity"]


def top_discounts(table: InventoryTable, n: int = settings.TOP_DISCOUNT_LIMIT) -> pd.DataFrame:
    """Q1: the n distinct products with the highest discount percentage."""
    df = _frame(table)
    cols = ["name", "mrp", "discountedSellingPrice", "discountPercent"]
    return (
        df[cols]
        .drop_duplicates()
        .sort_values("discountPercent", ascending=False, kind="stable")
        .head(n)
        .reset_index(drop=True)
    )


def revenue_by_category(table: InventoryTable) -> pd.DataFrame:
    """Q2: estimated revenue (selling price x available quantity) per category."""
    df = _frame(table)
    result = (
        df.assign(total_revenue=_revenue(df))
        .groupby("category", dropna=False)["total_revenue"]
        .sum()
        .reset_index()
    )
    return result.sort_values("total_revenue", ascending=False).reset_index(drop=True)


def high_mrp_out_of_stock(
    table: InventoryTable, threshold: float = settings.HIGH_MRP_OUT_OF_STOCK_THRESHOLD
) -> pd.DataFrame:
    """Q3: expensive products that are currently out of stock."""
    df = _frame(table)
    mask = df["outOfStock"].fillna(False).astype(bool) & (df["mrp"] > threshold)
    return (
        df.loc[mask, ["name", "mrp"]]
        .sort_values("mrp", ascending=False)
        .reset_index(drop=True)
    )


def average_discount_by_category(table: InventoryTable) -> pd.DataFrame:
    """Q4: mean discount percentage per category, rounded to 2 decimals."""
    df = _frame(table)
    result = (
        df.groupby("category", dropna=False)["discountPercent"]
        .mean()
        .round(2)
        .rename("avg_discount_percent")
        .reset_index()
    )
    # A group with no discount values has no average to rank.
    result = result.dropna(subset=["avg_discount_percent"])
    return result.sort_values("avg_discount_percent", ascending=False).reset_index(drop=True)


def best_value_products(table: InventoryTable) -> pd.DataFrame:
    """
    Q5: products whose price per gram is below the average price per gram.
    Only records with a positive weight take part, both in the average and
    in the result.
    """
    df = _frame(table)
    weighed = df[df["weightInGms"].fillna(0) > 0]
    cols = ["name", "weightInGms", "discountedSellingPrice", "price_per_gram"]
    if weighed.empty:
        return pd.DataFrame(columns=cols)

    ratio = weighed["discountedSellingPrice"] / weighed["weightInGms"].astype("float64")
    average_ratio = ratio.mean()
    selected = weighed.assign(price_per_gram=ratio)[ratio < average_ratio]
    selected = selected.sort_values("price_per_gram", ascending=True, kind="stable")
    selected["price_per_gram"] = selected["price_per_gram"].round(4)
    return selected[cols].reset_index(drop=True)


def inventory_weight_by_category(table: InventoryTable) -> pd.DataFrame:
    """Q6: total stocked weight (grams) per category."""
    df = _frame(table)
    result = (
        df.assign(total_inventory_weight_gms=df["weightInGms"] * df["availableQuantity"])
        .groupby("category", dropna=False)["total_inventory_weight_gms"]
        .sum()
        .reset_index()
    )
    return result.sort_values("total_inventory_weight_gms", ascending=False).reset_index(
        drop=True
    )


def out_of_stock_rate_by_category(table: InventoryTable) -> pd.DataFrame:
    """Q7: share of out-of-stock SKUs per category, as a percentage."""
    df = _frame(table)
    result = (
        df.assign(_oos=df["outOfStock"].fillna(False).astype(int))
        .groupby("category", dropna=False)
        .agg(total_products=("_oos", "size"), out_of_stock_products=("_oos", "sum"))
        .reset_index()
    )
    result["out_of_stock_rate_percent"] = (
        result["out_of_stock_products"] * 100.0 / result["total_products"]
    ).round(2)
    return result.sort_values("out_of_stock_rate_percent", ascending=False).reset_index(
        drop=True
    )


def top_revenue_products_per_category(
    table: InventoryTable, max_rank: int = settings.TOP_REVENUE_RANK
) -> pd.DataFrame:
    """
    Q8: the top revenue products inside each category using a dense rank.
    Tied revenues share a rank and the next revenue takes the next rank, so
    more than max_rank rows per category come back when ties reach the cut.
    """
    df = _frame(table)
    ranked = df[["category", "name"]].assign(revenue=_revenue(df))
    ranked["revenue_rank"] = (
        ranked.groupby("category", dropna=False)["revenue"]
        .rank(method="dense", ascending=False)
        .astype("Int64")
    )
    ranked = ranked[ranked["revenue_rank"].fillna(max_rank + 1) <= max_rank]
    return ranked.sort_values(["category", "revenue_rank"], kind="stable").reset_index(
        drop=True
    )


def low_discount_expensive_products(
    table: InventoryTable,
    mrp_threshold: float = settings.EXPENSIVE_MRP_THRESHOLD,
    discount_threshold: float = settings.LOW_DISCOUNT_THRESHOLD,
) -> pd.DataFrame:
    """Q9: high-MRP products that carry almost no discount."""
    df = _frame(table)
    mask = (df["mrp"] > mrp_threshold) & (df["discountPercent"] < discount_threshold)
    return (
        df.loc[mask.fillna(False), ["name", "mrp", "discountPercent"]]
        .sort_values("mrp", ascending=False)
        .reset_index(drop=True)
    )


def classify_weight(weight: Optional[float]) -> str:
    """Low below 1000 g, Medium from 1000 g to 5000 g inclusive, Bulk otherwise."""
    if weight is None or pd.isna(weight):
        return settings.BULK_WEIGHT_LABEL
    if weight < settings.LOW_WEIGHT_LIMIT_GMS:
        return settings.LOW_WEIGHT_LABEL
    if weight <= settings.BULK_WEIGHT_LIMIT_GMS:
        return settings.MEDIUM_WEIGHT_LABEL
    return settings.BULK_WEIGHT_LABEL


def weight_buckets(table: InventoryTable) -> pd.DataFrame:
    """Q10: each product tagged with its packaging weight bucket."""
    df = _frame(table)
    result = df[["name", "weightInGms"]].copy()
    result["weight_category"] = [classify_weight(w) for w in result["weightInGms"]]
    return result.reset_index(drop=True)


# --- Query Catalog ---
# Ordered registry of every analysis query. run_all walks it top to bottom.
QUERY_CATALOG: dict[str, Callable[[InventoryTable], pd.DataFrame]] = {
    "top_discounts": top_discounts,
    "revenue_by_category": revenue_by_category,
    "high_mrp_out_of_stock": high_mrp_out_of_stock,
    "average_discount_by_category": average_discount_by_category,
    "best_value_products": best_value_products,
    "inventory_weight_by_category": inventory_weight_by_category,
    "out_of_stock_rate_by_category": out_of_stock_rate_by_category,
    "top_revenue_products_per_category": top_revenue_products_per_category,
    "low_discount_expensive_products": low_discount_expensive_products,
    "weight_buckets": weight_buckets,
}


def run_all(table: InventoryTable) -> dict[str, pd.DataFrame]:
    """Runs the whole query catalog against the table."""
    results = {}
    for query_name, query in QUERY_CATALOG.items():
        results[query_name] = query(table)
        logger.info(f"  > {query_name}: {len(results[query_name])} row(s)")
    return results
