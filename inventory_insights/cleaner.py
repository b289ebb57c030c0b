import logging
from enum import Enum

from . import settings
from .exceptions import AlreadyNormalizedError
from .table import InventoryTable
from .validator import non_positive_price, stock_flag_mismatch

logger = logging.getLogger(__name__)


class StockRepairStrategy(str, Enum):
    """Which side wins when the out-of-stock flag and the quantity disagree."""

    TRUST_QUANTITY = "trust_quantity"
    TRUST_FLAG = "trust_flag"


def normalize_units(table: InventoryTable) -> InventoryTable:
    """
    Converts prices from paise to rupees (divides by PRICE_UNIT_DIVISOR).
    Runs at most once per table: a second call raises AlreadyNormalizedError.
    """
    if table.normalized:
        raise AlreadyNormalizedError(
            "Prices have already been converted to major currency units."
        )

    for col in settings.PRICE_COLUMNS:
        table.df[col] = (table.df[col] / settings.PRICE_UNIT_DIVISOR).round(
            settings.PRICE_DECIMALS
        )
    table.normalized = True
    logger.info(
        f"  > Converted {', '.join(settings.PRICE_COLUMNS)} to major units "
        f"(÷{settings.PRICE_UNIT_DIVISOR}) for {len(table)} records."
    )
    return table


def purge_invalid_prices(table: InventoryTable) -> list[int]:
    """
    Permanently removes records with a zero or negative MRP or selling price.
    Must run after unit normalization. Returns the removed ids.
    """
    table.require_normalized()

    mask = non_positive_price(table)
    removed = table.ids_where(mask)
    if removed:
        table.df = table.df.loc[~mask].reset_index(drop=True)
        logger.info(f"  > Removed {len(removed)} record(s) with invalid pricing.")
    else:
        logger.info("  > No invalid pricing found.")
    return removed


def clean(table: InventoryTable) -> InventoryTable:
    """Unit normalization followed by the invalid-price purge, in that order."""
    if table.normalized:
        logger.info("  > Prices already normalized. Skipping unit conversion.")
    else:
        normalize_units(table)
    purge_invalid_prices(table)
    return table


def repair_stock_flags_trust_quantity(table: InventoryTable) -> list[int]:
    """Recomputes outOfStock from availableQuantity. Returns the changed ids."""
    mask = stock_flag_mismatch(table)
    changed = table.ids_where(mask)
    table.df.loc[mask, "outOfStock"] = table.df.loc[mask, "availableQuantity"] == 0
    logger.info(f"  > Stock flags recomputed from quantity for {len(changed)} record(s).")
    return changed


def repair_stock_flags_trust_flag(table: InventoryTable) -> tuple[list[int], list[int]]:
    """
    Zeroes availableQuantity where the record is flagged out of stock.
    A record flagged in stock with zero quantity has no quantity to restore,
    so it is returned as unresolved instead.
    Returns (changed ids, unresolved ids).
    """
    df = table.df
    mask = stock_flag_mismatch(table)
    flagged = mask & df["outOfStock"].fillna(False).astype(bool)
    unresolved_mask = mask & ~flagged

    changed = table.ids_where(flagged)
    unresolved = table.ids_where(unresolved_mask)
    df.loc[flagged, "availableQuantity"] = 0

    logger.info(f"  > Quantities zeroed from stock flag for {len(changed)} record(s).")
    if unresolved:
        logger.warning(
            f"  > ⚠️  {len(unresolved)} record(s) flagged in stock with zero quantity left as is."
        )
    return changed, unresolved


def repair_stock_flags(table: InventoryTable, strategy: StockRepairStrategy) -> list[int]:
    """Applies the chosen stock-flag repair strategy. Returns the changed ids."""
    strategy = StockRepairStrategy(strategy)
    if strategy is StockRepairStrategy.TRUST_QUANTITY:
        return repair_stock_flags_trust_quantity(table)
    changed, _ = repair_stock_flags_trust_flag(table)
    return changed
