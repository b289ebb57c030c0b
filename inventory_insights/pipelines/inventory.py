import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from inventory_insights import aggregator, cleaner, loader, profiling, settings, utils, validator
from inventory_insights.cleaner import StockRepairStrategy
from inventory_insights.pipeline import DataPipeline
from inventory_insights.schemas import ValidationReport
from inventory_insights.table import InventoryTable

logger = logging.getLogger(__name__)


def _report_frame(report: ValidationReport) -> pd.DataFrame:
    """One row per violation category, with the count and the offending ids."""
    dumped = report.model_dump(by_alias=True)
    return pd.DataFrame(
        [
            {"violation": name, "count": len(ids), "sku_ids": " ".join(map(str, ids))}
            for name, ids in dumped.items()
        ]
    )


class InventoryAnalysisPipeline(DataPipeline):
    def __init__(
        self,
        input_path: Optional[Path] = None,
        test_mode: bool = False,
        stock_repair: Optional[StockRepairStrategy] = None,
    ):
        super().__init__("inventory_analysis", test_mode=test_mode)
        self.report_name = settings.REPORT_NAME
        self.input_path = input_path
        self.stock_repair = StockRepairStrategy(stock_repair) if stock_repair else None
        self.pre_clean_report: Optional[ValidationReport] = None
        self.post_clean_report: Optional[ValidationReport] = None
        self.table: Optional[InventoryTable] = None

    def extract(self) -> Optional[InventoryTable]:
        logger.info("--- Starting Inventory Analysis ---")

        if self.input_path is not None:
            path = Path(self.input_path)
            report_date = utils.parse_report_date(path, settings.INVENTORY_FILENAME_PREFIX)
        else:
            found_info = utils.find_latest_report(
                settings.INPUT_DIR, settings.INVENTORY_FILENAME_PREFIX
            )
            if not found_info:
                logger.error(
                    f"  > ERROR: No '{settings.INVENTORY_FILENAME_PREFIX}*.csv' report in {settings.INPUT_DIR}."
                )
                self.status_summary["source"] = None
                return None
            path, report_date = found_info

        logger.info(f"  > Found: {path.name} (Report Date: {report_date or 'unknown'})")

        # MalformedRecordError propagates: a broken export must not be half-loaded.
        table = loader.load_csv_file(path)

        self.status_summary["source"] = path.name
        self.status_summary["report_date"] = report_date
        self.status_summary["records_loaded"] = len(table)
        return table

    def transform(self, table: InventoryTable) -> Optional[dict[str, pd.DataFrame]]:
        logger.info("\n--- Validating Raw Data ---")
        self.pre_clean_report = validator.validate(table)

        logger.info("\n--- Cleaning Data ---")
        cleaner.clean(table)
        if self.stock_repair is not None:
            logger.info(f"Repairing stock flags ({self.stock_repair.value})...")
            cleaner.repair_stock_flags(table, self.stock_repair)

        logger.info("\n--- Validating Cleaned Data ---")
        self.post_clean_report = validator.validate(table)
        if self.post_clean_report.non_positive_price:
            logger.error("❌ Invalid prices survived cleaning!")
            return None

        self.table = table
        self.status_summary["records_after_cleaning"] = len(table)

        logger.info("\n--- Profiling ---")
        results = {
            "validation_raw": _report_frame(self.pre_clean_report),
            "validation_clean": _report_frame(self.post_clean_report),
        }
        results.update(profiling.run_profile(table))

        logger.info("\n--- Running Analysis Queries ---")
        results.update(aggregator.run_all(table))
        return results


def run_inventory_analysis(
    input_path: Optional[Path] = None,
    test_mode: bool = False,
    stock_repair: Optional[StockRepairStrategy] = None,
) -> Optional[dict[str, pd.DataFrame]]:
    """Convenience wrapper used by the command line."""
    pipeline = InventoryAnalysisPipeline(
        input_path=input_path, test_mode=test_mode, stock_repair=stock_repair
    )
    return pipeline.run()
