import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Optional

from . import data_handler

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode
        self.report_name = f"{report_type}_report"
        # Status summary tracks the date of the data behind each run
        self.status_summary: dict[str, Any] = {}

    def run(self) -> Optional[dict[str, Any]]:
        """
        Orchestrates the pipeline execution. Returns the transformed results,
        or None when nothing could be produced.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data is None or len(raw_data) == 0:
            logger.warning(f"⚠️ No data extracted for {self.report_type}. Sending empty results.")
            self.load({})
            return None

        # --- 2. TRANSFORM ---
        results = self.transform(raw_data)
        if results is None:
            logger.error(f"❌ Transformation failed for {self.report_type}.")
            return None

        # --- 3. LOAD ---
        self.load(results)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return results

    @abstractmethod
    def extract(self) -> Any:
        """
        Responsible for finding the input, loading it and returning the raw table.
        Should also populate self.status_summary.
        """

    @abstractmethod
    def transform(self, data: Any) -> Optional[dict[str, Any]]:
        """
        Responsible for validation, cleaning and analysis.
        Returns the named result sets.
        """

    def metadata(self) -> dict[str, Any]:
        return {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in self.status_summary.items()
        }

    def load(self, results: dict[str, Any]):
        """
        Saves result sets to disk and posts them to the webhook.
        """
        # 1. Print Status Summary
        if self.status_summary:
            logger.info("\n--- Final Status Summary ---")
            for key, value in self.metadata().items():
                logger.info(f"{key}: {value if value is not None else 'No data'}")

        # 2. Save Outputs (CSV/JSON)
        if results:
            data_handler.save_outputs(results, self.report_name)
        else:
            logger.warning("No data to save to disk.")

        # 3. Post to Webhook
        if not self.test_mode:
            data_handler.post_to_webhook(
                results=results,
                metadata=self.metadata(),
                report_type=self.report_type,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
