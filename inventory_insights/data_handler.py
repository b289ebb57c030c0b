import json
import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import requests

from . import settings
from . import utils

logger = logging.getLogger(__name__)


def _records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """JSON-friendly rows: nulls as None, numpy scalars as plain Python values."""
    return json.loads(df.to_json(orient="records"))


def save_outputs(results: dict[str, pd.DataFrame], report_name: str) -> list[Path]:
    """
    Saves every result set to its own dated CSV and, when enabled, all of them
    together in a single JSON document. Returns the written paths.
    """
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    written = []

    for result_name, df in results.items():
        csv_path = settings.OUTPUT_DIR / f"{report_name}_{result_name}_{date_suffix}.csv"
        df.to_csv(csv_path, index=False)
        written.append(csv_path)
    logger.info(f"✅ {len(results)} result set(s) saved to: {settings.OUTPUT_DIR}")

    if settings.SAVE_JSON_OUTPUT:
        json_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.json"
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = {name: _records(df) for name, df in results.items()}
            json.dump(json_data, f, indent=2, default=str)
        written.append(json_path)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return written


def post_to_webhook(
    results: dict[str, pd.DataFrame],
    metadata: dict[str, Any],
    report_type: str,
) -> Optional[requests.Response]:
    """
    Posts the result sets and the run metadata to the webhook.
    Network failures are logged; they never abort the run.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return None

    logger.info(f"🚀 Posting {report_type} results to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "metadata": json.loads(json.dumps(metadata, default=str)),
        "reportData": {name: _records(df) for name, df in results.items()},
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Results successfully posted to webhook.")
        return response
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return None
