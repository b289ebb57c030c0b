import argparse
import logging
import sys
from pathlib import Path

from inventory_insights.cleaner import StockRepairStrategy
from inventory_insights.exceptions import MalformedRecordError
from inventory_insights.logger import setup_logger
from inventory_insights.pipelines.inventory import run_inventory_analysis


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="inventory_insights",
        description="Validate, clean and analyse a retail inventory export.",
    )
    parser.add_argument(
        "--input",
        metavar="FILE",
        type=Path,
        help="Inventory CSV to analyse (default: latest report in INPUT_DIR)",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Test mode: write outputs but skip the webhook post",
    )
    parser.add_argument(
        "--repair-stock",
        choices=[strategy.value for strategy in StockRepairStrategy],
        default=None,
        help="Resolve out-of-stock flag mismatches by trusting the quantity or the flag",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logger()
    logger = logging.getLogger(__name__)

    try:
        run_inventory_analysis(
            input_path=args.input,
            test_mode=args.test,
            stock_repair=StockRepairStrategy(args.repair_stock) if args.repair_stock else None,
        )
    except MalformedRecordError as e:
        logger.error(f"❌ Load aborted: {e}")
        return 1
    except FileNotFoundError as e:
        logger.error(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
