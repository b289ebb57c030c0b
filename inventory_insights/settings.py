import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Filename Configuration ---
INVENTORY_FILENAME_PREFIX = os.getenv("INVENTORY_FILENAME_PREFIX", "zepto_inventory_")
REPORT_NAME = os.getenv("REPORT_NAME", "inventory_analysis")

# --- Output Toggles ---
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").lower() in ("1", "true", "yes")

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Source Columns ---
# Column names as they arrive from the staging export (camelCase).
ID_COLUMN = "sku_id"
TEXT_COLUMNS = ["category", "name"]
DECIMAL_COLUMNS = ["mrp", "discountPercent", "discountedSellingPrice"]
INTEGER_COLUMNS = ["availableQuantity", "weightInGms", "quantity"]
BOOLEAN_COLUMNS = ["outOfStock"]

SOURCE_COLUMNS = [
    "category",
    "name",
    "mrp",
    "discountPercent",
    "availableQuantity",
    "discountedSellingPrice",
    "weightInGms",
    "outOfStock",
    "quantity",
]

# Columns expressed in minor currency units (paise) on load.
PRICE_COLUMNS = ["mrp", "discountedSellingPrice"]

# --- Shared Business Logic ---
PRICE_UNIT_DIVISOR = 100
PRICE_DECIMALS = 2

TOP_DISCOUNT_LIMIT = 10
HIGH_MRP_OUT_OF_STOCK_THRESHOLD = 300
EXPENSIVE_MRP_THRESHOLD = 500
LOW_DISCOUNT_THRESHOLD = 10
TOP_REVENUE_RANK = 3

# Weight buckets: Low < 1000 <= Medium <= 5000 < Bulk
LOW_WEIGHT_LIMIT_GMS = 1000
BULK_WEIGHT_LIMIT_GMS = 5000
LOW_WEIGHT_LABEL = "Low Weight"
MEDIUM_WEIGHT_LABEL = "Medium Weight"
BULK_WEIGHT_LABEL = "Bulk Weight"
