import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

import pandas as pd
from pydantic import ValidationError

from . import settings
from .exceptions import MalformedRecordError
from .schemas import InventoryRecord
from .table import InventoryTable
from .utils import load_csv

logger = logging.getLogger(__name__)

RawRows = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


def _to_frame(rows: RawRows) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        return rows.reset_index(drop=True)
    rows = list(rows)
    if not rows:
        return pd.DataFrame(columns=settings.SOURCE_COLUMNS)
    return pd.DataFrame(rows)


def _check_numeric_cells(df: pd.DataFrame) -> None:
    """
    Every non-blank cell of a numeric column must parse as a number.
    Blank cells are allowed through as nulls.
    """
    for col in settings.DECIMAL_COLUMNS + settings.INTEGER_COLUMNS:
        if col not in df.columns:
            continue
        raw = df[col]
        parsed = pd.to_numeric(raw, errors="coerce")
        blank = raw.isna() | raw.astype(str).str.strip().eq("")
        bad = parsed.isna() & ~blank
        if bad.any():
            row_index = int(bad[bad].index[0])
            raise MalformedRecordError(
                row_index, col, f"expected a number, got {raw.iloc[row_index]!r}"
            )
        df[col] = parsed.where(~blank, None)


def _build_table(records: list[InventoryRecord]) -> pd.DataFrame:
    columns = [settings.ID_COLUMN] + settings.SOURCE_COLUMNS
    df = pd.DataFrame(
        [record.model_dump(by_alias=True) for record in records], columns=columns
    )

    # Nullable dtypes keep integers as integers even when a cell is empty.
    df[settings.ID_COLUMN] = df[settings.ID_COLUMN].astype("int64")
    for col in settings.TEXT_COLUMNS:
        df[col] = df[col].astype(object)
    for col in settings.DECIMAL_COLUMNS:
        df[col] = pd.to_numeric(df[col]).astype("float64")
    for col in settings.INTEGER_COLUMNS:
        df[col] = df[col].astype("Int64")
    for col in settings.BOOLEAN_COLUMNS:
        df[col] = df[col].astype("boolean")
    return df


def load_records(rows: RawRows, source: str = "") -> InventoryTable:
    """
    Builds the inventory table from raw rows (prices still in minor units).
    Each row gets a 1-based sku_id in input order. Business rules are not
    checked here; a structurally malformed row aborts the whole load.
    """
    df = _to_frame(rows).copy()

    missing_cols = [col for col in settings.SOURCE_COLUMNS if col not in df.columns]
    if missing_cols:
        raise MalformedRecordError(
            0, missing_cols[0], f"missing column(s): {', '.join(missing_cols)}"
        )

    _check_numeric_cells(df)

    records = []
    raw_rows = df[settings.SOURCE_COLUMNS].to_dict("records")
    for row_index, row in enumerate(raw_rows):
        try:
            record = InventoryRecord(**{str(k): v for k, v in row.items()})
        except ValidationError as e:
            first_error = e.errors()[0]
            field = str(first_error["loc"][0]) if first_error.get("loc") else None
            raise MalformedRecordError(row_index, field, first_error["msg"]) from e
        record.sku_id = row_index + 1
        records.append(record)

    table = InventoryTable(df=_build_table(records), normalized=False, source=source)
    logger.info(f"  > Loaded {len(table)} records{f' from {source}' if source else ''}.")
    return table


def load_csv_file(file_path: Path) -> InventoryTable:
    """Reads a staging CSV export and loads it into a fresh table."""
    raw_df = load_csv(file_path)
    return load_records(raw_df, source=file_path.name)
