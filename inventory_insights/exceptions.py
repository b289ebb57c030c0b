from typing import Optional


class InventoryError(Exception):
    """Base class for every error raised by the inventory pipeline."""


class MalformedRecordError(InventoryError, ValueError):
    """
    Raised when a raw row cannot be loaded because of its structure
    (a missing column, a non-numeric price, an unreadable stock flag).
    The load is aborted; no row is skipped silently.
    """

    def __init__(self, row_index: int, field: Optional[str], reason: str):
        self.row_index = row_index
        self.field = field
        self.reason = reason
        location = f"row {row_index}"
        if field:
            location += f", field '{field}'"
        super().__init__(f"Malformed record at {location}: {reason}")


class NormalizationError(InventoryError):
    """Raised when the price unit normalization state is not what a stage expects."""


class AlreadyNormalizedError(NormalizationError):
    """Raised when normalizing a table whose prices are already in major units."""


class NotNormalizedError(NormalizationError):
    """Raised when a stage needs major-unit prices but normalization has not run."""
