from dataclasses import dataclass, field

import pandas as pd

from . import settings
from .exceptions import NotNormalizedError


@dataclass
class InventoryTable:
    """
    The in-memory inventory table handed from stage to stage.

    `normalized` is True once prices are in major currency units.
    """

    df: pd.DataFrame
    normalized: bool = False
    source: str = field(default="")

    def __len__(self) -> int:
        return len(self.df)

    @property
    def ids(self) -> list[int]:
        return [int(x) for x in self.df[settings.ID_COLUMN]]

    def ids_where(self, mask: pd.Series) -> list[int]:
        """Ids of the rows selected by a boolean mask (nulls count as not selected)."""
        mask = mask.fillna(False).astype(bool)
        return [int(x) for x in self.df.loc[mask, settings.ID_COLUMN]]

    def require_normalized(self) -> None:
        if not self.normalized:
            raise NotNormalizedError(
                "Prices are still in minor currency units; run unit normalization first."
            )
