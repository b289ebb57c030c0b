import pytest

from inventory_insights.loader import load_records


def _row(**overrides):
    row = {
        "category": "Snacks",
        "name": "Potato Chips",
        "mrp": 10000,
        "discountPercent": 20,
        "availableQuantity": 5,
        "discountedSellingPrice": 8000,
        "weightInGms": 500,
        "outOfStock": False,
        "quantity": 1,
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_row():
    """Factory for raw rows (prices in paise) with sensible defaults."""
    return _row


@pytest.fixture
def make_table():
    """
    Factory for tables whose prices are already in rupees.
    Rows are loaded as given and the table is marked normalized.
    """

    def _make(rows):
        table = load_records(
            [_row(**{"mrp": 100, "discountedSellingPrice": 80, **row}) for row in rows]
        )
        table.normalized = True
        return table

    return _make


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep every output, input and log path inside the test's tmp dir."""
    from inventory_insights import settings

    monkeypatch.setattr(settings, "INPUT_DIR", tmp_path / "input")
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
    return tmp_path
