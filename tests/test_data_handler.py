import json

import pandas as pd
import requests

from inventory_insights import data_handler, settings


class _FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


def _results():
    return {
        "revenue_by_category": pd.DataFrame(
            {"category": ["Snacks", None], "total_revenue": [400.0, 12.5]}
        ),
        "weight_buckets": pd.DataFrame(
            {"name": ["A"], "weightInGms": pd.array([500], dtype="Int64"), "weight_category": ["Low Weight"]}
        ),
    }


def test_save_outputs_writes_csv_per_result_and_json(monkeypatch):
    monkeypatch.setattr(data_handler.utils, "get_date_suffix_for_filename", lambda: "2024-06-30")

    written = data_handler.save_outputs(_results(), "inventory_analysis")

    names = sorted(p.name for p in written)
    assert names == [
        "inventory_analysis_2024-06-30.json",
        "inventory_analysis_revenue_by_category_2024-06-30.csv",
        "inventory_analysis_weight_buckets_2024-06-30.csv",
    ]
    csv_df = pd.read_csv(settings.OUTPUT_DIR / "inventory_analysis_revenue_by_category_2024-06-30.csv")
    assert list(csv_df["total_revenue"]) == [400.0, 12.5]

    data = json.loads((settings.OUTPUT_DIR / "inventory_analysis_2024-06-30.json").read_text())
    assert data["revenue_by_category"][0] == {"category": "Snacks", "total_revenue": 400.0}
    assert data["revenue_by_category"][1]["category"] is None
    assert data["weight_buckets"][0]["weightInGms"] == 500


def test_save_outputs_without_json(monkeypatch):
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)

    written = data_handler.save_outputs(_results(), "inventory_analysis")

    assert all(p.suffix == ".csv" for p in written)
    assert len(written) == 2


def test_webhook_skipped_without_url(monkeypatch):
    def _boom(*args, **kwargs):
        raise AssertionError("should not post")

    monkeypatch.setattr(requests, "post", _boom)

    assert data_handler.post_to_webhook(_results(), {}, "inventory_analysis") is None


def test_webhook_payload(monkeypatch):
    calls = []

    def _fake_post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        return _FakeResponse()

    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://example.test/hook")
    monkeypatch.setattr(requests, "post", _fake_post)

    response = data_handler.post_to_webhook(
        _results(), {"source": "zepto_inventory_2024-06-30.csv"}, "inventory_analysis"
    )

    assert response is not None
    assert len(calls) == 1
    payload = calls[0]["json"]
    assert calls[0]["url"] == "https://example.test/hook"
    assert calls[0]["timeout"] == 15
    assert payload["reportType"] == "inventory_analysis"
    assert payload["metadata"] == {"source": "zepto_inventory_2024-06-30.csv"}
    assert payload["reportData"]["revenue_by_category"][0]["total_revenue"] == 400.0


def test_webhook_errors_are_logged_not_raised(monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://example.test/hook")
    monkeypatch.setattr(requests, "post", lambda *a, **k: _FakeResponse(status_code=500))

    assert data_handler.post_to_webhook(_results(), {}, "inventory_analysis") is None
