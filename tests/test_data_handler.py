import json

import pandas as pd
import pytest
import requests

from seller_analytics import data_handler, settings
from seller_analytics.schemas import ReportEntry, TopProduct


@pytest.fixture
def report():
    return [
        ReportEntry(
            seller_id="seller_1",
            name="Alexey Petrov",
            revenue=150.0,
            profit=70.0,
            sales_count=2,
            top_products=[TopProduct(sku="SKU_001", quantity=3), TopProduct(sku="SKU_003", quantity=1)],
            bonus=10.5,
        ),
        ReportEntry(
            seller_id="seller_2",
            name="Ivan Ivanov",
            revenue=40.0,
            profit=20.0,
            sales_count=1,
            top_products=[],
            bonus=2.0,
        ),
    ]


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


def test_report_to_dataframe(report):
    df = data_handler.report_to_dataframe(report)
    assert list(df.columns) == list(data_handler.CSV_COLUMNS.values())
    assert df.loc[0, "Top Products"] == "SKU_001:3; SKU_003:1"
    assert df.loc[1, "Top Products"] == ""
    assert df["Bonus"].tolist() == [10.5, 2.0]


def test_save_outputs_writes_csv_and_json(workspace, report):
    saved = data_handler.save_outputs(report, "seller_report")

    csv_df = pd.read_csv(saved["csv"])
    assert csv_df["Seller ID"].tolist() == ["seller_1", "seller_2"]
    assert csv_df["Profit"].tolist() == [70.0, 20.0]

    payload = json.loads(saved["json"].read_text(encoding="utf-8"))
    assert payload[0]["seller_id"] == "seller_1"
    assert payload[0]["top_products"] == [
        {"sku": "SKU_001", "quantity": 3},
        {"sku": "SKU_003", "quantity": 1},
    ]


def test_save_outputs_can_skip_json(workspace, report, monkeypatch):
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)
    saved = data_handler.save_outputs(report, "seller_report")
    assert saved["json"] is None
    assert saved["csv"].exists()
    assert not list(settings.OUTPUT_DIR.glob("*.json"))


def test_webhook_skipped_without_url(workspace, report, monkeypatch):
    def fail_post(*args, **kwargs):
        raise AssertionError("should not post")

    monkeypatch.setattr(data_handler.requests, "post", fail_post)
    assert data_handler.post_to_webhook(report) is False


def test_webhook_posts_report(workspace, report, monkeypatch):
    sent = {}

    def fake_post(url, json=None, timeout=None):
        sent.update(url=url, json=json, timeout=timeout)
        return FakeResponse()

    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.test/report")
    monkeypatch.setattr(data_handler.requests, "post", fake_post)

    assert data_handler.post_to_webhook(report, {"source": "sales_data_2026-10-19.json"}) is True
    assert sent["url"] == "https://hooks.example.test/report"
    assert sent["timeout"] == settings.WEBHOOK_TIMEOUT
    assert sent["json"]["reportType"] == "sellers"
    assert sent["json"]["metadata"] == {"source": "sales_data_2026-10-19.json"}
    assert [row["seller_id"] for row in sent["json"]["reportData"]] == ["seller_1", "seller_2"]


@pytest.mark.parametrize(
    "outcome",
    [FakeResponse(500), requests.exceptions.ConnectionError("connection refused")],
)
def test_webhook_failures_are_logged_not_raised(workspace, report, monkeypatch, outcome):
    def fake_post(*args, **kwargs):
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.test/report")
    monkeypatch.setattr(data_handler.requests, "post", fake_post)
    assert data_handler.post_to_webhook(report) is False
