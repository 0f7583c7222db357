import copy
import json

import pytest

from seller_analytics import settings
from seller_analytics.policies import DEFAULT_OPTIONS

# Three sellers with hand-checkable totals:
#   seller_1: 2 receipts, revenue 150, profit 70, SKU_001 x3, SKU_003 x1
#   seller_2: 1 receipt,  revenue 40,  profit 20, SKU_002 x4
#   seller_3: 1 receipt,  revenue 100, profit 0,  SKU_003 x2
SALES_DATA = {
    "customers": [
        {"id": "customer_1", "first_name": "Olga", "last_name": "Smirnova"},
        {"id": "customer_2", "first_name": "Pavel", "last_name": "Orlov"},
    ],
    "products": [
        {"sku": "SKU_001", "name": "Tea", "purchase_price": 10, "sale_price": 20},
        {"sku": "SKU_002", "name": "Sugar", "purchase_price": 5, "sale_price": 10},
        {"sku": "SKU_003", "name": "Kettle", "purchase_price": 50, "sale_price": 100},
    ],
    "sellers": [
        {"id": "seller_1", "first_name": "Alexey", "last_name": "Petrov"},
        {"id": "seller_2", "first_name": "Ivan", "last_name": "Ivanov"},
        {"id": "seller_3", "first_name": "Maria", "last_name": "Sidorova"},
    ],
    "purchase_records": [
        {
            "receipt_id": "receipt_1",
            "date": "2023-12-04",
            "seller_id": "seller_1",
            "customer_id": "customer_1",
            "items": [
                {"sku": "SKU_001", "quantity": 2, "discount": 0, "sale_price": 20},
                {"sku": "SKU_003", "quantity": 1, "discount": 10, "sale_price": 100},
            ],
        },
        {
            "receipt_id": "receipt_2",
            "seller_id": "seller_2",
            "customer_id": "customer_2",
            "items": [
                {"sku": "SKU_002", "quantity": 4, "discount": 0, "sale_price": 10},
            ],
        },
        {
            "receipt_id": "receipt_3",
            "seller_id": "seller_1",
            "customer_id": "customer_2",
            "items": [
                {"sku": "SKU_001", "quantity": 1, "discount": 0, "sale_price": 20},
            ],
        },
        {
            "receipt_id": "receipt_4",
            "seller_id": "seller_3",
            "customer_id": "customer_1",
            "items": [
                {"sku": "SKU_003", "quantity": 2, "discount": 50, "sale_price": 100},
            ],
        },
    ],
}


@pytest.fixture
def sales_data():
    return copy.deepcopy(SALES_DATA)


@pytest.fixture
def options():
    return DEFAULT_OPTIONS


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Points input/output/log locations at a temporary directory."""
    input_dir = tmp_path / "input"
    output_dir = tmp_path / "output"
    input_dir.mkdir()
    monkeypatch.setattr(settings, "BASE_DIR", tmp_path)
    monkeypatch.setattr(settings, "INPUT_DIR", input_dir)
    monkeypatch.setattr(settings, "OUTPUT_DIR", output_dir)
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
    return tmp_path


@pytest.fixture
def write_dataset(workspace):
    def _write(data, file_date="2026-10-19"):
        path = workspace / "input" / f"{settings.DATASET_FILENAME_PREFIX}{file_date}.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
