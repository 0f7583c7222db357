import json
import logging
from typing import Any, Optional

import pandas as pd
import requests

from . import settings
from . import utils
from .schemas import ReportEntry

logger = logging.getLogger(__name__)

# Friendly column headers for the CSV export, in output order.
CSV_COLUMNS = {
    "seller_id": "Seller ID",
    "name": "Seller",
    "revenue": "Revenue",
    "profit": "Profit",
    "sales_count": "Sales Count",
    "bonus": "Bonus",
    "top_products": "Top Products",
}


def report_to_dataframe(report: list[ReportEntry]) -> pd.DataFrame:
    """Flattens the report into one row per seller; top products become 'sku:qty; ...' text."""
    rows = []
    for entry in report:
        row = entry.model_dump(exclude={"top_products"})
        row["top_products"] = "; ".join(f"{p.sku}:{p.quantity}" for p in entry.top_products)
        rows.append(row)

    df = pd.DataFrame(rows, columns=list(CSV_COLUMNS))
    return df.rename(columns=CSV_COLUMNS)


def save_outputs(report: list[ReportEntry], base_name: str) -> dict[str, Any]:
    """Saves the report to CSV and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.json"
    saved: dict[str, Any] = {"csv": csv_path, "json": None}

    report_to_dataframe(report).to_csv(csv_path, index=False)
    logger.info(f"✅ Seller report saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = [entry.model_dump(mode="json") for entry in report]
            json.dump(json_data, f, indent=2, ensure_ascii=False)
        saved["json"] = json_path
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return saved


def post_to_webhook(
    validated_data: list[ReportEntry],
    metadata: Optional[dict[str, Any]] = None,
    report_type: str = "sellers",
) -> bool:
    """
    Posts the report and its run metadata to the webhook.
    Network failures are logged and reported through the return value.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} report to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": [entry.model_dump(mode="json") for entry in validated_data],
        "metadata": metadata or {},
    }

    try:
        response = requests.post(
            settings.WEBHOOK_URL, json=payload, timeout=settings.WEBHOOK_TIMEOUT
        )
        response.raise_for_status()
        logger.info("✅ Report successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
