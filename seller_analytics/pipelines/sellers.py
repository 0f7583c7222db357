import logging
from typing import Any, Optional

from seller_analytics import settings, utils
from seller_analytics.analysis import analyze_sales_data
from seller_analytics.pipeline import DataPipeline
from seller_analytics.policies import DEFAULT_OPTIONS, ReportOptions
from seller_analytics.schemas import ReportEntry

logger = logging.getLogger(__name__)


class SellerReportPipeline(DataPipeline):
    def __init__(self, options: Optional[ReportOptions] = None, test_mode: bool = False):
        super().__init__("sellers", test_mode=test_mode)
        self.options = options if options is not None else DEFAULT_OPTIONS

    def extract(self) -> Optional[dict[str, Any]]:
        logger.info("--- Locating Sales Dataset ---")

        found_info = utils.find_latest_report(settings.INPUT_DIR, settings.DATASET_FILENAME_PREFIX)
        if not found_info:
            logger.warning(f"  > ⚠️  File missing ({settings.DATASET_FILENAME_PREFIX}*). Skipping.")
            return None

        path, file_date = found_info
        logger.info(f"  > Found: {path.name} (File Date: {file_date})")

        raw_data = utils.load_json(path)
        if raw_data is None:
            return None

        self.status_summary["source"] = path.name
        self.status_summary["data_date"] = file_date.isoformat()

        logger.info("  > 📊 Collections found:")
        for name in ("customers", "products", "sellers", "purchase_records"):
            collection = raw_data.get(name) if isinstance(raw_data, dict) else None
            count = len(collection) if isinstance(collection, list) else "missing"
            logger.info(f"    - {name}: {count}")

        return raw_data

    def transform(self, raw_data: dict[str, Any]) -> list[ReportEntry]:
        logger.info("\n--- Building Seller Report ---")
        report = analyze_sales_data(raw_data, self.options, top_limit=settings.TOP_PRODUCTS_LIMIT)
        self.status_summary["sellers"] = len(report)
        return report
