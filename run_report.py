import argparse
import sys

from seller_analytics.errors import SalesReportError
from seller_analytics.logger import setup_logger
from seller_analytics.pipelines.sellers import SellerReportPipeline


def main(argv: list[str] | None = None) -> int:
    """Main orchestration function to build the seller performance report."""
    parser = argparse.ArgumentParser(description="Build the per-seller sales performance report.")
    parser.add_argument(
        "--test",
        action="store_true",
        help="Run without posting the report to the webhook.",
    )
    args = parser.parse_args(argv)

    # Handlers go on the root logger so every module's logger reaches them
    logger = setup_logger()
    logger.info("--- Starting Seller Performance Report Process ---")

    try:
        report = SellerReportPipeline(test_mode=args.test).run()
    except SalesReportError as e:
        logger.error(f"❌ Report aborted: {e}")
        return 1

    if report is None:
        logger.error("❌ No dataset found. Nothing was reported.")
        return 1

    logger.info("\n--- Process Finished Successfully ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
