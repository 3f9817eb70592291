#!/usr/bin/env python3
"""Daily EOL report export.

Run via cron or manually:
    python scripts/daily_export.py [--product <id>]

Resolves every product-linked component against endoflife.date (or its
manual EOL date), then writes data/daily_reports/eol-tracker-<date>.csv
and prints the dashboard summary to stdout.
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import DAILY_REPORTS_DIR, INVENTORY_PATH, LOG_FORMAT, LOG_LEVEL
from tracker.registry import InventoryRegistry
from tracker.reports import ReportGenerator

logger = logging.getLogger("daily_export")


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    parser = argparse.ArgumentParser(description="Export the daily EOL report")
    parser.add_argument("--product", help="Restrict to one product ID")
    parser.add_argument("--output-dir", default=str(DAILY_REPORTS_DIR))
    args = parser.parse_args()

    report_gen = ReportGenerator(InventoryRegistry(str(INVENTORY_PATH)))
    statuses = report_gen.eol_report(args.product)
    path = report_gen.export_csv(args.output_dir, statuses=statuses)
    logger.info("EOL report written to %s", path)
    print(report_gen.format_text_summary(statuses=statuses, product_id=args.product))


if __name__ == "__main__":
    main()
