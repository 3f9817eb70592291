"""Project-wide settings and defaults."""

import os
from pathlib import Path

# Base paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("EOL_TRACKER_DATA_DIR", str(PROJECT_ROOT / "data")))
INVENTORY_PATH = DATA_DIR / "inventory.json"
DAILY_REPORTS_DIR = DATA_DIR / "daily_reports"

# endoflife.date registry
EOL_API_BASE = os.environ.get("EOL_API_BASE", "https://endoflife.date/api")
EOL_API_TIMEOUT_SECONDS = float(os.environ.get("EOL_API_TIMEOUT_SECONDS", "10"))

# Risk classification
EOL_WARNING_DAYS = int(os.environ.get("EOL_WARNING_DAYS", "365"))

# Product logos (object storage)
LOGO_DIR = DATA_DIR / "logos"
LOGO_PUBLIC_BASE_URL = os.environ.get("LOGO_PUBLIC_BASE_URL", "/logos")

# Scheduler
SCHEDULER_ENABLED = os.environ.get("SCHEDULER_ENABLED", "true").lower() == "true"
EXPORT_INTERVAL_HOURS = int(os.environ.get("EXPORT_INTERVAL_HOURS", "24"))

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
