"""Backend service initialization for the web API.

Paths come from the active Flask app's config so tests can point the
services at a temporary data directory.
"""

from flask import current_app


def get_registry():
    from tracker.registry import InventoryRegistry
    return InventoryRegistry(str(current_app.config["INVENTORY_PATH"]))


def get_eol_transport():
    """Optional httpx transport for endoflife.date calls (``None`` means network)."""
    return current_app.config.get("EOL_TRANSPORT")


def get_report_generator(registry=None):
    from tracker.reports import ReportGenerator
    if registry is None:
        registry = get_registry()
    return ReportGenerator(registry, transport=get_eol_transport())


def get_logo_store():
    from tracker.logo_store import LogoStore
    return LogoStore(
        str(current_app.config["LOGO_DIR"]),
        current_app.config["LOGO_PUBLIC_BASE_URL"],
    )


def get_daily_reports_dir():
    return current_app.config["DAILY_REPORTS_DIR"]
