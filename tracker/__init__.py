"""
Component End-of-Life Tracker Module.

Tracks the software components each product depends on and flags them
against end-of-life dates taken from endoflife.date or entered by hand.

Features:
- Products with financial metadata and owned components
- Manual EOL templates for software missing from the public registry
- Concurrent EOL resolution against the endoflife.date API
- Safe / warning / expired risk classification
- Urgency-sorted reports with per-product filtering and CSV export
"""

from tracker.product import Component, ManualComponent, Product, MANUAL_SLUG
from tracker.registry import InventoryRegistry, StorageError
from tracker.risk import RiskTier, classify
from tracker.reports import ReportGenerator, ResolvedEOLStatus, build_report

__all__ = [
    "Component",
    "ManualComponent",
    "Product",
    "MANUAL_SLUG",
    "InventoryRegistry",
    "StorageError",
    "RiskTier",
    "classify",
    "ReportGenerator",
    "ResolvedEOLStatus",
    "build_report",
]
