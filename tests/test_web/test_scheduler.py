"""Tests for the background report export scheduler."""

import tempfile
import unittest
from datetime import date
from pathlib import Path

import httpx

from tracker.product import Component, Product
from tracker.registry import InventoryRegistry
from web import create_app
from web.scheduler import run_scheduled_export, scheduler


class TestScheduler(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.data_dir = Path(self.tmpdir.name)
        self.app = create_app({
            "TESTING": True,
            "INVENTORY_PATH": self.data_dir / "inventory.json",
            "DAILY_REPORTS_DIR": self.data_dir / "daily_reports",
            "EOL_TRANSPORT": httpx.MockTransport(lambda request: httpx.Response(404)),
        })

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_scheduler_not_started_in_testing_mode(self):
        self.assertFalse(scheduler.running)

    def test_scheduled_export_writes_csv(self):
        registry = InventoryRegistry(str(self.data_dir / "inventory.json"))
        product = registry.add_product(Product(name="Acme"))
        registry.add_component(Component(name="Python", slug="python", version="3.12",
                                         product_id=product.product_id))

        path = run_scheduled_export(self.app)

        self.assertEqual(path.name, f"eol-tracker-{date.today().isoformat()}.csv")
        lines = path.read_text().split("\n")
        self.assertEqual(lines[1], '"Acme","Python","3.12","N/A","N/A","EXPIRED"')

    def test_scheduled_export_logs_and_survives_storage_failure(self):
        (self.data_dir / "inventory.json").write_text("{broken")
        with self.assertLogs("web.scheduler", level="ERROR"):
            self.assertIsNone(run_scheduled_export(self.app))


if __name__ == "__main__":
    unittest.main()
