"""Tests for product/component create and update flows."""

import os
import tempfile
import unittest
from datetime import date

from tracker.inventory import (
    ValidationError,
    add_component,
    add_manual_component,
    add_product,
    format_currency,
    update_product_details,
)
from tracker.logo_store import LogoStore
from tracker.product import MANUAL_SLUG
from tracker.registry import InventoryRegistry


class InventoryTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.registry = InventoryRegistry(os.path.join(self.tmpdir.name, "inventory.json"))
        self.product = add_product(self.registry, "Acme")

    def tearDown(self):
        self.tmpdir.cleanup()


class TestAddProduct(InventoryTestCase):

    def test_name_required(self):
        with self.assertRaises(ValidationError) as ctx:
            add_product(self.registry, "   ")
        self.assertEqual(ctx.exception.field, "name")
        self.assertEqual(len(self.registry.list_products()), 1)

    def test_numeric_fields_parsed(self):
        p = add_product(self.registry, " Globex ", arr="1200.5", cost="", customer_count="12")
        self.assertEqual(p.name, "Globex")
        self.assertEqual(p.arr, 1200.5)
        self.assertIsNone(p.cost)
        self.assertEqual(p.customer_count, 12)

    def test_bad_number_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            add_product(self.registry, "Globex", arr="lots")
        self.assertEqual(ctx.exception.field, "arr")


class TestAddComponent(InventoryTestCase):

    def test_registry_component(self):
        c = add_component(self.registry, self.product.product_id, " Python ", "python", " 3.12 ")
        self.assertEqual((c.name, c.slug, c.version), ("Python", "python", "3.12"))
        self.assertIsNone(c.manual_eol_date)
        self.assertEqual(c.product_id, self.product.product_id)

    def test_custom_slug_accepted(self):
        c = add_component(self.registry, self.product.product_id, "Thing", "some-custom-slug", "1")
        self.assertEqual(c.slug, "some-custom-slug")

    def test_all_fields_required(self):
        for name, slug, version in (("", "python", "3"), ("Py", "", "3"), ("Py", "python", " ")):
            with self.subTest(name=name, slug=slug, version=version):
                with self.assertRaises(ValidationError) as ctx:
                    add_component(self.registry, self.product.product_id, name, slug, version)
                self.assertEqual(ctx.exception.message, "All fields are required")
        self.assertEqual(self.registry.list_components(), [])

    def test_non_string_values_coerced(self):
        c = add_component(self.registry, self.product.product_id, "Python", "python", 3.8)
        self.assertEqual(c.version, "3.8")

    def test_unknown_product_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            add_component(self.registry, "missing", "Python", "python", "3.12")
        self.assertEqual(ctx.exception.field, "product_id")

    def test_manual_slug_requires_template(self):
        with self.assertRaises(ValidationError):
            add_component(self.registry, self.product.product_id, "ERP", MANUAL_SLUG, "7")

    def test_from_manual_template_copies_date(self):
        template = add_manual_component(self.registry, "Legacy ERP", "7", "2026-06-30")
        c = add_component(
            self.registry, self.product.product_id,
            manual_component_id=template.manual_component_id,
        )
        self.assertEqual(c.slug, MANUAL_SLUG)
        self.assertEqual(c.name, "Legacy ERP")
        self.assertEqual(c.version, "7")
        self.assertEqual(c.manual_eol_date, date(2026, 6, 30))
        self.assertEqual(c.manual_component_id, template.manual_component_id)

    def test_unknown_template_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            add_component(self.registry, self.product.product_id, manual_component_id="nope")
        self.assertEqual(ctx.exception.field, "manual_component_id")


class TestAddManualComponent(InventoryTestCase):

    def test_requires_eol_date(self):
        with self.assertRaises(ValidationError) as ctx:
            add_manual_component(self.registry, "ERP", "7", "")
        self.assertEqual(ctx.exception.field, "eol_date")

    def test_rejects_bad_date(self):
        with self.assertRaises(ValidationError):
            add_manual_component(self.registry, "ERP", "7", "30/06/2026")
        self.assertEqual(self.registry.list_manual_components(), [])


class TestUpdateProductDetails(InventoryTestCase):

    def test_updates_and_clears_numbers(self):
        update_product_details(self.registry, self.product.product_id, "Acme", arr="100", cost="50")
        p = update_product_details(
            self.registry, self.product.product_id, "Acme 2", arr="", cost="75.5",
            customer_count="3", notes=" renewal Q3 ",
        )
        self.assertEqual(p.name, "Acme 2")
        self.assertIsNone(p.arr)
        self.assertEqual(p.cost, 75.5)
        self.assertEqual(p.customer_count, 3)
        self.assertEqual(p.notes, "renewal Q3")

    def test_name_required_no_partial_write(self):
        with self.assertRaises(ValidationError):
            update_product_details(self.registry, self.product.product_id, "", arr="5")
        self.assertIsNone(self.registry.get_product(self.product.product_id).arr)

    def test_missing_product(self):
        self.assertIsNone(update_product_details(self.registry, "nope", "x"))

    def test_logo_upload(self):
        store = LogoStore(os.path.join(self.tmpdir.name, "logos"), "https://cdn.example.com/logos")
        p = update_product_details(
            self.registry, self.product.product_id, "Acme",
            logo=("acme.PNG", b"\x89PNG"), logo_store=store,
        )
        self.assertTrue(p.logo_url.startswith(f"https://cdn.example.com/logos/{p.product_id}/"))
        self.assertTrue(p.logo_url.endswith(".png"))


class TestFormatCurrency(unittest.TestCase):

    def test_format(self):
        self.assertEqual(format_currency(1234567.4), "$1,234,567")
        self.assertEqual(format_currency(None), "N/A")


if __name__ == "__main__":
    unittest.main()
