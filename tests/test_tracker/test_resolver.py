"""Tests for EOL date resolution."""

import unittest
from datetime import date

import httpx

from tracker.product import MANUAL_SLUG, Component, ManualComponent
from tracker.resolver import resolve


def registry_client(data_by_slug, calls=None):
    """AsyncClient answering ``/api/<slug>.json`` from *data_by_slug* (404 otherwise)."""

    def handler(request):
        slug = request.url.path.rsplit("/", 1)[-1].removesuffix(".json")
        if calls is not None:
            calls.append(slug)
        if slug not in data_by_slug:
            return httpx.Response(404)
        return httpx.Response(200, json=data_by_slug[slug])

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


PYTHON = {"python": [
    {"cycle": "3.8", "releaseDate": "2019-10-14", "eol": "2024-10-14", "latest": "3.8.20"},
    {"cycle": "3.12", "releaseDate": "2023-10-02", "eol": "2028-10-02", "latest": "3.12.4"},
    {"cycle": "3.13", "releaseDate": "2024-10-07", "eol": False, "latest": "3.13.0"},
]}


class TestResolve(unittest.IsolatedAsyncioTestCase):

    def _component(self, **kw):
        defaults = dict(name="Python", slug="python", version="3.8", product_id="p1")
        defaults.update(kw)
        return Component(**defaults)

    async def test_registry_version_match(self):
        async with registry_client(PYTHON) as client:
            eol = await resolve(self._component(), [], client)
        self.assertEqual(eol, date(2024, 10, 14))

    async def test_manual_date_overrides_registry(self):
        calls = []
        component = self._component(manual_eol_date=date(2030, 1, 1))
        async with registry_client(PYTHON, calls) as client:
            eol = await resolve(component, [], client)
        self.assertEqual(eol, date(2030, 1, 1))
        self.assertEqual(calls, [])

    async def test_manual_slug_without_date_is_unknown(self):
        calls = []
        component = self._component(slug=MANUAL_SLUG, version="1.0")
        async with registry_client(PYTHON, calls) as client:
            self.assertIsNone(await resolve(component, [], client))
        self.assertEqual(calls, [])

    async def test_manual_slug_falls_back_to_linked_template(self):
        template = ManualComponent(
            name="Legacy ERP", version="7", eol_date=date(2026, 6, 30),
            manual_component_id="tmpl1",
        )
        component = self._component(
            slug=MANUAL_SLUG, version="7", manual_component_id="tmpl1",
        )
        self.assertEqual(await resolve(component, [template]), date(2026, 6, 30))

    async def test_unknown_version_is_unknown(self):
        async with registry_client(PYTHON) as client:
            self.assertIsNone(await resolve(self._component(version="3.8.1"), [], client))

    async def test_unknown_slug_is_unknown(self):
        async with registry_client(PYTHON) as client:
            self.assertIsNone(await resolve(self._component(slug="nonexistent-xyz"), [], client))

    async def test_cycle_without_eol_date_is_unknown(self):
        async with registry_client(PYTHON) as client:
            self.assertIsNone(await resolve(self._component(version="3.13"), [], client))


if __name__ == "__main__":
    unittest.main()
