"""
EOL report generation.

Joins components to their products, resolves each component's EOL date
concurrently, classifies it and produces:
- The urgency-sorted EOL report (optionally filtered by product)
- CSV export of that report
- Dashboard statistics and a text summary
"""

import asyncio
import csv
import io
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional

import httpx

from config.settings import EOL_API_TIMEOUT_SECONDS
from tracker.product import Component, ManualComponent, Product
from tracker.resolver import resolve
from tracker.risk import RiskTier, classify, humanize_remaining

ALL_PRODUCTS = "all"

CSV_HEADERS = ["Product", "Component", "Version", "EOL Date", "Time Remaining", "Status"]


@dataclass(frozen=True)
class ResolvedEOLStatus:
    """EOL status of one component, recomputed on every report build."""

    component_id: str
    product_id: str
    product_name: str
    component_name: str
    slug: str
    version: str
    eol_date: Optional[date]
    days_remaining: Optional[int]
    tier: RiskTier

    @property
    def time_remaining(self) -> str:
        return humanize_remaining(self.days_remaining)

    def to_dict(self) -> dict:
        return {
            "component_id": self.component_id,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "component_name": self.component_name,
            "slug": self.slug,
            "version": self.version,
            "eol_date": self.eol_date.isoformat() if self.eol_date else None,
            "days_remaining": self.days_remaining,
            "time_remaining": self.time_remaining,
            "status": self.tier.value,
        }


async def _resolve_status(
    component: Component,
    product_name: str,
    manual_templates: list[ManualComponent],
    today: date,
    client: httpx.AsyncClient,
) -> ResolvedEOLStatus:
    eol_date = await resolve(component, manual_templates, client)
    days, tier = classify(eol_date, today)
    return ResolvedEOLStatus(
        component_id=component.component_id,
        product_id=component.product_id,
        product_name=product_name,
        component_name=component.name,
        slug=component.slug,
        version=component.version,
        eol_date=eol_date,
        days_remaining=days,
        tier=tier,
    )


async def build_report(
    products: Iterable[Product],
    components: Iterable[Component],
    manual_templates: Iterable[ManualComponent] = (),
    today: Optional[date] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> list[ResolvedEOLStatus]:
    """Resolve and classify every product-linked component, most urgent first.

    Unlinked components are skipped. All registry lookups run concurrently
    and are joined before sorting.
    """
    today = today or date.today()
    names = {p.product_id: p.name for p in products}
    templates = list(manual_templates)
    linked = [c for c in components if c.product_id is not None]

    async def _gather(http: httpx.AsyncClient) -> list[ResolvedEOLStatus]:
        return await asyncio.gather(*(
            _resolve_status(c, names.get(c.product_id, "Unknown"), templates, today, http)
            for c in linked
        ))

    if client is None:
        async with httpx.AsyncClient(timeout=EOL_API_TIMEOUT_SECONDS) as own_client:
            results = await _gather(own_client)
    else:
        results = await _gather(client)

    return sort_by_urgency(results)


def sort_by_urgency(statuses: Iterable[ResolvedEOLStatus]) -> list[ResolvedEOLStatus]:
    """Ascending by days remaining; unknown dates go last."""
    return sorted(
        statuses,
        key=lambda s: (s.days_remaining is None, s.days_remaining or 0),
    )


def filter_by_product(
    statuses: Iterable[ResolvedEOLStatus], product_id: Optional[str] = None
) -> list[ResolvedEOLStatus]:
    if not product_id or product_id == ALL_PRODUCTS:
        return list(statuses)
    return [s for s in statuses if s.product_id == product_id]


def format_eol_date(eol_date: Optional[date]) -> str:
    """Short US locale date (``M/D/YYYY``) or ``N/A``."""
    if eol_date is None:
        return "N/A"
    return f"{eol_date.month}/{eol_date.day}/{eol_date.year}"


def to_csv(statuses: Iterable[ResolvedEOLStatus]) -> str:
    """Serialize statuses to CSV with every data field quoted."""
    output = io.StringIO()
    output.write(",".join(CSV_HEADERS) + "\n")
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for s in statuses:
        writer.writerow([
            s.product_name,
            s.component_name,
            s.version,
            format_eol_date(s.eol_date),
            s.time_remaining,
            s.tier.value.upper(),
        ])
    return output.getvalue().rstrip("\n")


def csv_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"eol-tracker-{today.isoformat()}.csv"


def summary_stats(products: Iterable[Product], statuses: Iterable[ResolvedEOLStatus]) -> dict:
    statuses = list(statuses)
    by_tier = {tier.value: 0 for tier in RiskTier}
    for s in statuses:
        by_tier[s.tier.value] += 1
    return {
        "total_products": len(list(products)),
        "total_components": len(statuses),
        "expired_components": by_tier[RiskTier.EXPIRED.value],
        "warning_components": by_tier[RiskTier.WARNING.value],
        "safe_components": by_tier[RiskTier.SAFE.value],
        "unknown_components": sum(1 for s in statuses if s.eol_date is None),
    }


class ReportGenerator:
    """Build reports from an :class:`~tracker.registry.InventoryRegistry`.

    Storage errors raised while reading the registry propagate unchanged.
    """

    def __init__(self, registry, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._registry = registry
        self._transport = transport

    async def eol_report_async(
        self, product_id: Optional[str] = None, today: Optional[date] = None
    ) -> list[ResolvedEOLStatus]:
        products = self._registry.list_products()
        components = self._registry.linked_components()
        templates = self._registry.list_manual_components()
        async with httpx.AsyncClient(
            timeout=EOL_API_TIMEOUT_SECONDS, transport=self._transport
        ) as client:
            statuses = await build_report(
                products, components, templates, today=today, client=client
            )
        return filter_by_product(statuses, product_id)

    def eol_report(
        self, product_id: Optional[str] = None, today: Optional[date] = None
    ) -> list[ResolvedEOLStatus]:
        return asyncio.run(self.eol_report_async(product_id, today))

    def dashboard_report(self, today: Optional[date] = None) -> dict:
        statuses = self.eol_report(today=today)
        return {
            "generated_at": datetime.utcnow().isoformat(),
            "stats": summary_stats(self._registry.list_products(), statuses),
            "components": [s.to_dict() for s in statuses],
        }

    def export_csv(
        self,
        directory: str,
        product_id: Optional[str] = None,
        today: Optional[date] = None,
        statuses: Optional[list[ResolvedEOLStatus]] = None,
    ) -> Path:
        """Write the EOL report CSV into *directory* and return its path.

        Pass *statuses* to export an already-built report without refetching.
        """
        today = today or date.today()
        if statuses is None:
            statuses = self.eol_report(product_id, today)
        path = Path(directory) / csv_filename(today)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(to_csv(statuses))
        return path

    def format_text_summary(
        self,
        today: Optional[date] = None,
        statuses: Optional[list[ResolvedEOLStatus]] = None,
        product_id: Optional[str] = None,
    ) -> str:
        """Generate a human-readable text summary, optionally for one product."""
        if statuses is None:
            statuses = self.eol_report(product_id, today)
        products = self._registry.list_products()
        if product_id and product_id != ALL_PRODUCTS:
            products = [p for p in products if p.product_id == product_id]
        stats = summary_stats(products, statuses)

        lines = [
            "=" * 60,
            "  EOL TRACKER DASHBOARD",
            f"  Generated: {datetime.utcnow().strftime('%Y-%m-%d %H:%M UTC')}",
            "=" * 60,
            "",
            f"  Total Products:     {stats['total_products']}",
            f"  Total Components:   {stats['total_components']}",
            f"  Expired:            {stats['expired_components']}",
            f"  Warning:            {stats['warning_components']}",
            f"  Safe:               {stats['safe_components']}",
            "",
            "  --- MOST URGENT ---",
        ]
        for s in statuses[:5]:
            lines.append(
                f"    [{s.tier.value.upper():7s}] {s.product_name} / "
                f"{s.component_name} {s.version} ({s.time_remaining})"
            )
        lines.append("=" * 60)
        return "\n".join(lines)
