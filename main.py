#!/usr/bin/env python3
"""
EOL Tracker - Main Entry Point.

Usage:
    python main.py product add <name> [--arr N] [--cost N] [--customers N]
    python main.py product list
    python main.py product update <product_id> --name <name> [options]
    python main.py component add <product_id> <name> --slug <slug> --version <v>
    python main.py component add <product_id> --manual <template_id>
    python main.py manual add <name> --version <v> --eol YYYY-MM-DD
    python main.py manual list
    python main.py report [--product <id>] [--csv <dir>]
    python main.py dashboard
    python main.py versions <slug>
    python main.py slugs
"""

import argparse
import asyncio
import json
import logging
import sys

from config.settings import (
    INVENTORY_PATH,
    LOG_FORMAT,
    LOG_LEVEL,
    LOGO_DIR,
    LOGO_PUBLIC_BASE_URL,
)
from tracker.endoflife import COMMON_SLUGS, fetch_cycles, list_versions
from tracker.inventory import (
    ValidationError,
    add_component,
    add_manual_component,
    add_product,
    format_currency,
    update_product_details,
)
from tracker.logo_store import LogoStore
from tracker.registry import InventoryRegistry, StorageError
from tracker.reports import ReportGenerator


def _get_registry():
    return InventoryRegistry(str(INVENTORY_PATH))


# ============================================================
# Product Commands
# ============================================================

def cmd_product_add(args):
    """Add a product."""
    product = add_product(
        _get_registry(),
        args.name,
        arr=args.arr,
        cost=args.cost,
        customer_count=args.customers,
        description=args.description,
    )
    print(f"Product added: {product.name}")
    print(f"  ID: {product.product_id}")


def cmd_product_list(args):
    """List products."""
    registry = _get_registry()
    products = registry.list_products()
    if not products:
        print("No products found.")
        return

    print(f"\n{'ID':14s} {'Name':30s} {'ARR':>14s} {'Cost':>14s} {'Customers':>10s} {'Components':>10s}")
    print("-" * 98)
    for p in products:
        customers = f"{p.customer_count:,}" if p.customer_count is not None else "N/A"
        print(
            f"{p.product_id:14s} {p.name:30s} {format_currency(p.arr):>14s} "
            f"{format_currency(p.cost):>14s} {customers:>10s} "
            f"{len(registry.components_for(p.product_id)):>10d}"
        )
    print(f"\nTotal: {len(products)} product(s)")


def cmd_product_update(args):
    """Update product details."""
    logo = None
    if args.logo:
        with open(args.logo, "rb") as fh:
            logo = (args.logo, fh.read())

    product = update_product_details(
        _get_registry(),
        args.product_id,
        name=args.name,
        arr=args.arr,
        cost=args.cost,
        customer_count=args.customers,
        description=args.description or "",
        notes=args.notes or "",
        logo=logo,
        logo_store=LogoStore(str(LOGO_DIR), LOGO_PUBLIC_BASE_URL),
    )
    if product is None:
        print(f"Product not found: {args.product_id}")
        sys.exit(1)
    print(f"Product updated: {product.name}")


# ============================================================
# Component Commands
# ============================================================

def cmd_component_add(args):
    """Add a component to a product."""
    component = add_component(
        _get_registry(),
        args.product_id,
        name=args.name or "",
        slug=args.slug or "",
        version=args.version or "",
        manual_component_id=args.manual,
    )
    print(f"Component added: {component.name} {component.version} ({component.slug})")
    print(f"  ID: {component.component_id}")
    if component.manual_eol_date:
        print(f"  EOL: {component.manual_eol_date.isoformat()}")


def cmd_manual_add(args):
    """Add a manual EOL template."""
    template = add_manual_component(_get_registry(), args.name, args.version, args.eol)
    print(f"Manual component added: {template.name} {template.version}")
    print(f"  ID: {template.manual_component_id}")
    print(f"  EOL: {template.eol_date.isoformat()}")


def cmd_manual_list(args):
    """List manual EOL templates."""
    templates = _get_registry().list_manual_components()
    if not templates:
        print("No manual components found.")
        return
    for m in templates:
        print(f"  {m.manual_component_id:14s} {m.name:30s} {m.version:12s} EOL: {m.eol_date.isoformat()}")


# ============================================================
# Report Commands
# ============================================================

def cmd_report(args):
    """Show or export the EOL report."""
    report_gen = ReportGenerator(_get_registry())

    if args.csv:
        path = report_gen.export_csv(args.csv, product_id=args.product)
        print(f"Report saved to: {path}")
        return

    statuses = report_gen.eol_report(args.product)
    if args.json:
        print(json.dumps([s.to_dict() for s in statuses], indent=2))
        return

    if not statuses:
        print("No components found.")
        return

    print(f"\n{'Product':20s} {'Component':25s} {'Version':10s} {'EOL Date':12s} {'Remaining':20s} {'Status':8s}")
    print("-" * 100)
    for s in statuses:
        eol = s.eol_date.isoformat() if s.eol_date else "N/A"
        print(
            f"{s.product_name:20s} {s.component_name:25s} {s.version:10s} "
            f"{eol:12s} {s.time_remaining:20s} {s.tier.value.upper():8s}"
        )
    print(f"\nTotal: {len(statuses)} component(s)")


def cmd_dashboard(args):
    """Show the EOL dashboard."""
    print(ReportGenerator(_get_registry()).format_text_summary())


def cmd_versions(args):
    """List known versions for a registry slug."""
    versions = list_versions(asyncio.run(fetch_cycles(args.slug)))
    if not versions:
        print(f"No versions found for: {args.slug}")
        return
    for v in versions:
        print(f"  {v}")


def cmd_slugs(args):
    """List common registry slugs."""
    for value, label in COMMON_SLUGS:
        print(f"  {value:15s} {label}")


# ============================================================
# Parser
# ============================================================

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Component End-of-Life Tracking Tool"
    )
    subparsers = parser.add_subparsers(dest="module", help="Module")

    # --- Product commands ---
    prod_parser = subparsers.add_parser("product", help="Product management")
    prod_sub = prod_parser.add_subparsers(dest="action")

    pa = prod_sub.add_parser("add", help="Add a product")
    pa.add_argument("name", help="Product name")
    pa.add_argument("--arr", help="Annual recurring revenue")
    pa.add_argument("--cost", help="Cost")
    pa.add_argument("--customers", help="Customer count")
    pa.add_argument("--description", help="Description")
    pa.set_defaults(func=cmd_product_add)

    pl = prod_sub.add_parser("list", help="List products")
    pl.set_defaults(func=cmd_product_list)

    pu = prod_sub.add_parser("update", help="Update product details")
    pu.add_argument("product_id", help="Product ID")
    pu.add_argument("--name", required=True, help="Product name")
    pu.add_argument("--arr", help="Annual recurring revenue (blank clears)")
    pu.add_argument("--cost", help="Cost (blank clears)")
    pu.add_argument("--customers", help="Customer count (blank clears)")
    pu.add_argument("--description", help="Description")
    pu.add_argument("--notes", help="Notes")
    pu.add_argument("--logo", help="Path to a logo image to upload")
    pu.set_defaults(func=cmd_product_update)

    # --- Component commands ---
    comp_parser = subparsers.add_parser("component", help="Component management")
    comp_sub = comp_parser.add_subparsers(dest="action")

    ca = comp_sub.add_parser("add", help="Add a component to a product")
    ca.add_argument("product_id", help="Owning product ID")
    ca.add_argument("name", nargs="?", help="Component name")
    ca.add_argument("--slug", help="endoflife.date slug")
    ca.add_argument("--version", help="Version (must match a registry cycle)")
    ca.add_argument("--manual", help="Manual component template ID")
    ca.set_defaults(func=cmd_component_add)

    # --- Manual template commands ---
    man_parser = subparsers.add_parser("manual", help="Manual EOL templates")
    man_sub = man_parser.add_subparsers(dest="action")

    ma = man_sub.add_parser("add", help="Add a manual component")
    ma.add_argument("name", help="Software name")
    ma.add_argument("--version", required=True, help="Version")
    ma.add_argument("--eol", required=True, help="EOL date (YYYY-MM-DD)")
    ma.set_defaults(func=cmd_manual_add)

    ml = man_sub.add_parser("list", help="List manual components")
    ml.set_defaults(func=cmd_manual_list)

    # --- Reports ---
    rp = subparsers.add_parser("report", help="EOL report")
    rp.add_argument("--product", help="Restrict to one product ID (default: all)")
    rp.add_argument("--csv", metavar="DIR", help="Write eol-tracker-<date>.csv into DIR")
    rp.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    rp.set_defaults(func=cmd_report)

    db = subparsers.add_parser("dashboard", help="Show EOL dashboard")
    db.set_defaults(func=cmd_dashboard)

    vs = subparsers.add_parser("versions", help="List registry versions for a slug")
    vs.add_argument("slug", help="endoflife.date slug")
    vs.set_defaults(func=cmd_versions)

    sl = subparsers.add_parser("slugs", help="List common registry slugs")
    sl.set_defaults(func=cmd_slugs)

    return parser


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    parser = build_parser()
    args = parser.parse_args()

    if not args.module:
        parser.print_help()
        sys.exit(1)

    if not hasattr(args, "func"):
        parser.parse_args([args.module, "--help"])
        sys.exit(1)

    try:
        args.func(args)
    except ValidationError as e:
        print(f"Error ({e.field}): {e.message}")
        sys.exit(1)
    except StorageError as e:
        print(f"Storage error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
