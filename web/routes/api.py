"""REST API v1: JSON endpoints for products, components and EOL reports."""

import asyncio
from datetime import date

import httpx
from flask import Blueprint, Response, jsonify, request

from config.settings import EOL_API_TIMEOUT_SECONDS
from web.services import get_eol_transport, get_logo_store, get_registry, get_report_generator
from tracker.endoflife import COMMON_SLUGS, fetch_cycles, list_versions
from tracker.inventory import (
    ValidationError,
    add_component,
    add_manual_component,
    add_product,
    update_product_details,
)
from tracker.registry import StorageError
from tracker.reports import csv_filename, summary_stats, to_csv

bp = Blueprint("api", __name__)


def _error(message, status=400, field=None):
    body = {"error": message}
    if field:
        body["field"] = field
    return jsonify(body), status


@bp.errorhandler(ValidationError)
def handle_validation_error(e):
    return _error(e.message, 400, e.field)


@bp.errorhandler(StorageError)
def handle_storage_error(e):
    return _error(f"Storage failure: {e}", 500)


# ── Products ─────────────────────────────────────────────────────────

@bp.route("/products")
def list_products():
    registry = get_registry()
    return jsonify([p.to_dict() for p in registry.list_products()])


@bp.route("/products/<product_id>")
def get_product(product_id):
    registry = get_registry()
    product = registry.get_product(product_id)
    if not product:
        return _error("Product not found", 404)
    data = product.to_dict()
    data["components"] = [c.to_dict() for c in registry.components_for(product_id)]
    return jsonify(data)


@bp.route("/products", methods=["POST"])
def create_product():
    data = request.get_json(silent=True) or {}
    product = add_product(
        get_registry(),
        data.get("name"),
        arr=data.get("arr"),
        cost=data.get("cost"),
        customer_count=data.get("customer_count"),
        description=data.get("description"),
        notes=data.get("notes"),
    )
    return jsonify(product.to_dict()), 201


@bp.route("/products/<product_id>", methods=["PATCH", "POST"])
def update_product(product_id):
    """Update product details; accepts JSON or multipart with a ``logo`` file."""
    if request.files or request.form:
        data = request.form.to_dict()
    else:
        data = request.get_json(silent=True) or {}

    logo = None
    upload = request.files.get("logo")
    if upload and upload.filename:
        logo = (upload.filename, upload.read())

    product = update_product_details(
        get_registry(),
        product_id,
        name=data.get("name"),
        arr=data.get("arr"),
        cost=data.get("cost"),
        customer_count=data.get("customer_count"),
        description=data.get("description", ""),
        notes=data.get("notes", ""),
        logo=logo,
        logo_store=get_logo_store(),
    )
    if product is None:
        return _error("Product not found", 404)
    return jsonify(product.to_dict())


@bp.route("/products/<product_id>", methods=["DELETE"])
def delete_product(product_id):
    registry = get_registry()
    if registry.remove_product(product_id):
        return jsonify({"deleted": True})
    return _error("Product not found", 404)


# ── Components ───────────────────────────────────────────────────────

@bp.route("/components")
def list_components():
    registry = get_registry()
    product_id = request.args.get("product")
    if product_id:
        components = registry.components_for(product_id)
    else:
        components = registry.linked_components()
    return jsonify([c.to_dict() for c in components])


@bp.route("/components", methods=["POST"])
def create_component():
    data = request.get_json(silent=True) or {}
    component = add_component(
        get_registry(),
        data.get("product_id"),
        name=data.get("name"),
        slug=data.get("slug"),
        version=data.get("version"),
        manual_component_id=data.get("manual_component_id"),
    )
    return jsonify(component.to_dict()), 201


@bp.route("/components/<component_id>", methods=["DELETE"])
def delete_component(component_id):
    registry = get_registry()
    if registry.remove_component(component_id):
        return jsonify({"deleted": True})
    return _error("Component not found", 404)


# ── Manual templates ─────────────────────────────────────────────────

@bp.route("/manual-components")
def list_manual_components():
    registry = get_registry()
    return jsonify([m.to_dict() for m in registry.list_manual_components()])


@bp.route("/manual-components", methods=["POST"])
def create_manual_component():
    data = request.get_json(silent=True) or {}
    template = add_manual_component(
        get_registry(),
        data.get("name"),
        data.get("version"),
        data.get("eol_date"),
    )
    return jsonify(template.to_dict()), 201


@bp.route("/manual-components/<manual_component_id>", methods=["DELETE"])
def delete_manual_component(manual_component_id):
    registry = get_registry()
    if registry.remove_manual_component(manual_component_id):
        return jsonify({"deleted": True})
    return _error("Manual component not found", 404)


# ── EOL report ───────────────────────────────────────────────────────

@bp.route("/report")
def eol_report():
    report_gen = get_report_generator()
    statuses = report_gen.eol_report(request.args.get("product"))
    return jsonify([s.to_dict() for s in statuses])


@bp.route("/report.csv")
def eol_report_csv():
    report_gen = get_report_generator()
    statuses = report_gen.eol_report(request.args.get("product"))
    return Response(
        to_csv(statuses),
        mimetype="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={csv_filename(date.today())}",
        },
    )


@bp.route("/stats")
def stats():
    registry = get_registry()
    statuses = get_report_generator(registry).eol_report()
    return jsonify(summary_stats(registry.list_products(), statuses))


# ── Registry lookups ─────────────────────────────────────────────────

@bp.route("/slugs")
def common_slugs():
    return jsonify([{"value": v, "label": label} for v, label in COMMON_SLUGS])


@bp.route("/versions/<path:slug>")
def versions(slug):
    async def _load():
        async with httpx.AsyncClient(
            timeout=EOL_API_TIMEOUT_SECONDS, transport=get_eol_transport()
        ) as client:
            return await fetch_cycles(slug.strip(), client)

    return jsonify(list_versions(asyncio.run(_load())))
