"""
Create and update flows for products, components and manual templates.

Every function validates its input completely before touching the
registry, so a rejected request never leaves a partial write behind.
"""

from datetime import date, datetime
from typing import Optional

from tracker.product import MANUAL_SLUG, Component, ManualComponent, Product, parse_date


class ValidationError(ValueError):
    """Invalid input for a create/update flow."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def _text(value) -> str:
    return str(value).strip() if value is not None else ""


def _required(field: str, value, message: Optional[str] = None) -> str:
    value = _text(value)
    if not value:
        raise ValidationError(field, message or f"{field.replace('_', ' ').capitalize()} is required")
    return value


def _optional_number(field: str, value, cast):
    """Blank clears the value; anything else must parse as *cast*."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"{field.replace('_', ' ').capitalize()} must be a number") from None


def _required_date(field: str, value) -> date:
    if not value:
        raise ValidationError(field, "EOL date is required")
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        raise ValidationError(field, "EOL date must be YYYY-MM-DD") from None


def add_product(registry, name: str, **details) -> Product:
    product = Product(
        name=_required("name", name, "Product name is required"),
        description=_text(details.get("description")),
        notes=_text(details.get("notes")),
        arr=_optional_number("arr", details.get("arr"), float),
        cost=_optional_number("cost", details.get("cost"), float),
        customer_count=_optional_number("customer_count", details.get("customer_count"), int),
    )
    return registry.add_product(product)


def add_component(
    registry,
    product_id: str,
    name: str = "",
    slug: str = "",
    version: str = "",
    manual_component_id: Optional[str] = None,
) -> Component:
    """Attach a component to a product.

    With *manual_component_id* the template's EOL date is copied onto the
    component and the slug is set to ``"manual"``; name and version default
    to the template's. Otherwise name, slug and version are all required.
    """
    if not product_id or registry.get_product(product_id) is None:
        raise ValidationError("product_id", "Product not found")

    if manual_component_id:
        template = registry.get_manual_component(manual_component_id)
        if template is None:
            raise ValidationError("manual_component_id", "Selected manual component not found")
        component = Component(
            product_id=product_id,
            name=_text(name) or template.name,
            slug=MANUAL_SLUG,
            version=_text(version) or template.version,
            manual_eol_date=template.eol_date,
            manual_component_id=template.manual_component_id,
        )
        return registry.add_component(component)

    name = _text(name)
    slug = _text(slug)
    version = _text(version)
    for field, value in (("name", name), ("slug", slug), ("version", version)):
        if not value:
            raise ValidationError(field, "All fields are required")
    if slug == MANUAL_SLUG:
        raise ValidationError("manual_component_id", "Please select a manual component")

    component = Component(product_id=product_id, name=name, slug=slug, version=version)
    return registry.add_component(component)


def add_manual_component(registry, name: str, version: str, eol_date) -> ManualComponent:
    template = ManualComponent(
        name=_required("name", name),
        version=_required("version", version),
        eol_date=_required_date("eol_date", eol_date),
    )
    return registry.add_manual_component(template)


def update_product_details(
    registry,
    product_id: str,
    name: str,
    arr=None,
    cost=None,
    customer_count=None,
    description: str = "",
    notes: str = "",
    logo: Optional[tuple[str, bytes]] = None,
    logo_store=None,
) -> Optional[Product]:
    """Replace a product's editable details; returns ``None`` if it does not exist.

    *logo* is an optional ``(filename, data)`` pair uploaded through
    *logo_store*, whose public URL becomes the product's ``logo_url``.
    """
    product = registry.get_product(product_id)
    if product is None:
        return None

    fields = {
        "name": _required("name", name, "Product name is required"),
        "arr": _optional_number("arr", arr, float),
        "cost": _optional_number("cost", cost, float),
        "customer_count": _optional_number("customer_count", customer_count, int),
        "description": _text(description),
        "notes": _text(notes),
    }

    if logo is not None:
        if logo_store is None:
            raise ValidationError("logo", "Logo uploads are not configured")
        filename, data = logo
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        stamp = int(datetime.utcnow().timestamp() * 1000)
        fields["logo_url"] = logo_store.upload(f"{product_id}/{stamp}.{ext}", data)

    return registry.update_product(product_id, **fields)


def format_currency(value: Optional[float]) -> str:
    """``$1,234`` style amount, or ``N/A`` when unset."""
    if value is None:
        return "N/A"
    return f"${value:,.0f}"
