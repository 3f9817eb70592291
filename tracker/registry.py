"""Inventory registry: persistent storage and CRUD for products and components."""

import json
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional

from tracker.product import Component, ManualComponent, Product


class StorageError(RuntimeError):
    """Raised when the backing store cannot be read or written."""


class InventoryRegistry:
    """Central store for products, components and manual EOL templates.

    Data is kept in a single JSON document with three tables:
    ``products``, ``components`` and ``manual_components``.
    """

    def __init__(self, storage_path: str = "data/inventory.json"):
        self._path = Path(storage_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._products: dict[str, Product] = {}
        self._components: dict[str, Component] = {}
        self._manual: dict[str, ManualComponent] = {}
        self._load()

    # ---- Products ----

    def add_product(self, product: Product) -> Product:
        product.created_at = datetime.utcnow()
        product.updated_at = datetime.utcnow()
        self._commit(products={**self._products, product.product_id: product})
        return product

    def update_product(self, product_id: str, **fields) -> Optional[Product]:
        """Update fields on an existing product."""
        product = self._products.get(product_id)
        if not product:
            return None
        changes = {k: v for k, v in fields.items() if hasattr(product, k)}
        changes["updated_at"] = datetime.utcnow()
        updated = replace(product, **changes)
        self._commit(products={**self._products, product_id: updated})
        return updated

    def remove_product(self, product_id: str) -> bool:
        """Remove a product and every component linked to it."""
        if product_id not in self._products:
            return False
        self._commit(
            products={pid: p for pid, p in self._products.items() if pid != product_id},
            components={
                cid: c for cid, c in self._components.items()
                if c.product_id != product_id
            },
        )
        return True

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def list_products(self) -> list[Product]:
        return list(self._products.values())

    # ---- Components ----

    def add_component(self, component: Component) -> Component:
        component.created_at = datetime.utcnow()
        self._commit(components={**self._components, component.component_id: component})
        return component

    def remove_component(self, component_id: str) -> bool:
        if component_id not in self._components:
            return False
        self._commit(components={
            cid: c for cid, c in self._components.items() if cid != component_id
        })
        return True

    def list_components(self) -> list[Component]:
        return list(self._components.values())

    def linked_components(self) -> list[Component]:
        """Components whose ``product_id`` is not null."""
        return [c for c in self._components.values() if c.product_id is not None]

    def components_for(self, product_id: str) -> list[Component]:
        return [c for c in self._components.values() if c.product_id == product_id]

    # ---- Manual templates ----

    def add_manual_component(self, template: ManualComponent) -> ManualComponent:
        template.created_at = datetime.utcnow()
        self._commit(manual={**self._manual, template.manual_component_id: template})
        return template

    def remove_manual_component(self, manual_component_id: str) -> bool:
        """Delete a template; components already created from it keep their date."""
        if manual_component_id not in self._manual:
            return False
        self._commit(manual={
            mid: m for mid, m in self._manual.items() if mid != manual_component_id
        })
        return True

    def get_manual_component(self, manual_component_id: str) -> Optional[ManualComponent]:
        return self._manual.get(manual_component_id)

    def list_manual_components(self) -> list[ManualComponent]:
        return sorted(self._manual.values(), key=lambda m: m.name.lower())

    # ---- Persistence ----

    def _commit(self, products=None, components=None, manual=None) -> None:
        """Write the new tables, adopting them in memory only once saved."""
        products = self._products if products is None else products
        components = self._components if components is None else components
        manual = self._manual if manual is None else manual
        data = {
            "products": [p.to_dict() for p in products.values()],
            "components": [c.to_dict() for c in components.values()],
            "manual_components": [m.to_dict() for m in manual.values()],
        }
        try:
            self._path.write_text(json.dumps(data, indent=2, default=str))
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e
        self._products, self._components, self._manual = products, components, manual

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text())
            for item in data.get("products", []):
                product = Product.from_dict(item)
                self._products[product.product_id] = product
            for item in data.get("components", []):
                component = Component.from_dict(item)
                self._components[component.component_id] = component
            for item in data.get("manual_components", []):
                template = ManualComponent.from_dict(item)
                self._manual[template.manual_component_id] = template
        except (OSError, json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError) as e:
            raise StorageError(f"Failed to load {self._path}: {e}") from e
