"""Core data model for products, their components and EOL cycles."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

# Slug stored on components whose EOL date is entered by hand.
MANUAL_SLUG = "manual"


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


def _fmt_date(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d else None


def parse_date(val) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a date."""
    if not val:
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    try:
        return date.fromisoformat(val)
    except ValueError:
        return datetime.fromisoformat(val).date()


@dataclass
class Product:
    """A product owning zero or more tracked components."""

    name: str

    # Display / financial metadata
    logo_url: str = ""
    arr: Optional[float] = None
    cost: Optional[float] = None
    customer_count: Optional[int] = None
    description: str = ""
    notes: str = ""

    product_id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "logo_url": self.logo_url,
            "arr": self.arr,
            "cost": self.cost,
            "customer_count": self.customer_count,
            "description": self.description,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            product_id=data.get("product_id", _new_id()),
            name=data["name"],
            logo_url=data.get("logo_url", ""),
            arr=data.get("arr"),
            cost=data.get("cost"),
            customer_count=data.get("customer_count"),
            description=data.get("description", ""),
            notes=data.get("notes", ""),
            created_at=_parse_dt(data.get("created_at")),
            updated_at=_parse_dt(data.get("updated_at")),
        )


@dataclass
class Component:
    """A piece of software used by a product.

    ``product_id`` is ``None`` for unlinked components. ``slug`` is the
    endoflife.date product identifier, or :data:`MANUAL_SLUG` when the EOL
    date comes from ``manual_eol_date`` (usually copied from a
    :class:`ManualComponent` at creation time).
    """

    name: str
    slug: str
    version: str
    product_id: Optional[str] = None
    manual_eol_date: Optional[date] = None
    manual_component_id: Optional[str] = None

    component_id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_manual(self) -> bool:
        return self.slug == MANUAL_SLUG

    def to_dict(self) -> dict:
        return {
            "component_id": self.component_id,
            "product_id": self.product_id,
            "name": self.name,
            "slug": self.slug,
            "version": self.version,
            "manual_eol_date": _fmt_date(self.manual_eol_date),
            "manual_component_id": self.manual_component_id,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Component":
        return cls(
            component_id=data.get("component_id", _new_id()),
            product_id=data.get("product_id"),
            name=data["name"],
            slug=data["slug"],
            version=data.get("version", ""),
            manual_eol_date=parse_date(data.get("manual_eol_date")),
            manual_component_id=data.get("manual_component_id"),
            created_at=_parse_dt(data.get("created_at")),
        )


@dataclass
class ManualComponent:
    """User-entered EOL reference for software missing from the public registry."""

    name: str
    version: str
    eol_date: date
    manual_component_id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "manual_component_id": self.manual_component_id,
            "name": self.name,
            "version": self.version,
            "eol_date": self.eol_date.isoformat(),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ManualComponent":
        return cls(
            manual_component_id=data.get("manual_component_id", _new_id()),
            name=data["name"],
            version=data.get("version", ""),
            eol_date=parse_date(data["eol_date"]),
            created_at=_parse_dt(data.get("created_at")),
        )


@dataclass(frozen=True)
class EOLCycle:
    """One release line as published by endoflife.date.

    ``eol`` holds the raw API value: an ISO date string, a boolean, or
    ``None``. Use :attr:`eol_date` for the parsed date.
    """

    cycle: str
    eol: object = None
    release_date: Optional[str] = None
    latest: Optional[str] = None
    lts: object = None

    @property
    def eol_date(self) -> Optional[date]:
        if not isinstance(self.eol, str) or not self.eol:
            return None
        try:
            return date.fromisoformat(self.eol)
        except ValueError:
            return None

    @classmethod
    def from_api(cls, data: dict) -> "EOLCycle":
        return cls(
            cycle=str(data.get("cycle", "")),
            eol=data.get("eol"),
            release_date=data.get("releaseDate"),
            latest=data.get("latest"),
            lts=data.get("lts"),
        )


def _parse_dt(val) -> datetime:
    if not val:
        return datetime.utcnow()
    return datetime.fromisoformat(val)
