"""Resolve the effective EOL date of a component."""

from datetime import date
from typing import Iterable, Optional

import httpx

from tracker.endoflife import fetch_cycles, find_cycle
from tracker.product import Component, ManualComponent


def _template_date(
    component: Component, manual_templates: Iterable[ManualComponent]
) -> Optional[date]:
    if not component.manual_component_id:
        return None
    for template in manual_templates:
        if template.manual_component_id == component.manual_component_id:
            return template.eol_date
    return None


async def resolve(
    component: Component,
    manual_templates: Iterable[ManualComponent] = (),
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[date]:
    """Return the EOL date for *component*, or ``None`` when unknown.

    Priority:
      1. ``manual_eol_date`` on the component.
      2. For manual components, the date of the linked template (if any).
      3. The registry cycle whose id equals ``component.version`` exactly.

    Registry failures, unknown slugs and unknown versions all give ``None``.
    """
    if component.manual_eol_date:
        return component.manual_eol_date

    if component.is_manual:
        return _template_date(component, manual_templates)

    cycles = await fetch_cycles(component.slug, client)
    cycle = find_cycle(cycles, component.version)
    if cycle is None:
        return None
    return cycle.eol_date
