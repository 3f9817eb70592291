"""
Client for the endoflife.date public API.

Every lookup is fail-soft: a timeout, network error, non-2xx status or
malformed body yields an empty cycle list. Callers treat "no cycles" as
"EOL unknown" and never see an exception from this module.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Optional
from urllib.parse import quote

import httpx

from config.settings import EOL_API_BASE, EOL_API_TIMEOUT_SECONDS
from tracker.product import EOLCycle

logger = logging.getLogger(__name__)

# Well-known endoflife.date slugs offered when adding a component.
COMMON_SLUGS = [
    ("mssqlserver", "Microsoft SQL Server"),
    ("python", "Python"),
    ("nodejs", "Node.js"),
    ("java", "Java"),
    ("dotnet", ".NET"),
    ("php", "PHP"),
    ("ruby", "Ruby"),
    ("go", "Go"),
    ("postgresql", "PostgreSQL"),
    ("mysql", "MySQL"),
    ("mongodb", "MongoDB"),
    ("redis", "Redis"),
    ("nginx", "Nginx"),
    ("apache", "Apache HTTP Server"),
    ("ubuntu", "Ubuntu"),
    ("debian", "Debian"),
    ("centos", "CentOS"),
    ("windows", "Windows"),
    ("docker", "Docker"),
    ("kubernetes", "Kubernetes"),
    ("react", "React"),
    ("angular", "Angular"),
    ("vue", "Vue.js"),
    ("rails", "Ruby on Rails"),
    ("django", "Django"),
    ("spring", "Spring Framework"),
    ("laravel", "Laravel"),
]


@dataclass
class FetchResult:
    """Outcome of a single registry request."""

    slug: str
    cycles: list[EOLCycle] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def cycles_url(slug: str) -> str:
    """Build the API URL for *slug*, encoding it as a single path segment."""
    return f"{EOL_API_BASE}/{quote(slug, safe='')}.json"


async def fetch(slug: str, client: Optional[httpx.AsyncClient] = None) -> FetchResult:
    """Fetch cycles for *slug*, recording any failure on the result."""
    if client is None:
        async with httpx.AsyncClient(timeout=EOL_API_TIMEOUT_SECONDS) as own_client:
            return await _fetch(slug, own_client)
    return await _fetch(slug, client)


async def _fetch(slug: str, client: httpx.AsyncClient) -> FetchResult:
    try:
        # httpx timeouts are per phase; wait_for bounds the whole request.
        resp = await asyncio.wait_for(
            client.get(cycles_url(slug), timeout=EOL_API_TIMEOUT_SECONDS),
            EOL_API_TIMEOUT_SECONDS,
        )
    except (httpx.TimeoutException, asyncio.TimeoutError):
        logger.warning("Request timeout for slug: %s", slug)
        return FetchResult(slug, error="timeout")
    except httpx.HTTPError as e:
        logger.warning("Network error fetching EOL data for %s: %s", slug, e)
        return FetchResult(slug, error="network")

    if resp.status_code == 404:
        logger.warning("No EOL data found for slug: %s", slug)
        return FetchResult(slug, error="not_found")
    if not resp.is_success:
        logger.warning(
            "Failed to fetch EOL data for slug: %s (status: %s)", slug, resp.status_code
        )
        return FetchResult(slug, error=f"status_{resp.status_code}")

    try:
        data = resp.json()
    except ValueError:
        logger.warning("Malformed EOL response for slug: %s", slug)
        return FetchResult(slug, error="malformed")
    if not isinstance(data, list):
        logger.warning("Unexpected EOL response shape for slug: %s", slug)
        return FetchResult(slug, error="malformed")

    return FetchResult(
        slug, cycles=[EOLCycle.from_api(item) for item in data if isinstance(item, dict)]
    )


async def fetch_cycles(slug: str, client: Optional[httpx.AsyncClient] = None) -> list[EOLCycle]:
    """Return the cycle list for *slug*, or an empty list on any failure."""
    result = await fetch(slug, client)
    return result.cycles


def find_cycle(cycles: list[EOLCycle], version: str) -> Optional[EOLCycle]:
    """Exact string match of *version* against cycle identifiers."""
    for cycle in cycles:
        if cycle.cycle == version:
            return cycle
    return None


def list_versions(cycles: list[EOLCycle]) -> list[str]:
    """Cycle identifiers, newest first.

    Pairs that both parse as numbers are compared numerically, anything
    else falls back to descending string comparison.
    """
    def _num(v):
        try:
            return float(v)
        except ValueError:
            return None

    def _cmp(a, b):
        na, nb = _num(a), _num(b)
        if na is not None and nb is not None:
            return (nb > na) - (nb < na)
        return (b > a) - (b < a)

    return sorted((c.cycle for c in cycles), key=cmp_to_key(_cmp))
