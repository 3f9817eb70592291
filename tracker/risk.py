"""EOL risk classification and time-remaining formatting."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from config.settings import EOL_WARNING_DAYS


class RiskTier(str, Enum):
    """Risk tier derived from days remaining until EOL."""

    SAFE = "safe"            # At least a year of support left
    WARNING = "warning"      # EOL within the warning window
    EXPIRED = "expired"      # Past EOL, or EOL unknown


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_remaining(eol_date: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole calendar days from *today* until *eol_date*.

    Times of day are discarded so an EOL falling today gives 0.
    """
    if eol_date is None:
        return None
    today = _as_date(today) if today is not None else date.today()
    return (_as_date(eol_date) - today).days


def tier_for(days: Optional[int], warning_days: int = EOL_WARNING_DAYS) -> RiskTier:
    if days is None or days < 0:
        return RiskTier.EXPIRED
    if days < warning_days:
        return RiskTier.WARNING
    return RiskTier.SAFE


def classify(
    eol_date: Optional[date], today: Optional[date] = None
) -> tuple[Optional[int], RiskTier]:
    """Return ``(days_remaining, tier)`` for *eol_date*.

    An unknown EOL date classifies as expired.
    """
    days = days_remaining(eol_date, today)
    return days, tier_for(days)


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def humanize_remaining(days: Optional[int]) -> str:
    """Human-readable time remaining, e.g. ``"1 year, 35 days"``."""
    if days is None:
        return "N/A"
    if days < 0:
        return f"{abs(days)} days overdue"
    if days < 30:
        return f"{days} days"
    if days < 365:
        return _plural(days // 30, "month")
    years, rest = divmod(days, 365)
    if rest == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')}, {rest} days"
