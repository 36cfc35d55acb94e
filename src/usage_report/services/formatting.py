"""Number and label formatting shared by the summary and any renderer."""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_DATE_SUFFIX = re.compile(r"-\d{8}$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def _fixed(value: float, places: int) -> str:
    # Rounds the exact binary value, so 1.25 -> "1.3" rather than "1.2".
    quantum = Decimal(1).scaleb(-places)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def fmt_tokens(n: float) -> str:
    """Abbreviate a count: ``1.23B``, ``4.56M``, ``7.8K`` or the bare integer.

    Negative values get a leading ``-`` and the same treatment as their magnitude.
    """
    if n < 0:
        return "-" + fmt_tokens(-n)
    if n >= 1_000_000_000:
        return _fixed(n / 1_000_000_000, 2) + "B"
    if n >= 1_000_000:
        return _fixed(n / 1_000_000, 2) + "M"
    if n >= 1_000:
        return _fixed(n / 1_000, 1) + "K"
    if isinstance(n, float) and not n.is_integer():
        return str(n)
    return str(int(n))


def fmt_count(n: int) -> str:
    """Thousands-grouped integer, e.g. ``12,345``."""
    return f"{n:,}"


def fmt_money(amount: float, symbol: str = "$") -> str:
    """Whole currency units with grouping, e.g. ``$1,235``.

    Halves round away from zero.
    """
    whole = round_half_up(abs(amount))
    sign = "-" if amount < 0 and whole else ""
    return f"{sign}{symbol}{whole:,}"


def pct(part: float, whole: float) -> str:
    """``part`` as a percentage of ``whole`` to one decimal; ``"0"`` when whole is 0."""
    if not whole:
        return "0"
    return _fixed(part / whole * 100, 1)


def bar_percent(fraction: float, floor: float = 1.0) -> float:
    """Bar height in percent, raised to ``floor`` so empty bars stay visible."""
    return max(fraction * 100, floor)


def model_short_name(model_id: str) -> str:
    """Drop the ``claude-`` prefix and any trailing date stamp from a model id."""
    return _DATE_SUFFIX.sub("", model_id.replace("claude-", "", 1))
