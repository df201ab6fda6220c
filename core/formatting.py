"""Formatting helpers for Spendlens summaries."""

from __future__ import annotations

import math
from typing import Any

__all__ = ["coerce_amount", "round_money", "format_currency"]


def coerce_amount(value: Any, default: float = 0.0) -> float:
    """Return ``value`` as a finite float, or ``default`` when it is not one."""

    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return number


def round_money(value: float) -> float:
    """Round to cents with the built-in ``round`` (half-to-even on the binary value)."""

    # ``+ 0.0`` turns -0.0 into 0.0
    return round(float(value), 2) + 0.0


def format_currency(currency: str | None, amount: float) -> str:
    """Prefix ``amount`` (two decimals, no grouping) with the currency marker."""

    return f"{currency or ''}{float(amount):.2f}"
