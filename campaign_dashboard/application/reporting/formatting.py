"""Shared number formatting for summary cards and console output."""

from __future__ import annotations

import math
from typing import Any


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def _is_missing(value: float | None) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def fmt_money(value: float | None) -> str:
    if _is_missing(value):
        return "$0"
    return f"${value:,.0f}"


def fmt_money_compact(value: float | None) -> str:
    if _is_missing(value):
        return "$0"
    sign = "-" if value < 0 else ""
    abs_value = abs(value)
    if abs_value >= 1_000_000:
        return f"{sign}${abs_value / 1_000_000:.1f}M"
    if abs_value >= 1_000:
        return f"{sign}${abs_value / 1_000:.0f}K"
    return f"{sign}${abs_value:.0f}"


def fmt_count(value: float | None) -> str:
    if _is_missing(value):
        return "0"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def fmt_pct(value: float | None, digits: int = 2) -> str:
    """Format an already-scaled percentage (5.0 -> '5.00%')."""
    if _is_missing(value):
        return "N/A"
    return f"{value:.{digits}f}%"


def fmt_roas(value: float | None) -> str:
    if _is_missing(value):
        return "N/A"
    return f"{value:.1f}x"
