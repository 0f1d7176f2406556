"""Row selection helpers for tables and summary panels."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from campaign_dashboard.metrics import safe_ratio


def _sort_value(row: Mapping[str, Any], key: str) -> float:
    value = row.get(key)
    if value is None or value != value:
        return float("-inf")
    return float(value)


def sort_rows(rows: Iterable[Mapping[str, Any]], key: str, descending: bool = True) -> List[Dict[str, Any]]:
    """Stable sort on a numeric column; missing and NaN values sort lowest."""
    return sorted((dict(row) for row in rows), key=lambda row: _sort_value(row, key), reverse=descending)


def top_n(rows: Iterable[Mapping[str, Any]], key: str, n: int) -> List[Dict[str, Any]]:
    if n <= 0:
        return []
    return sort_rows(rows, key, descending=True)[:n]


def week_roi(revenue: float, spend: float) -> float:
    return safe_ratio(revenue, spend)


def recent_weeks(weeks: Iterable[Mapping[str, Any]], n: int = 3) -> List[Dict[str, Any]]:
    """Last ``n`` weeks of a chronologically ordered list, each with ``roi_pct``."""
    if n <= 0:
        return []
    selected = list(weeks)[-n:]
    return [
        {**week, "roi_pct": week_roi(float(week["revenue"]), float(week["spend"])) * 100}
        for week in selected
    ]


def normalize_values(rows: Iterable[Mapping[str, Any]], key: str) -> List[Dict[str, Any]]:
    """Attach ``normalized_value`` in [0, 1]; a flat range maps every row to 0.5."""
    items = [dict(row) for row in rows]
    if not items:
        return items
    values = [float(item[key]) for item in items]
    low, high = min(values), max(values)
    spread = high - low
    for item, value in zip(items, values):
        item["normalized_value"] = (value - low) / spread if spread > 0 else 0.5
    return items
