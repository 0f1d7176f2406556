"""Chart series shaping: ``{label, value, color}`` points for the rendering layer."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping

from campaign_dashboard.weekly import DATE_FORMAT

REVENUE_COLOR = "#10B981"
SPEND_COLOR = "#3B82F6"
IMPRESSIONS_COLOR = "#F59E0B"
CLICKS_COLOR = "#EF4444"
DEVICE_COLORS: Dict[str, str] = {"Mobile": "#3B82F6", "Desktop": "#10B981"}


def series_point(label: str, value: float, color: str | None = None) -> Dict[str, Any]:
    point: Dict[str, Any] = {"label": label, "value": value}
    if color is not None:
        point["color"] = color
    return point


def to_series(
    rows: Iterable[Mapping[str, Any]],
    label_key: str,
    value_key: str,
    color: str | None = None,
) -> List[Dict[str, Any]]:
    return [series_point(str(row[label_key]), row[value_key], color) for row in rows]


def week_label(week_start: str) -> str:
    try:
        start = datetime.strptime(week_start, DATE_FORMAT)
    except ValueError:
        return f"Week {week_start}"
    return f"Week {start:%b} {start.day}"


def weekly_series(weeks: Iterable[Mapping[str, Any]], value_key: str, color: str) -> List[Dict[str, Any]]:
    return [series_point(week_label(str(week["week_start"])), week[value_key], color) for week in weeks]


def device_series(buckets: Mapping[str, Mapping[str, Any]], value_key: str) -> List[Dict[str, Any]]:
    return [series_point(device, bucket[value_key], DEVICE_COLORS.get(device)) for device, bucket in buckets.items()]
