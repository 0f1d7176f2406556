"""Text rendering helpers for dashboard summary panels."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from campaign_dashboard.application.reporting.formatting import (
    fmt_count,
    fmt_money,
    fmt_pct,
    fmt_roas,
    to_float,
)
from campaign_dashboard.application.reporting.series import week_label


def top_region_banner(top_region: Mapping[str, Any] | None) -> str:
    if not top_region:
        return "No regional data available"
    return (
        f"Top Performing Region: {top_region.get('region', '')}, {top_region.get('country', '')} | "
        f"{int(to_float(top_region.get('campaignCount')))} campaigns | "
        f"ROAS: {fmt_roas(to_float(top_region.get('roas')))} | "
        f"Revenue {fmt_money(to_float(top_region.get('revenue')))}"
    )


def device_card_lines(device: str, bucket: Mapping[str, Any]) -> List[str]:
    return [
        f"{device} Impressions: {fmt_count(to_float(bucket.get('impressions')))}",
        f"{device} Clicks: {fmt_count(to_float(bucket.get('clicks')))}",
        f"{device} Conversions: {fmt_count(to_float(bucket.get('conversions')))}",
        f"{device} Spend: {fmt_money(to_float(bucket.get('spend')))}",
        f"{device} Revenue: {fmt_money(to_float(bucket.get('revenue')))}",
        f"{device} Traffic Share: {fmt_pct(bucket.get('percentage_of_traffic'), digits=1)}",
        f"{device} CTR: {fmt_pct(to_float(bucket.get('ctr')))}",
        f"{device} Conversion Rate: {fmt_pct(to_float(bucket.get('conversion_rate')))}",
    ]


def recent_weeks_lines(weeks: Iterable[Dict[str, Any]]) -> List[str]:
    lines: List[str] = []
    for week in weeks:
        lines.append(
            f"{week_label(str(week.get('week_start', '')))}: "
            f"Revenue {fmt_money(to_float(week.get('revenue')))}, "
            f"Spend {fmt_money(to_float(week.get('spend')))}, "
            f"ROI {fmt_pct(to_float(week.get('roi_pct')), digits=1)}"
        )
    return lines
