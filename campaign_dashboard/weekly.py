"""Weekly aggregator: chronological rollups per (week_start, week_end)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

import polars as pl

from campaign_dashboard.domain.models import Campaign, MarketingData
from campaign_dashboard.ingestion import COUNTER_COLUMNS, weekly_frame

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class WeeklyResult:
    total_revenue: float
    total_spend: float
    total_impressions: float
    total_clicks: float
    total_conversions: float
    weeks: pl.DataFrame

    @property
    def weekly_data(self) -> List[Dict[str, Any]]:
        return self.weeks.to_dicts()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRevenue": self.total_revenue,
            "totalSpend": self.total_spend,
            "totalImpressions": self.total_impressions,
            "totalClicks": self.total_clicks,
            "totalConversions": self.total_conversions,
            "weeklyData": self.weekly_data,
        }


class WeeklyAggregator:
    """Sum weekly breakdowns per exact week pair; no rates are derived at this level."""

    KEYS: List[str] = ["week_start", "week_end"]
    RESULT_COLUMNS: List[str] = KEYS + COUNTER_COLUMNS

    @staticmethod
    def _week_start_date_expr() -> pl.Expr:
        return pl.col("week_start").str.to_date(DATE_FORMAT, strict=False)

    def aggregate(self, df: pl.DataFrame) -> pl.DataFrame:
        grouped = df.group_by(self.KEYS, maintain_order=True).agg([pl.col(name).sum() for name in COUNTER_COLUMNS])
        # Unparseable starts go last, in first-seen order.
        ordered = grouped.sort(self._week_start_date_expr(), nulls_last=True, maintain_order=True)
        return ordered.select(self.RESULT_COLUMNS)

    def run(self, data: MarketingData | Iterable[Campaign] | None) -> WeeklyResult:
        weeks = self.aggregate(weekly_frame(data))
        totals = weeks.select([pl.col(name).sum() for name in COUNTER_COLUMNS]).row(0, named=True)
        return WeeklyResult(
            total_revenue=float(totals["revenue"] or 0.0),
            total_spend=float(totals["spend"] or 0.0),
            total_impressions=float(totals["impressions"] or 0.0),
            total_clicks=float(totals["clicks"] or 0.0),
            total_conversions=float(totals["conversions"] or 0.0),
            weeks=weeks,
        )
