"""Regional aggregator: rollups per (region, country) with recomputed rates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import polars as pl

from campaign_dashboard.domain.models import Campaign, MarketingData
from campaign_dashboard.ingestion import COUNTER_COLUMNS, regional_frame
from campaign_dashboard.metrics import conversion_rate_expr, cpa_expr, cpc_expr, ctr_expr, roas_expr

VALUE_KEYS: Tuple[str, ...] = ("revenue", "spend")
LocationLookup = Mapping[str, Tuple[float, float]]


def validate_value_key(value_key: str) -> str:
    if value_key not in VALUE_KEYS:
        raise ValueError(f"value_key must be one of {list(VALUE_KEYS)}, got {value_key!r}")
    return value_key


@dataclass(frozen=True)
class RegionalResult:
    total_revenue: float
    total_spend: float
    total_impressions: float
    total_clicks: float
    total_conversions: float
    regions: pl.DataFrame
    top_region: Dict[str, Any] | None
    value_key: str = "revenue"

    @property
    def regional_data(self) -> List[Dict[str, Any]]:
        return self.regions.to_dicts()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRevenue": self.total_revenue,
            "totalSpend": self.total_spend,
            "totalImpressions": self.total_impressions,
            "totalClicks": self.total_clicks,
            "totalConversions": self.total_conversions,
            "regionalData": self.regional_data,
            "topRegion": self.top_region,
            "valueKey": self.value_key,
        }


class RegionalAggregator:
    """Fold every campaign's regional breakdown into one row per (region, country)."""

    KEYS: List[str] = ["region", "country"]
    RESULT_COLUMNS: List[str] = KEYS + COUNTER_COLUMNS + [
        "ctr",
        "conversion_rate",
        "cpc",
        "cpa",
        "roas",
        "campaignCount",
        "lat",
        "lng",
        "value",
    ]

    def __init__(self, locations: LocationLookup | None = None) -> None:
        self.locations: Dict[str, Tuple[float, float]] = dict(locations or {})

    def _sum_aggregations(self) -> List[pl.Expr]:
        return [pl.col(name).sum() for name in COUNTER_COLUMNS] + [pl.len().cast(pl.Int64).alias("campaignCount")]

    def _location_frame(self) -> pl.DataFrame:
        return pl.DataFrame(
            {
                "region": list(self.locations.keys()),
                "lat": [float(lat) for lat, _ in self.locations.values()],
                "lng": [float(lng) for _, lng in self.locations.values()],
            },
            schema={"region": pl.Utf8, "lat": pl.Float64, "lng": pl.Float64},
        )

    def aggregate(self, df: pl.DataFrame, value_key: str = "revenue") -> pl.DataFrame:
        """Group rows by region/country in first-seen order and derive rates from the sums."""
        validate_value_key(value_key)
        grouped = df.group_by(self.KEYS, maintain_order=True).agg(self._sum_aggregations())
        grouped = grouped.with_columns(ctr_expr(), conversion_rate_expr(), cpc_expr(), cpa_expr(), roas_expr())
        with_locations = (
            grouped.with_row_index("_order")
            .join(self._location_frame(), on="region", how="left")
            .sort("_order")
        )
        return with_locations.with_columns(pl.col(value_key).alias("value")).select(self.RESULT_COLUMNS)

    @staticmethod
    def top_region(rows: Iterable[Dict[str, Any]]) -> Dict[str, Any] | None:
        # Strict '>' from a zero floor: ties keep the earlier row, zero revenue never wins.
        top: Dict[str, Any] | None = None
        for row in rows:
            if row["revenue"] > (top["revenue"] if top is not None else 0):
                top = row
        return top

    def run(
        self,
        data: MarketingData | Iterable[Campaign] | None,
        value_key: str = "revenue",
    ) -> RegionalResult:
        regions = self.aggregate(regional_frame(data), value_key=value_key)
        totals = regions.select([pl.col(name).sum() for name in COUNTER_COLUMNS]).row(0, named=True)
        rows = regions.to_dicts()
        return RegionalResult(
            total_revenue=float(totals["revenue"] or 0.0),
            total_spend=float(totals["spend"] or 0.0),
            total_impressions=float(totals["impressions"] or 0.0),
            total_clicks=float(totals["clicks"] or 0.0),
            total_conversions=float(totals["conversions"] or 0.0),
            regions=regions,
            top_region=self.top_region(rows),
            value_key=value_key,
        )
