"""Device aggregator: Mobile/Desktop buckets, traffic share and per-campaign rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

import polars as pl

from campaign_dashboard.domain.models import Campaign, MarketingData
from campaign_dashboard.ingestion import COUNTER_COLUMNS, device_frame
from campaign_dashboard.metrics import conversion_rate_expr, ctr_expr, roas_expr, traffic_share_expr

MOBILE = "Mobile"
DESKTOP = "Desktop"
DEVICE_LABELS: List[str] = [MOBILE, DESKTOP]


@dataclass(frozen=True)
class DeviceResult:
    buckets: pl.DataFrame
    performance_by_campaign: pl.DataFrame

    def bucket(self, device: str) -> Dict[str, Any]:
        row = self.buckets.filter(pl.col("device") == device).row(0, named=True)
        return {name: value for name, value in row.items() if name != "device"}

    @property
    def mobile(self) -> Dict[str, Any]:
        return self.bucket(MOBILE)

    @property
    def desktop(self) -> Dict[str, Any]:
        return self.bucket(DESKTOP)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mobile": self.mobile,
            "desktop": self.desktop,
            "performanceByCampaign": self.performance_by_campaign.to_dicts(),
        }


class DeviceAggregator:
    """Sum device breakdowns into exactly two buckets; other labels are dropped."""

    BUCKET_COLUMNS: List[str] = ["device"] + COUNTER_COLUMNS + [
        "ctr",
        "conversion_rate",
        "percentage_of_traffic",
        "campaignCount",
    ]
    ROW_COLUMNS: List[str] = ["campaignName", "device"] + COUNTER_COLUMNS + ["ctr", "conversion_rate", "roas"]

    def aggregate(self, df: pl.DataFrame, loaded: bool = True) -> pl.DataFrame:
        """Sum matching entries into Mobile and Desktop buckets.

        ``percentage_of_traffic`` is NaN when a loaded dataset has no Mobile or
        Desktop impressions; with nothing loaded every bucket value is 0.
        """
        known = df.filter(pl.col("device").is_in(DEVICE_LABELS))
        grouped = known.group_by("device").agg(
            [pl.col(name).sum() for name in COUNTER_COLUMNS] + [pl.len().cast(pl.Int64).alias("campaignCount")]
        )
        # Both buckets always exist, zero-filled when no entry matched.
        skeleton = pl.DataFrame({"device": DEVICE_LABELS}, schema={"device": pl.Utf8}).with_row_index("_order")
        buckets = skeleton.join(grouped, on="device", how="left").sort("_order").with_columns(
            [pl.col(name).fill_null(0.0) for name in COUNTER_COLUMNS] + [pl.col("campaignCount").fill_null(0)]
        )
        buckets = buckets.with_columns(ctr_expr(), conversion_rate_expr(), traffic_share_expr())
        if not loaded:
            buckets = buckets.with_columns(pl.col("percentage_of_traffic").fill_nan(0.0))
        return buckets.select(self.BUCKET_COLUMNS)

    def campaign_rows(self, df: pl.DataFrame) -> pl.DataFrame:
        return df.with_columns(ctr_expr(), conversion_rate_expr(), roas_expr()).select(self.ROW_COLUMNS)

    def run(self, data: MarketingData | Iterable[Campaign] | None) -> DeviceResult:
        df = device_frame(data)
        return DeviceResult(
            buckets=self.aggregate(df, loaded=data is not None),
            performance_by_campaign=self.campaign_rows(df),
        )
