"""Demographic aggregator: gender totals, per-gender age tables and age rollups.

Spend and revenue are not stored per segment. Each segment receives the
parent campaign's totals scaled by ``percentage_of_audience / 100``; the
percentages are passed through as-is, so allocations only add back up to
the campaign totals when a campaign's percentages sum to 100. Impressions,
clicks and conversions come straight from the segment's ``performance``
record and are never scaled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

import polars as pl

from campaign_dashboard.domain.models import Campaign, MarketingData
from campaign_dashboard.ingestion import DEMOGRAPHIC_COUNTER_COLUMNS, demographic_frame
from campaign_dashboard.metrics import conversion_rate_expr, ctr_expr

MALE = "male"
FEMALE = "female"
GENDERS: List[str] = [MALE, FEMALE]


@dataclass(frozen=True)
class GenderTotals:
    clicks: float
    spend: float
    revenue: float


@dataclass(frozen=True)
class DemographicResult:
    genders: Dict[str, GenderTotals]
    age_groups_by_gender: Dict[str, pl.DataFrame]
    age_groups: pl.DataFrame

    @property
    def male(self) -> GenderTotals:
        return self.genders[MALE]

    @property
    def female(self) -> GenderTotals:
        return self.genders[FEMALE]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maleClicks": self.male.clicks,
            "maleSpend": self.male.spend,
            "maleRevenue": self.male.revenue,
            "femaleClicks": self.female.clicks,
            "femaleSpend": self.female.spend,
            "femaleRevenue": self.female.revenue,
            "maleAgeGroups": self.age_groups_by_gender[MALE].to_dicts(),
            "femaleAgeGroups": self.age_groups_by_gender[FEMALE].to_dicts(),
            "ageGroups": self.age_groups.to_dicts(),
        }


class DemographicAggregator:
    AGE_TABLE_COLUMNS: List[str] = ["age_group"] + DEMOGRAPHIC_COUNTER_COLUMNS + ["ctr", "conversion_rate"]
    AGE_ROLLUP_COLUMNS: List[str] = ["age_group", "spend", "revenue"]

    @staticmethod
    def allocate(df: pl.DataFrame) -> pl.DataFrame:
        share = pl.col("percentage_of_audience") / 100
        return df.with_columns(
            (pl.col("campaign_spend") * share).alias("allocated_spend"),
            (pl.col("campaign_revenue") * share).alias("allocated_revenue"),
            pl.col("gender").str.to_lowercase().alias("gender_key"),
        )

    @staticmethod
    def gender_totals(allocated: pl.DataFrame, gender: str) -> GenderTotals:
        row = (
            allocated.filter(pl.col("gender_key") == gender)
            .select(
                pl.col("clicks").sum(),
                pl.col("allocated_spend").sum(),
                pl.col("allocated_revenue").sum(),
            )
            .row(0)
        )
        clicks, spend, revenue = (float(value or 0.0) for value in row)
        return GenderTotals(clicks=clicks, spend=spend, revenue=revenue)

    def age_table(self, allocated: pl.DataFrame, gender: str) -> pl.DataFrame:
        grouped = (
            allocated.filter(pl.col("gender_key") == gender)
            .group_by("age_group", maintain_order=True)
            .agg([pl.col(name).sum() for name in DEMOGRAPHIC_COUNTER_COLUMNS])
        )
        return grouped.with_columns(ctr_expr(), conversion_rate_expr()).select(self.AGE_TABLE_COLUMNS)

    def age_rollup(self, allocated: pl.DataFrame) -> pl.DataFrame:
        # Not gender-filtered: segments with any gender value contribute.
        return allocated.group_by("age_group", maintain_order=True).agg(
            pl.col("allocated_spend").sum().alias("spend"),
            pl.col("allocated_revenue").sum().alias("revenue"),
        ).select(self.AGE_ROLLUP_COLUMNS)

    def run(self, data: MarketingData | Iterable[Campaign] | None) -> DemographicResult:
        allocated = self.allocate(demographic_frame(data))
        return DemographicResult(
            genders={gender: self.gender_totals(allocated, gender) for gender in GENDERS},
            age_groups_by_gender={gender: self.age_table(allocated, gender) for gender in GENDERS},
            age_groups=self.age_rollup(allocated),
        )
