"""Application service assembling chart-ready views from the four aggregators."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Tuple

import polars as pl

from campaign_dashboard.application.reporting.rendering import device_card_lines, recent_weeks_lines, top_region_banner
from campaign_dashboard.application.reporting.selectors import normalize_values, recent_weeks, sort_rows, top_n
from campaign_dashboard.application.reporting.series import (
    CLICKS_COLOR,
    IMPRESSIONS_COLOR,
    REVENUE_COLOR,
    SPEND_COLOR,
    device_series,
    to_series,
    weekly_series,
)
from campaign_dashboard.demographic import FEMALE, MALE, DemographicAggregator, DemographicResult
from campaign_dashboard.device import DESKTOP, MOBILE, DeviceAggregator, DeviceResult
from campaign_dashboard.domain.models import MarketingData
from campaign_dashboard.metrics import roas
from campaign_dashboard.regional import LocationLookup, RegionalAggregator, RegionalResult, validate_value_key
from campaign_dashboard.weekly import WeeklyAggregator, WeeklyResult

VALUE_KEY_COLORS: Dict[str, str] = {"revenue": REVENUE_COLOR, "spend": SPEND_COLOR}


class DashboardService:
    """Run each aggregator over one immutable dataset and memoise by input.

    One result is kept per (view, value_key) slot; a new dataset replaces it.
    ``None`` stands for a dataset that is absent or not yet loaded.
    """

    def __init__(self, locations: LocationLookup | None = None, top_n: int = 5) -> None:
        self.regional = RegionalAggregator(locations)
        self.device = DeviceAggregator()
        self.weekly = WeeklyAggregator()
        self.demographic = DemographicAggregator()
        self.top_n = top_n
        self._cache: Dict[Tuple[str, str | None], Tuple[MarketingData | None, Any]] = {}

    def _memo(
        self,
        view: str,
        data: MarketingData | None,
        compute: Callable[[], Any],
        value_key: str | None = None,
    ) -> Any:
        slot = (view, value_key)
        cached = self._cache.get(slot)
        if cached is not None and cached[0] == data:
            return cached[1]
        result = compute()
        self._cache[slot] = (data, result)
        return result

    def clear_cache(self) -> None:
        self._cache.clear()

    def regional_result(self, data: MarketingData | None, value_key: str = "revenue") -> RegionalResult:
        validate_value_key(value_key)
        return self._memo("regional", data, lambda: self.regional.run(data, value_key=value_key), value_key)

    def device_result(self, data: MarketingData | None) -> DeviceResult:
        return self._memo("device", data, lambda: self.device.run(data))

    def weekly_result(self, data: MarketingData | None) -> WeeklyResult:
        return self._memo("weekly", data, lambda: self.weekly.run(data))

    def demographic_result(self, data: MarketingData | None) -> DemographicResult:
        return self._memo("demographic", data, lambda: self.demographic.run(data))

    def regional_view(self, data: MarketingData | None, value_key: str = "revenue") -> Dict[str, Any]:
        result = self.regional_result(data, value_key)
        rows = result.regional_data
        view = result.to_dict()
        view["valueSeries"] = to_series(rows, "region", "value", VALUE_KEY_COLORS[value_key])
        view["heatMapPoints"] = normalize_values(rows, "value")
        view["regionalTable"] = sort_rows(rows, "revenue", descending=True)
        view["topRegions"] = top_n(rows, "revenue", self.top_n)
        view["topRegionBanner"] = top_region_banner(result.top_region)
        return view

    def device_view(self, data: MarketingData | None) -> Dict[str, Any]:
        result = self.device_result(data)
        buckets = {MOBILE: result.mobile, DESKTOP: result.desktop}
        bucket_roas = {
            device: {"roas": roas(bucket["spend"], bucket["revenue"])} for device, bucket in buckets.items()
        }
        view = result.to_dict()
        view["deviceComparison"] = device_series(buckets, "revenue")
        view["roasComparison"] = device_series(bucket_roas, "roas")
        view["conversionRateComparison"] = device_series(buckets, "conversion_rate")
        view["deviceCards"] = {device: device_card_lines(device, bucket) for device, bucket in buckets.items()}
        return view

    def weekly_view(self, data: MarketingData | None) -> Dict[str, Any]:
        result = self.weekly_result(data)
        weeks = result.weekly_data
        latest = recent_weeks(weeks, n=3)
        view = result.to_dict()
        view["revenueByWeek"] = weekly_series(weeks, "revenue", REVENUE_COLOR)
        view["spendByWeek"] = weekly_series(weeks, "spend", SPEND_COLOR)
        view["impressionsByWeek"] = weekly_series(weeks, "impressions", IMPRESSIONS_COLOR)
        view["clicksByWeek"] = weekly_series(weeks, "clicks", CLICKS_COLOR)
        view["recentWeeks"] = latest
        view["recentWeeksSummary"] = recent_weeks_lines(latest)
        return view

    def demographic_view(self, data: MarketingData | None) -> Dict[str, Any]:
        result = self.demographic_result(data)
        age_rows = result.age_groups.to_dicts()
        view = result.to_dict()
        view["ageGroupSpend"] = to_series(age_rows, "age_group", "spend", SPEND_COLOR)
        view["ageGroupRevenue"] = to_series(age_rows, "age_group", "revenue", REVENUE_COLOR)
        return view

    def build_dashboard(self, data: MarketingData | None, value_key: str = "revenue") -> Dict[str, Any]:
        return {
            "campaignCount": len(data.campaigns) if data is not None else 0,
            "regional": self.regional_view(data, value_key),
            "device": self.device_view(data),
            "weekly": self.weekly_view(data),
            "demographic": self.demographic_view(data),
        }

    def build_sheets(self, data: MarketingData | None, value_key: str = "revenue") -> Dict[str, pl.DataFrame]:
        demographic = self.demographic_result(data)
        return {
            "regional": self.regional_result(data, value_key).regions,
            "device": self.device_result(data).buckets,
            "device_by_campaign": self.device_result(data).performance_by_campaign,
            "weekly": self.weekly_result(data).weeks,
            "age_groups": demographic.age_groups,
            "male_age_groups": demographic.age_groups_by_gender[MALE],
            "female_age_groups": demographic.age_groups_by_gender[FEMALE],
        }


def build_dashboard(
    data: MarketingData | None,
    value_key: str = "revenue",
    locations: Mapping[str, Tuple[float, float]] | None = None,
    top_n: int = 5,
) -> Dict[str, Any]:
    return DashboardService(locations=locations, top_n=top_n).build_dashboard(data, value_key=value_key)
