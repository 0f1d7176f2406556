"""Domain models for the campaign dataset and its per-dimension breakdowns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from campaign_dashboard.metrics import conversion_rate, cpa, cpc, ctr, roas

BASE_COUNTERS: tuple[str, ...] = ("impressions", "clicks", "conversions", "spend", "revenue")
DEMOGRAPHIC_COUNTERS: tuple[str, ...] = ("impressions", "clicks", "conversions")


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid numeric value: {value!r}") from exc


def _require(row: Mapping[str, Any], fields: Sequence[str]) -> None:
    if not isinstance(row, Mapping):
        raise ValueError(f"Expected an object record, got {type(row).__name__}")
    missing = [name for name in fields if name not in row]
    if missing:
        raise ValueError(f"Missing required fields: {missing}")


def _counters(row: Mapping[str, Any], fields: Sequence[str]) -> dict[str, float]:
    return {name: _to_float(row.get(name)) for name in fields}


@dataclass(frozen=True)
class Counters:
    """Additive base counters shared by the regional, device and weekly records."""

    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float

    @property
    def ctr(self) -> float:
        return ctr(self.impressions, self.clicks)

    @property
    def conversion_rate(self) -> float:
        return conversion_rate(self.clicks, self.conversions)

    @property
    def roas(self) -> float:
        return roas(self.spend, self.revenue)


@dataclass(frozen=True)
class RegionalPerformance(Counters):
    region: str
    country: str

    @property
    def cpc(self) -> float:
        return cpc(self.spend, self.clicks)

    @property
    def cpa(self) -> float:
        return cpa(self.spend, self.conversions)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RegionalPerformance":
        _require(row, ("region", "country", *BASE_COUNTERS))
        return cls(region=str(row["region"]), country=str(row["country"]), **_counters(row, BASE_COUNTERS))


@dataclass(frozen=True)
class DevicePerformance(Counters):
    device: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DevicePerformance":
        _require(row, ("device", *BASE_COUNTERS))
        return cls(device=str(row["device"]), **_counters(row, BASE_COUNTERS))


@dataclass(frozen=True)
class WeeklyPerformance(Counters):
    week_start: str
    week_end: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WeeklyPerformance":
        _require(row, ("week_start", "week_end", *BASE_COUNTERS))
        return cls(
            week_start=str(row["week_start"]),
            week_end=str(row["week_end"]),
            **_counters(row, BASE_COUNTERS),
        )


@dataclass(frozen=True)
class DemographicPerformance:
    """Raw per-segment counts; never scaled by the audience percentage."""

    impressions: float
    clicks: float
    conversions: float

    @property
    def ctr(self) -> float:
        return ctr(self.impressions, self.clicks)

    @property
    def conversion_rate(self) -> float:
        return conversion_rate(self.clicks, self.conversions)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DemographicPerformance":
        _require(row, DEMOGRAPHIC_COUNTERS)
        return cls(**_counters(row, DEMOGRAPHIC_COUNTERS))


@dataclass(frozen=True)
class DemographicBreakdown:
    age_group: str
    gender: str
    percentage_of_audience: float
    performance: DemographicPerformance

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DemographicBreakdown":
        _require(row, ("age_group", "gender", "percentage_of_audience", "performance"))
        return cls(
            age_group=str(row["age_group"]),
            gender=str(row["gender"]),
            percentage_of_audience=_to_float(row["percentage_of_audience"]),
            performance=DemographicPerformance.from_row(row["performance"]),
        )


@dataclass(frozen=True)
class Campaign(Counters):
    """One campaign with its aggregate totals and four breakdown sequences.

    The totals need not equal the sum of any breakdown; each dimension's
    records are the source of truth for that dimension. Only the demographic
    view reads ``spend``/``revenue`` from here, to allocate them by audience share.
    """

    name: str
    id: str | None = None
    platform: str | None = None
    status: str | None = None
    regional_performance: tuple[RegionalPerformance, ...] = ()
    device_performance: tuple[DevicePerformance, ...] = ()
    weekly_performance: tuple[WeeklyPerformance, ...] = ()
    demographic_breakdown: tuple[DemographicBreakdown, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Campaign":
        _require(row, ("name", *BASE_COUNTERS))

        def _records(key: str, record_type: Any) -> tuple[Any, ...]:
            items = row.get(key) or []
            if not isinstance(items, (list, tuple)):
                raise ValueError(f"Field '{key}' must be a list, got {type(items).__name__}")
            return tuple(record_type.from_row(item) for item in items)

        raw_id = row.get("id")
        return cls(
            name=str(row["name"]),
            id=None if raw_id is None else str(raw_id),
            platform=row.get("platform"),
            status=row.get("status"),
            regional_performance=_records("regional_performance", RegionalPerformance),
            device_performance=_records("device_performance", DevicePerformance),
            weekly_performance=_records("weekly_performance", WeeklyPerformance),
            demographic_breakdown=_records("demographic_breakdown", DemographicBreakdown),
            **_counters(row, BASE_COUNTERS),
        )


@dataclass(frozen=True)
class MarketingData:
    campaigns: tuple[Campaign, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "MarketingData":
        campaigns = row.get("campaigns") or []
        if not isinstance(campaigns, (list, tuple)):
            raise ValueError(f"Field 'campaigns' must be a list, got {type(campaigns).__name__}")
        return cls(campaigns=tuple(Campaign.from_row(item) for item in campaigns))
