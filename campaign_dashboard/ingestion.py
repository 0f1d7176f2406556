"""Dataset parsing and per-dimension frame flattening."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

import polars as pl

from campaign_dashboard.domain.models import Campaign, MarketingData

COUNTER_COLUMNS: list[str] = ["impressions", "clicks", "conversions", "spend", "revenue"]
DEMOGRAPHIC_COUNTER_COLUMNS: list[str] = ["impressions", "clicks", "conversions"]

REGIONAL_SCHEMA: dict[str, Any] = {
    "campaignName": pl.Utf8,
    "region": pl.Utf8,
    "country": pl.Utf8,
    **{name: pl.Float64 for name in COUNTER_COLUMNS},
}
DEVICE_SCHEMA: dict[str, Any] = {
    "campaignName": pl.Utf8,
    "device": pl.Utf8,
    **{name: pl.Float64 for name in COUNTER_COLUMNS},
}
WEEKLY_SCHEMA: dict[str, Any] = {
    "campaignName": pl.Utf8,
    "week_start": pl.Utf8,
    "week_end": pl.Utf8,
    **{name: pl.Float64 for name in COUNTER_COLUMNS},
}
DEMOGRAPHIC_SCHEMA: dict[str, Any] = {
    "campaignName": pl.Utf8,
    "age_group": pl.Utf8,
    "gender": pl.Utf8,
    "percentage_of_audience": pl.Float64,
    "campaign_spend": pl.Float64,
    "campaign_revenue": pl.Float64,
    **{name: pl.Float64 for name in DEMOGRAPHIC_COUNTER_COLUMNS},
}


def parse_marketing_data(payload: Mapping[str, Any] | None) -> MarketingData:
    """Build the typed dataset from a decoded JSON payload; ``None`` means empty."""
    if payload is None:
        return MarketingData()
    if not isinstance(payload, Mapping):
        raise ValueError(f"Dataset payload must be a JSON object, got {type(payload).__name__}")
    return MarketingData.from_row(payload)


def read_marketing_json(path: str | Path) -> MarketingData:
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(f"Dataset file not found: {json_path}")
    try:
        payload = json.loads(json_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {json_path}: {exc}") from exc
    return parse_marketing_data(payload)


def _campaigns(data: MarketingData | Iterable[Campaign] | None) -> tuple[Campaign, ...]:
    if data is None:
        return ()
    if isinstance(data, MarketingData):
        return data.campaigns
    return tuple(data)


def _counter_values(record: Any, columns: list[str]) -> dict[str, float]:
    return {name: float(getattr(record, name)) for name in columns}


def regional_frame(data: MarketingData | Iterable[Campaign] | None) -> pl.DataFrame:
    rows = [
        {
            "campaignName": campaign.name,
            "region": record.region,
            "country": record.country,
            **_counter_values(record, COUNTER_COLUMNS),
        }
        for campaign in _campaigns(data)
        for record in campaign.regional_performance
    ]
    return pl.DataFrame(rows, schema=REGIONAL_SCHEMA)


def device_frame(data: MarketingData | Iterable[Campaign] | None) -> pl.DataFrame:
    rows = [
        {
            "campaignName": campaign.name,
            "device": record.device,
            **_counter_values(record, COUNTER_COLUMNS),
        }
        for campaign in _campaigns(data)
        for record in campaign.device_performance
    ]
    return pl.DataFrame(rows, schema=DEVICE_SCHEMA)


def weekly_frame(data: MarketingData | Iterable[Campaign] | None) -> pl.DataFrame:
    rows = [
        {
            "campaignName": campaign.name,
            "week_start": record.week_start,
            "week_end": record.week_end,
            **_counter_values(record, COUNTER_COLUMNS),
        }
        for campaign in _campaigns(data)
        for record in campaign.weekly_performance
    ]
    return pl.DataFrame(rows, schema=WEEKLY_SCHEMA)


def demographic_frame(data: MarketingData | Iterable[Campaign] | None) -> pl.DataFrame:
    rows = [
        {
            "campaignName": campaign.name,
            "age_group": record.age_group,
            "gender": record.gender,
            "percentage_of_audience": float(record.percentage_of_audience),
            "campaign_spend": float(campaign.spend),
            "campaign_revenue": float(campaign.revenue),
            **_counter_values(record.performance, DEMOGRAPHIC_COUNTER_COLUMNS),
        }
        for campaign in _campaigns(data)
        for record in campaign.demographic_breakdown
    ]
    return pl.DataFrame(rows, schema=DEMOGRAPHIC_SCHEMA)
