import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from campaign_dashboard.domain.models import Campaign, MarketingData

SAMPLE_PATH = Path(__file__).resolve().parents[1] / "data" / "marketing_data.json"


def counters(impressions=0, clicks=0, conversions=0, spend=0, revenue=0) -> Dict[str, Any]:
    return {
        "impressions": impressions,
        "clicks": clicks,
        "conversions": conversions,
        "spend": spend,
        "revenue": revenue,
    }


def campaign_row(
    name: str,
    spend: float = 0,
    revenue: float = 0,
    regional: List[Dict[str, Any]] | None = None,
    device: List[Dict[str, Any]] | None = None,
    weekly: List[Dict[str, Any]] | None = None,
    demographic: List[Dict[str, Any]] | None = None,
) -> Dict[str, Any]:
    return {
        "name": name,
        **counters(spend=spend, revenue=revenue),
        "regional_performance": regional or [],
        "device_performance": device or [],
        "weekly_performance": weekly or [],
        "demographic_breakdown": demographic or [],
    }


def build_data(*rows: Dict[str, Any]) -> MarketingData:
    return MarketingData(campaigns=tuple(Campaign.from_row(row) for row in rows))


@pytest.fixture
def make_counters():
    return counters


@pytest.fixture
def make_campaign():
    return campaign_row


@pytest.fixture
def make_data():
    return build_data


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return json.loads(SAMPLE_PATH.read_text(encoding="utf-8"))


@pytest.fixture
def sample_data(sample_payload) -> MarketingData:
    return MarketingData.from_row(sample_payload)
