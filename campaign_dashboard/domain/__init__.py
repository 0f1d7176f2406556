"""Domain layer package."""

from .models import (
    Campaign,
    DemographicBreakdown,
    DemographicPerformance,
    DevicePerformance,
    MarketingData,
    RegionalPerformance,
    WeeklyPerformance,
)

__all__ = [
    "Campaign",
    "DemographicBreakdown",
    "DemographicPerformance",
    "DevicePerformance",
    "MarketingData",
    "RegionalPerformance",
    "WeeklyPerformance",
]
