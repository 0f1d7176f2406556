"""Campaign dashboard aggregation package."""

from .application import DashboardService, build_dashboard, run_reporting_pipeline
from .demographic import DemographicAggregator
from .device import DeviceAggregator
from .ingestion import parse_marketing_data, read_marketing_json
from .regional import RegionalAggregator
from .weekly import WeeklyAggregator

__all__ = [
    "RegionalAggregator",
    "DeviceAggregator",
    "WeeklyAggregator",
    "DemographicAggregator",
    "DashboardService",
    "build_dashboard",
    "parse_marketing_data",
    "read_marketing_json",
    "run_reporting_pipeline",
]
