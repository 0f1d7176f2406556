"""Application layer package."""

from .dashboard_service import DashboardService, build_dashboard
from .report_service import run_reporting_pipeline

__all__ = ["DashboardService", "build_dashboard", "run_reporting_pipeline"]
