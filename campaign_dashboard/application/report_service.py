"""Dashboard reporting pipeline entrypoint."""

from __future__ import annotations

from time import perf_counter
from typing import Any, Dict

from campaign_dashboard.application.dashboard_service import DashboardService
from campaign_dashboard.application.reporting.formatting import fmt_money_compact
from campaign_dashboard.config import UAE_CITY_COORDINATES, DashboardSettings
from campaign_dashboard.infrastructure.dataset_repository import try_load_dataset
from campaign_dashboard.infrastructure.report_exporter import save_output_workbook, save_summary_json


def run_reporting_pipeline(settings: DashboardSettings | None = None) -> Dict[str, Any]:
    config = settings if settings is not None else DashboardSettings.from_env()
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    output_json_path = config.output_dir / "dashboard.json"
    output_excel_path = config.output_dir / "dashboard.xlsx"

    loaded = try_load_dataset(config.data_path)
    _mark("load_dataset")

    service = DashboardService(locations=UAE_CITY_COORDINATES, top_n=config.top_n)
    dashboard = service.build_dashboard(loaded.data, value_key=config.value_key)
    _mark("build_dashboard")

    summary: Dict[str, Any] = {
        "source": str(config.data_path),
        "error": loaded.error,
        "value_key": config.value_key,
        **dashboard,
    }
    save_summary_json(output_json_path, summary)
    _mark("save_json")

    excel_saved, excel_error_message = save_output_workbook(
        output_excel_path,
        service.build_sheets(loaded.data, value_key=config.value_key),
    )
    _mark("save_excel")
    total_elapsed = perf_counter() - pipeline_start

    if loaded.error is not None:
        print(f"Error loading data: {loaded.error}")
    regional = dashboard["regional"]
    print(
        "Summary prepared: "
        f"campaigns={dashboard['campaignCount']}, "
        f"regions={len(regional['regionalData'])}, "
        f"weeks={len(dashboard['weekly']['weeklyData'])}, "
        f"revenue={fmt_money_compact(regional['totalRevenue'])}, "
        f"spend={fmt_money_compact(regional['totalSpend'])}"
    )
    print(regional["topRegionBanner"])
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Total Elapsed: {total_elapsed:.3f}s")
    print(f"Saved JSON: {output_json_path}")
    if excel_saved:
        print(f"Saved Excel: {output_excel_path}")
    else:
        print(f"Excel save skipped (file may be open/locked): {excel_error_message}")
    return summary
