import json
import math

import polars as pl
from openpyxl import load_workbook

from campaign_dashboard.infrastructure import report_exporter
from campaign_dashboard.infrastructure.report_exporter import save_output_workbook, save_summary_json


def test_summary_json_replaces_non_finite_numbers(tmp_path):
    path = tmp_path / "nested" / "summary.json"
    save_summary_json(path, {"share": math.nan, "rows": [{"x": math.inf}, {"x": 1.5}], "label": "ok"})
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {"share": None, "rows": [{"x": None}, {"x": 1.5}], "label": "ok"}


def test_workbook_has_one_sheet_per_frame(tmp_path):
    path = tmp_path / "out" / "dashboard.xlsx"
    saved, message = save_output_workbook(
        path,
        {
            "regional": pl.DataFrame({"region": ["Dubai"], "revenue": [600.0]}),
            "weekly": pl.DataFrame({"week_start": ["2024-07-01"], "spend": [140.0]}),
        },
    )
    assert saved
    assert message == ""
    workbook = load_workbook(path)
    assert workbook.sheetnames == ["regional", "weekly"]
    assert workbook["regional"]["A1"].value == "region"
    assert workbook["regional"]["A2"].value == "Dubai"


def _device_sheets():
    return {
        "device": pl.DataFrame(
            {"device": ["Mobile", "Desktop"], "impressions": [0.0, 0.0], "percentage_of_traffic": [math.nan, math.nan]}
        )
    }


def test_undefined_traffic_share_is_an_empty_cell(tmp_path):
    path = tmp_path / "dashboard.xlsx"
    saved, _ = save_output_workbook(path, _device_sheets())
    assert saved
    sheet = load_workbook(path)["device"]
    assert sheet["C1"].value == "percentage_of_traffic"
    assert sheet["C2"].value is None
    assert sheet["A3"].value == "Desktop"


def test_openpyxl_writes_workbook_when_xlsxwriter_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(report_exporter, "_write_with_xlsxwriter", lambda path, sheets: False)
    path = tmp_path / "dashboard.xlsx"
    saved, _ = save_output_workbook(path, {**_device_sheets(), "weekly": pl.DataFrame({"spend": [math.inf, 2.0]})})

    assert saved
    workbook = load_workbook(path)
    assert workbook.sheetnames == ["device", "weekly"]
    device = workbook["device"]
    assert [cell.value for cell in device[1]] == ["device", "impressions", "percentage_of_traffic"]
    assert [cell.value for cell in device[2]] == ["Mobile", 0, None]
    assert device.freeze_panes == "A2"
    assert workbook["weekly"]["A2"].value is None
    assert workbook["weekly"]["A3"].value == 2


def test_long_sheet_names_are_truncated(tmp_path, monkeypatch):
    monkeypatch.setattr(report_exporter, "_write_with_xlsxwriter", lambda path, sheets: False)
    path = tmp_path / "dashboard.xlsx"
    save_output_workbook(path, {"x" * 40: pl.DataFrame({"a": [1]})})
    assert load_workbook(path).sheetnames == ["x" * 31]


def test_locked_workbook_is_reported_not_raised(tmp_path, monkeypatch):
    def locked(path, sheets):
        raise PermissionError("file is open")

    monkeypatch.setattr(report_exporter, "write_dashboard_workbook", locked)
    saved, message = save_output_workbook(tmp_path / "dashboard.xlsx", _device_sheets())
    assert not saved
    assert message == "file is open"
