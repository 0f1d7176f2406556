"""Infrastructure adapter for summary export targets."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping

import polars as pl
import xlsxwriter
from openpyxl import Workbook

logger = logging.getLogger(__name__)

SHEET_NAME_LIMIT = 31


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(_json_safe(summary), indent=2, ensure_ascii=False), encoding="utf-8")


def _blank_nan(frame: pl.DataFrame) -> pl.DataFrame:
    # An undefined traffic share is exported as an empty cell.
    return frame.with_columns(pl.col(pl.Float64).fill_nan(None))


def _sheet_cell(value: Any) -> Any:
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


def _write_with_xlsxwriter(path: Path, sheets: Mapping[str, pl.DataFrame]) -> bool:
    try:
        with xlsxwriter.Workbook(str(path)) as workbook:
            for sheet_name, frame in sheets.items():
                frame.write_excel(workbook=workbook, worksheet=sheet_name[:SHEET_NAME_LIMIT], autofit=True)
    except Exception as exc:
        logger.warning("xlsxwriter export of %s failed, retrying with openpyxl: %s", path, exc)
        return False
    return True


def _write_with_openpyxl(path: Path, sheets: Mapping[str, pl.DataFrame]) -> None:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=sheet_name[:SHEET_NAME_LIMIT])
        worksheet.append(frame.columns)
        for row in frame.iter_rows():
            worksheet.append([_sheet_cell(value) for value in row])
        worksheet.freeze_panes = "A2"
    workbook.save(path)


def write_dashboard_workbook(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    """Write one worksheet per dashboard frame, xlsxwriter first and openpyxl as fallback."""
    if not sheets:
        raise ValueError("No dashboard sheets to export")
    path.parent.mkdir(parents=True, exist_ok=True)
    prepared = {str(name): _blank_nan(frame) for name, frame in sheets.items()}
    if not _write_with_xlsxwriter(path, prepared):
        _write_with_openpyxl(path, prepared)


def save_output_workbook(path: Path, sheets: dict[str, pl.DataFrame]) -> tuple[bool, str]:
    try:
        write_dashboard_workbook(path, sheets)
    except PermissionError as exc:
        logger.warning("Excel save skipped for %s: %s", path, exc)
        return False, str(exc)
    return True, ""
