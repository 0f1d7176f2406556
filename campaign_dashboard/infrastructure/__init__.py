"""Infrastructure layer package."""

from .dataset_repository import DatasetLoadResult, load_dataset, try_load_dataset
from .report_exporter import save_output_workbook, save_summary_json

__all__ = ["DatasetLoadResult", "load_dataset", "try_load_dataset", "save_output_workbook", "save_summary_json"]
