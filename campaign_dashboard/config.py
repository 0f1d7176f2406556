"""Runtime settings with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Tuple

from campaign_dashboard.regional import VALUE_KEYS

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DATA_PATH = PROJECT_ROOT / "data" / "marketing_data.json"
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "output"
DEFAULT_VALUE_KEY = "revenue"
DEFAULT_TOP_N = 5

UAE_CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "Dubai": (25.2048, 55.2708),
    "Sharjah": (25.3460, 55.4200),
    "Abu Dhabi": (24.4539, 54.3773),
    "Al Ain": (24.1302, 55.8023),
    "Ras Al Khaimah": (25.6741, 55.9804),
    "Fujairah": (25.1288, 56.3265),
    "Ajman": (25.4052, 55.5136),
    "Umm Al Quwain": (25.5653, 55.5533),
}


def _parse_value_key(env: Mapping[str, str]) -> str:
    raw = env.get("DASHBOARD_VALUE_KEY", DEFAULT_VALUE_KEY).strip().lower()
    if raw not in VALUE_KEYS:
        raise ValueError(f"DASHBOARD_VALUE_KEY must be one of {list(VALUE_KEYS)}, got {raw!r}")
    return raw


def _parse_top_n(env: Mapping[str, str]) -> int:
    raw = env.get("DASHBOARD_TOP_N", str(DEFAULT_TOP_N))
    try:
        top_n = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid DASHBOARD_TOP_N: {raw}") from exc
    if top_n <= 0:
        raise ValueError(f"DASHBOARD_TOP_N must be positive, got {top_n}")
    return top_n


@dataclass(frozen=True)
class DashboardSettings:
    data_path: Path = DEFAULT_DATA_PATH
    output_dir: Path = DEFAULT_OUTPUT_DIR
    value_key: str = DEFAULT_VALUE_KEY
    top_n: int = DEFAULT_TOP_N

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "DashboardSettings":
        source = os.environ if env is None else env
        return cls(
            data_path=Path(source.get("DASHBOARD_DATA_PATH", str(DEFAULT_DATA_PATH))),
            output_dir=Path(source.get("DASHBOARD_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))),
            value_key=_parse_value_key(source),
            top_n=_parse_top_n(source),
        )
