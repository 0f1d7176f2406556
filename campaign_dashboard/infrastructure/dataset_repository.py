"""Infrastructure adapter for the JSON campaign dataset."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from campaign_dashboard.domain.models import MarketingData
from campaign_dashboard.ingestion import read_marketing_json

logger = logging.getLogger(__name__)

CACHE_SCHEMA_VERSION = 1

_CACHE: Dict[str, Tuple[Tuple[Any, ...], MarketingData]] = {}


@dataclass(frozen=True)
class DatasetLoadResult:
    """Either a loaded dataset or a displayable error message."""

    data: MarketingData | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _file_stamp(path: Path) -> Tuple[Any, ...]:
    stat = path.stat()
    return (CACHE_SCHEMA_VERSION, stat.st_mtime_ns, stat.st_size)


def clear_cache() -> None:
    _CACHE.clear()


def load_dataset(path: str | Path, use_cache: bool = True) -> MarketingData:
    """Read and parse a dataset file, reusing the parsed value while the file is unchanged.

    The cache holds one entry per resolved path; a changed file replaces it.
    """
    dataset_path = Path(path)
    if not dataset_path.exists():
        raise FileNotFoundError(f"Dataset file not found: {dataset_path}")

    cache_key = str(dataset_path.resolve())
    stamp = _file_stamp(dataset_path)
    cached = _CACHE.get(cache_key) if use_cache else None
    if cached is not None and cached[0] == stamp:
        return cached[1]

    data = read_marketing_json(dataset_path)
    if use_cache:
        _CACHE[cache_key] = (stamp, data)
    return data


def try_load_dataset(path: str | Path, use_cache: bool = True) -> DatasetLoadResult:
    try:
        return DatasetLoadResult(data=load_dataset(path, use_cache=use_cache))
    except (OSError, ValueError) as exc:
        logger.error("Error loading marketing data from %s: %s", path, exc)
        return DatasetLoadResult(data=None, error=str(exc))
