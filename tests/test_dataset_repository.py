import json

import pytest

from campaign_dashboard.infrastructure import dataset_repository
from campaign_dashboard.infrastructure.dataset_repository import clear_cache, load_dataset, try_load_dataset


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_cache()
    yield
    clear_cache()


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_dataset_parses_file(tmp_path, sample_payload):
    data = load_dataset(_write(tmp_path / "data.json", sample_payload))
    assert len(data.campaigns) == len(sample_payload["campaigns"])


def test_load_dataset_reuses_cached_value(tmp_path, sample_payload):
    path = _write(tmp_path / "data.json", sample_payload)
    first = load_dataset(path)
    assert load_dataset(path) is first
    assert len(dataset_repository._CACHE) == 1


def test_load_dataset_without_cache(tmp_path, sample_payload):
    path = _write(tmp_path / "data.json", sample_payload)
    load_dataset(path, use_cache=False)
    assert dataset_repository._CACHE == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "absent.json")


def test_try_load_reports_missing_file(tmp_path):
    result = try_load_dataset(tmp_path / "absent.json")
    assert not result.ok
    assert result.data is None
    assert "absent.json" in result.error


def test_try_load_reports_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    result = try_load_dataset(path)
    assert not result.ok
    assert result.data is None


def test_try_load_reports_malformed_record(tmp_path):
    path = _write(tmp_path / "bad.json", {"campaigns": [{"name": "No counters"}]})
    result = try_load_dataset(path)
    assert not result.ok
    assert "Missing required fields" in result.error


def test_try_load_reports_non_numeric_counter(tmp_path):
    campaign = {"name": "A", "impressions": [1], "clicks": 0, "conversions": 0, "spend": 0, "revenue": 0}
    path = _write(tmp_path / "bad.json", {"campaigns": [campaign]})
    result = try_load_dataset(path)
    assert not result.ok
    assert result.data is None
    assert "Invalid numeric value: [1]" in result.error


def test_changed_file_replaces_its_cache_entry(tmp_path, sample_payload):
    path = _write(tmp_path / "data.json", sample_payload)
    first = load_dataset(path)

    sample_payload["campaigns"] = sample_payload["campaigns"][:1]
    _write(path, sample_payload)
    second = load_dataset(path)

    assert second is not first
    assert len(second.campaigns) == 1
    assert len(dataset_repository._CACHE) == 1
