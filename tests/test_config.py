from pathlib import Path

import pytest

from campaign_dashboard.config import DEFAULT_DATA_PATH, DEFAULT_TOP_N, DashboardSettings


def test_defaults_when_environment_is_empty():
    settings = DashboardSettings.from_env({})
    assert settings.data_path == DEFAULT_DATA_PATH
    assert settings.value_key == "revenue"
    assert settings.top_n == DEFAULT_TOP_N


def test_environment_overrides(tmp_path):
    settings = DashboardSettings.from_env(
        {
            "DASHBOARD_DATA_PATH": str(tmp_path / "d.json"),
            "DASHBOARD_OUTPUT_DIR": str(tmp_path / "out"),
            "DASHBOARD_VALUE_KEY": " Spend ",
            "DASHBOARD_TOP_N": "3",
        }
    )
    assert settings.data_path == Path(tmp_path / "d.json")
    assert settings.output_dir == Path(tmp_path / "out")
    assert settings.value_key == "spend"
    assert settings.top_n == 3


@pytest.mark.parametrize(
    "env",
    [
        {"DASHBOARD_VALUE_KEY": "profit"},
        {"DASHBOARD_TOP_N": "many"},
        {"DASHBOARD_TOP_N": "0"},
    ],
)
def test_invalid_values_raise(env):
    with pytest.raises(ValueError):
        DashboardSettings.from_env(env)
