import pytest

from campaign_dashboard.demographic import DemographicAggregator
from campaign_dashboard.device import DeviceAggregator
from campaign_dashboard.regional import RegionalAggregator
from campaign_dashboard.weekly import WeeklyAggregator
from campaign_dashboard.metrics import ctr

COUNTERS = ["impressions", "clicks", "conversions", "spend", "revenue"]


@pytest.fixture
def campaign_pair(make_campaign, make_counters):
    first = make_campaign(
        "A",
        spend=400,
        revenue=900,
        regional=[{"region": "Dubai", "country": "UAE", **make_counters(1000, 100, 10, 100, 300)}],
        device=[{"device": "Mobile", **make_counters(1000, 100, 10, 100, 300)}],
        weekly=[{"week_start": "2024-01-01", "week_end": "2024-01-07", **make_counters(1000, 100, 10, 100, 300)}],
        demographic=[
            {
                "age_group": "18-24",
                "gender": "male",
                "percentage_of_audience": 100,
                "performance": {"impressions": 1000, "clicks": 100, "conversions": 10},
            }
        ],
    )
    second = make_campaign(
        "B",
        spend=250,
        revenue=100,
        regional=[{"region": "Dubai", "country": "UAE", **make_counters(4000, 40, 2, 80, 120)}],
        device=[{"device": "Mobile", **make_counters(4000, 40, 2, 80, 120)}],
        weekly=[{"week_start": "2024-01-01", "week_end": "2024-01-07", **make_counters(4000, 40, 2, 80, 120)}],
        demographic=[
            {
                "age_group": "18-24",
                "gender": "male",
                "percentage_of_audience": 100,
                "performance": {"impressions": 4000, "clicks": 40, "conversions": 2},
            }
        ],
    )
    return first, second


def _assert_additive(combined, first, second, columns):
    for column in columns:
        assert combined[column] == pytest.approx(first[column] + second[column])


def test_regional_counters_are_additive(campaign_pair, make_data):
    first, second = campaign_pair
    aggregator = RegionalAggregator()
    combined = aggregator.run(make_data(first, second)).regional_data[0]
    _assert_additive(
        combined,
        aggregator.run(make_data(first)).regional_data[0],
        aggregator.run(make_data(second)).regional_data[0],
        COUNTERS + ["campaignCount"],
    )


def test_device_counters_are_additive(campaign_pair, make_data):
    first, second = campaign_pair
    aggregator = DeviceAggregator()
    _assert_additive(
        aggregator.run(make_data(first, second)).mobile,
        aggregator.run(make_data(first)).mobile,
        aggregator.run(make_data(second)).mobile,
        COUNTERS + ["campaignCount"],
    )


def test_weekly_counters_are_additive(campaign_pair, make_data):
    first, second = campaign_pair
    aggregator = WeeklyAggregator()
    _assert_additive(
        aggregator.run(make_data(first, second)).weekly_data[0],
        aggregator.run(make_data(first)).weekly_data[0],
        aggregator.run(make_data(second)).weekly_data[0],
        COUNTERS,
    )


def test_demographic_counters_are_additive(campaign_pair, make_data):
    first, second = campaign_pair
    aggregator = DemographicAggregator()
    combined = aggregator.run(make_data(first, second))
    alone = [aggregator.run(make_data(row)) for row in (first, second)]
    _assert_additive(
        combined.age_groups_by_gender["male"].to_dicts()[0],
        alone[0].age_groups_by_gender["male"].to_dicts()[0],
        alone[1].age_groups_by_gender["male"].to_dicts()[0],
        ["impressions", "clicks", "conversions"],
    )
    assert combined.male.spend == pytest.approx(alone[0].male.spend + alone[1].male.spend)
    assert combined.male.revenue == pytest.approx(alone[0].male.revenue + alone[1].male.revenue)


def test_rates_are_not_averaged(campaign_pair, make_data):
    first, second = campaign_pair
    aggregator = RegionalAggregator()
    combined = aggregator.run(make_data(first, second)).regional_data[0]
    ctr_first = aggregator.run(make_data(first)).regional_data[0]["ctr"]
    ctr_second = aggregator.run(make_data(second)).regional_data[0]["ctr"]

    assert combined["ctr"] == pytest.approx(ctr(5000, 140))
    assert combined["ctr"] != pytest.approx((ctr_first + ctr_second) / 2)
