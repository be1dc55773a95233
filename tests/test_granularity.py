from datetime import date, datetime, timedelta, timezone

import pytest

from performance.domain.errors import InvalidArgumentError
from performance.domain.granularity import Granularity


def test_parse_accepts_known_values_case_insensitively():
    assert Granularity.parse("daily") is Granularity.DAILY
    assert Granularity.parse(" Weekly ") is Granularity.WEEKLY
    assert Granularity.parse("MONTHLY") is Granularity.MONTHLY
    assert Granularity.parse(Granularity.DAILY) is Granularity.DAILY


@pytest.mark.parametrize("value", ["hourly", "", "day", None])
def test_parse_rejects_unknown_values(value):
    with pytest.raises(InvalidArgumentError):
        Granularity.parse(value)


def test_weekly_bucket_follows_iso_week_boundaries():
    weekly = Granularity.WEEKLY
    monday = weekly.bucket_for(date(2024, 1, 1))
    sunday = weekly.bucket_for(date(2024, 1, 7))
    previous_sunday = weekly.bucket_for(date(2023, 12, 31))
    next_monday = weekly.bucket_for(date(2024, 1, 8))

    assert monday == sunday
    assert monday.start == date(2024, 1, 1)
    assert monday.end == date(2024, 1, 8)
    assert monday.label == "2024-W01"

    assert previous_sunday != monday
    assert previous_sunday.label == "2023-W52"
    assert next_monday.label == "2024-W02"


def test_weekly_label_uses_iso_year():
    # 2021-01-01(금)은 2020년 53주차에 속한다.
    bucket = Granularity.WEEKLY.bucket_for(date(2021, 1, 1))
    assert bucket.label == "2020-W53"
    assert bucket.start == date(2020, 12, 28)


def test_monthly_bucket_bounds():
    february = Granularity.MONTHLY.bucket_for(date(2024, 2, 29))
    assert february.start == date(2024, 2, 1)
    assert february.end == date(2024, 3, 1)
    assert february.label == "2024-02"

    december = Granularity.MONTHLY.bucket_for(date(2023, 12, 15))
    assert december.end == date(2024, 1, 1)


def test_daily_bucket_uses_utc_date_for_aware_datetimes():
    kst = timezone(timedelta(hours=9))
    # KST 2024-01-02 05:00 == UTC 2024-01-01 20:00
    bucket = Granularity.DAILY.bucket_for(datetime(2024, 1, 2, 5, 0, tzinfo=kst))
    assert bucket.label == "2024-01-01"


def test_every_day_maps_to_exactly_one_bucket():
    day = date(2023, 12, 1)
    for _ in range(120):
        for granularity in Granularity:
            bucket = granularity.bucket_for(day)
            assert bucket.contains(day)
            assert not bucket.contains(bucket.end)
            assert not bucket.contains(bucket.start - timedelta(days=1))
        day += timedelta(days=1)
