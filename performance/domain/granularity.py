from datetime import date, datetime, timedelta, timezone
from enum import Enum

from performance.domain.errors import InvalidArgumentError
from performance.domain.time_bucket import TimeBucket


class Granularity(str, Enum):
    """
    트렌드 집계 단위. 모든 경계는 UTC 달력 기준입니다.

    - daily: 달력 일
    - weekly: ISO-8601 주 (월요일 시작, 1월 4일이 포함된 주가 1주차)
    - monthly: 달력 월
    """
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: "str | Granularity | None") -> "Granularity":
        if isinstance(value, Granularity):
            return value
        if value is None:
            raise InvalidArgumentError("granularity is required (daily, weekly, monthly)")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                f"unsupported granularity: {value!r} (expected daily, weekly, monthly)"
            ) from None

    def bucket_for(self, day: date) -> TimeBucket:
        if isinstance(day, datetime):
            day = to_utc_date(day)
        if self is Granularity.DAILY:
            return TimeBucket(start=day, end=day + timedelta(days=1), label=day.isoformat())
        if self is Granularity.WEEKLY:
            iso_year, iso_week, iso_weekday = day.isocalendar()
            start = day - timedelta(days=iso_weekday - 1)
            return TimeBucket(start=start, end=start + timedelta(days=7), label=f"{iso_year}-W{iso_week:02d}")
        start = day.replace(day=1)
        if start.month == 12:
            end = date(start.year + 1, 1, 1)
        else:
            end = date(start.year, start.month + 1, 1)
        return TimeBucket(start=start, end=end, label=f"{start.year:04d}-{start.month:02d}")


def to_utc_date(moment: datetime) -> date:
    # naive datetime 은 UTC 로 저장된 값으로 간주한다.
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()
