from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class TimeBucket:
    """
    [start, end) 반개구간의 달력 정렬 버킷입니다. 동일성과 정렬은 start 기준입니다.
    """
    start: date
    end: date
    label: str

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end
