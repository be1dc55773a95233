from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyTotals:
    """
    UTC 일자별 샘플 수와 지표 합계입니다.
    주/월 버킷은 이 합계를 다시 더해 정확한 평균을 계산합니다.
    """
    day: date
    sample_count: int
    views_sum: int
    likes_sum: int
    dislikes_sum: int
    comments_sum: int
