from abc import ABC, abstractmethod
from typing import Sequence

from performance.domain.daily_totals import DailyTotals
from performance.domain.engagement_row import EngagementRow
from performance.domain.growth_row import GrowthRow
from performance.domain.metric import Metric
from performance.domain.metric_sample import MetricSample
from performance.domain.video_summary import VideoSummary


class MetricStorePort(ABC):
    """
    영상 성과 지표 테이블에 대한 읽기 전용 포트입니다.
    각 메서드는 쿼리 1회로 결과를 만들어야 합니다.
    """

    @abstractmethod
    def fetch_daily_totals(self, video_id: str | None = None) -> list[DailyTotals]:
        raise NotImplementedError

    @abstractmethod
    def fetch_latest_by_video(self, metric: Metric, limit: int, offset: int = 0) -> list[VideoSummary]:
        raise NotImplementedError

    @abstractmethod
    def fetch_top_growth(self, limit: int = 10) -> list[GrowthRow]:
        raise NotImplementedError

    @abstractmethod
    def fetch_top_engagement(self, limit: int = 10) -> list[EngagementRow]:
        raise NotImplementedError

    @abstractmethod
    def fetch_samples(self, video_ids: Sequence[str]) -> list[MetricSample]:
        raise NotImplementedError
