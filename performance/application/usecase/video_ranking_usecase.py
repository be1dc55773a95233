from performance.application.port.metric_store_port import MetricStorePort
from performance.domain.engagement_row import EngagementRow
from performance.domain.errors import InvalidArgumentError
from performance.domain.growth_row import GrowthRow
from performance.domain.metric import Metric
from performance.domain.video_summary import VideoSummary


class VideoRankingUseCase:
    """
    영상 랭킹 조회. 모든 정렬은 값 내림차순, 동점은 video_id 오름차순으로 고정한다.

    영상 대표값은 합계가 아닌 "최신 샘플" 값이다.
    """

    def __init__(self, repository: MetricStorePort):
        self.repository = repository

    def top_by_metric(self, metric: Metric | str, page: int, page_size: int) -> list[VideoSummary]:
        metric = Metric.parse(metric)
        if page < 1 or page_size < 1:
            raise InvalidArgumentError("page and page_size must be positive integers")
        offset = (page - 1) * page_size
        return self.repository.fetch_latest_by_video(metric, limit=page_size, offset=offset)

    def top_growth(self, limit: int = 10) -> list[GrowthRow]:
        if limit < 1:
            raise InvalidArgumentError("limit must be a positive integer")
        return self.repository.fetch_top_growth(limit=limit)

    def top_engagement(self, limit: int = 10) -> list[EngagementRow]:
        if limit < 1:
            raise InvalidArgumentError("limit must be a positive integer")
        return self.repository.fetch_top_engagement(limit=limit)
