from typing import Sequence

from pydantic import BaseModel, ValidationError

from config.settings import TrendSettings
from performance.application.port.metric_store_port import MetricStorePort
from performance.application.request.performance_query_requests import (
    CompareQuery,
    RankingQuery,
    TopVideosQuery,
    TrendQuery,
    VideoQuery,
)
from performance.application.usecase.trend_aggregation_usecase import TrendAggregationUseCase
from performance.application.usecase.video_ranking_usecase import VideoRankingUseCase
from performance.domain.aggregate_row import AggregateRow
from performance.domain.errors import InvalidArgumentError, NotFoundError
from performance.domain.metric_sample import MetricSample
from performance.domain.video_stats import VideoStats
from performance.domain.video_summary import VideoSummary


class PerformanceQueryUseCase:
    """
    외부 요청 파라미터를 검증/정규화해 집계·랭킹 유스케이스로 전달하고,
    응답 필드(snake_case, ISO-8601 날짜)를 고정된 형태로 만든다.
    """

    def __init__(self, repository: MetricStorePort, settings: TrendSettings | None = None):
        self.repository = repository
        self.settings = settings or TrendSettings()
        self.aggregation = TrendAggregationUseCase(repository, max_rows=self.settings.max_rows)
        self.ranking = VideoRankingUseCase(repository)

    def get_trends(self, granularity: str | None, video_id: str | None = None) -> dict:
        query = _validate(TrendQuery, granularity=granularity, video_id=video_id)
        rows = self.aggregation.aggregate_trends(query.granularity, video_id=query.video_id)
        if not rows and query.video_id is None:
            raise NotFoundError("no data found in the metric store")
        return {
            "granularity": query.granularity.value,
            "items": [_aggregate_row_to_dict(row) for row in rows],
        }

    def get_top_videos(self, metric: str | None = None, page: int = 1, page_size: int | None = None) -> dict:
        if page_size is None:
            page_size = self.settings.default_page_size
        query = _validate(TopVideosQuery, metric=metric, page=page, page_size=page_size)
        if query.page_size > self.settings.max_page_size:
            raise InvalidArgumentError(f"page_size must be at most {self.settings.max_page_size}")
        if query.page > self.settings.max_page:
            raise InvalidArgumentError(f"page must be at most {self.settings.max_page}")
        summaries = self.ranking.top_by_metric(query.metric, page=query.page, page_size=query.page_size)
        return {
            "metric": query.metric.value,
            "page": query.page,
            "page_size": query.page_size,
            "items": [_summary_to_dict(summary) for summary in summaries],
        }

    def get_top_growth(self, limit: int | None = None) -> list[dict]:
        query = self._ranking_query(limit)
        return [{"video_id": row.video_id, "growth": row.growth} for row in self.ranking.top_growth(query.limit)]

    def get_most_engaging(self, limit: int | None = None) -> list[dict]:
        query = self._ranking_query(limit)
        return [
            {"video_id": row.video_id, "engagement": row.engagement}
            for row in self.ranking.top_engagement(query.limit)
        ]

    def compare_videos(self, video_ids: str | Sequence[str] | None) -> list[dict]:
        query = _validate(CompareQuery, video_ids=video_ids)
        if len(query.video_ids) > self.settings.compare_max_videos:
            raise InvalidArgumentError(f"at most {self.settings.compare_max_videos} videos can be compared")
        samples = self.repository.fetch_samples(query.video_ids)
        ordered = sorted(samples, key=lambda s: (s.timestamp, s.video_id))
        return [_sample_to_dict(sample) for sample in ordered]

    def get_video_summary(self, video_id: str | None) -> dict:
        query = _validate(VideoQuery, video_id=video_id)
        return _stats_to_dict(self.aggregation.summarize_video(query.video_id))

    def _ranking_query(self, limit: int | None) -> RankingQuery:
        if limit is None:
            limit = self.settings.default_ranking_limit
        query = _validate(RankingQuery, limit=limit)
        if query.limit > self.settings.max_ranking_limit:
            raise InvalidArgumentError(f"limit must be at most {self.settings.max_ranking_limit}")
        return query


def _validate(model: type[BaseModel], **params):
    try:
        return model.model_validate(params)
    except ValidationError as exc:
        messages = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or model.__name__
            messages.append(f"{field}: {error.get('msg')}")
        raise InvalidArgumentError("; ".join(messages)) from None


def _aggregate_row_to_dict(row: AggregateRow) -> dict:
    return {
        "period": row.bucket.start.isoformat(),
        "period_end": row.bucket.end.isoformat(),
        "label": row.bucket.label,
        "sample_count": row.sample_count,
        "avg_views": row.avg_views,
        "avg_likes": row.avg_likes,
        "avg_dislikes": row.avg_dislikes,
        "avg_comments": row.avg_comments,
    }


def _summary_to_dict(summary: VideoSummary) -> dict:
    return {
        "video_id": summary.video_id,
        "timestamp": summary.timestamp.isoformat(),
        "views": summary.views,
        "likes": summary.likes,
        "dislikes": summary.dislikes,
        "comments": summary.comments,
    }


def _sample_to_dict(sample: MetricSample) -> dict:
    return {
        "video_id": sample.video_id,
        "timestamp": sample.timestamp.isoformat(),
        "views": sample.views,
        "likes": sample.likes,
        "dislikes": sample.dislikes,
        "comments": sample.comments,
    }


def _stats_to_dict(stats: VideoStats) -> dict:
    return {
        "video_id": stats.video_id,
        "sample_count": stats.sample_count,
        "first_seen": stats.first_seen.isoformat(),
        "last_seen": stats.last_seen.isoformat(),
        "latest": _summary_to_dict(stats.latest),
        "growth": stats.growth,
        "engagement": stats.engagement,
    }
