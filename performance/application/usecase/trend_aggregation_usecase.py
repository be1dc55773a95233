import logging
import math
from collections import defaultdict

from performance.application.port.metric_store_port import MetricStorePort
from performance.domain.aggregate_row import AggregateRow
from performance.domain.daily_totals import DailyTotals
from performance.domain.errors import InternalError, NotFoundError
from performance.domain.granularity import Granularity
from performance.domain.metric_sample import MetricSample
from performance.domain.time_bucket import TimeBucket
from performance.domain.video_stats import VideoStats
from performance.domain.video_summary import VideoSummary

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROWS = 100


class TrendAggregationUseCase:
    def __init__(self, repository: MetricStorePort, max_rows: int = DEFAULT_MAX_ROWS):
        # 기간 버킷별 평균과 영상 단위 요약 통계를 계산한다.
        if max_rows < 1:
            raise ValueError(f"max_rows must be a positive integer, got {max_rows!r}")
        self.repository = repository
        self.max_rows = max_rows

    def aggregate_trends(self, granularity: Granularity | str, video_id: str | None = None) -> list[AggregateRow]:
        """
        - granularity: daily / weekly(ISO 주) / monthly
        - video_id: 주어지면 해당 영상의 샘플만 집계 (없는 영상이면 빈 리스트)

        비어 있는 버킷은 만들지 않으며, 버킷 시작일 오름차순으로 최대 max_rows 개까지 반환한다.
        """
        granularity = Granularity.parse(granularity)
        daily_totals = self.repository.fetch_daily_totals(video_id=video_id)

        grouped: dict[TimeBucket, list[DailyTotals]] = defaultdict(list)
        for totals in daily_totals:
            if totals.sample_count <= 0:
                continue
            grouped[granularity.bucket_for(totals.day)].append(totals)

        rows = [self._average(bucket, members) for bucket, members in grouped.items()]
        rows.sort(key=lambda row: row.bucket.start)
        if len(rows) > self.max_rows:
            logger.debug(
                "trend rows truncated | granularity=%s, buckets=%d, max_rows=%d",
                granularity.value,
                len(rows),
                self.max_rows,
            )
        return rows[: self.max_rows]

    def summarize_video(self, video_id: str) -> VideoStats:
        samples = self.repository.fetch_samples([video_id])
        if not samples:
            raise NotFoundError(f"video not found: {video_id}")
        return build_video_stats(video_id, samples)

    @staticmethod
    def _average(bucket: TimeBucket, members: list[DailyTotals]) -> AggregateRow:
        # 정수 합계를 모두 더한 뒤 마지막에 한 번만 나눈다.
        count = sum(m.sample_count for m in members)
        sums = (
            sum(m.views_sum for m in members),
            sum(m.likes_sum for m in members),
            sum(m.dislikes_sum for m in members),
            sum(m.comments_sum for m in members),
        )
        try:
            averages = [total / count for total in sums]
        except OverflowError as exc:
            raise InternalError(f"average overflow in bucket {bucket.label}") from exc
        if not all(math.isfinite(value) for value in averages):
            raise InternalError(f"non-finite average in bucket {bucket.label}")
        avg_views, avg_likes, avg_dislikes, avg_comments = averages
        return AggregateRow(
            bucket=bucket,
            sample_count=count,
            avg_views=avg_views,
            avg_likes=avg_likes,
            avg_dislikes=avg_dislikes,
            avg_comments=avg_comments,
        )


def build_video_stats(video_id: str, samples: list[MetricSample]) -> VideoStats:
    ordered = sorted(samples, key=lambda s: s.timestamp)
    latest = ordered[-1]
    views = [s.views for s in ordered]
    return VideoStats(
        video_id=video_id,
        sample_count=len(ordered),
        first_seen=ordered[0].timestamp,
        last_seen=latest.timestamp,
        latest=VideoSummary(
            video_id=latest.video_id,
            timestamp=latest.timestamp,
            views=latest.views,
            likes=latest.likes,
            dislikes=latest.dislikes,
            comments=latest.comments,
        ),
        growth=max(views) - min(views),
        engagement=max(s.likes for s in ordered) + max(s.comments for s in ordered),
    )
