import logging
from datetime import date, datetime, timezone
from typing import Sequence

from sqlalchemy import Date, func, select
from sqlalchemy.exc import SQLAlchemyError

from config.database.session import SessionLocal
from performance.application.port.metric_store_port import MetricStorePort
from performance.domain.daily_totals import DailyTotals
from performance.domain.engagement_row import EngagementRow
from performance.domain.errors import UpstreamUnavailableError
from performance.domain.growth_row import GrowthRow
from performance.domain.metric import Metric
from performance.domain.metric_sample import MetricSample
from performance.domain.video_summary import VideoSummary
from performance.infrastructure.orm.models import PerformanceMetricORM as M

logger = logging.getLogger(__name__)


class MetricStoreRepositoryImpl(MetricStorePort):
    def __init__(self, session_factory=SessionLocal):
        # 호출마다 세션을 열고 with 블록 종료 시 커넥션을 풀에 반환한다.
        self.session_factory = session_factory

    def fetch_daily_totals(self, video_id: str | None = None) -> list[DailyTotals]:
        """
        UTC 일자별 샘플 수와 지표 합계를 조회한다.
        """
        day = func.date(M.recorded_at, type_=Date).label("day")
        stmt = select(
            day,
            func.count().label("sample_count"),
            func.sum(M.views).label("views_sum"),
            func.sum(M.likes).label("likes_sum"),
            func.sum(M.dislikes).label("dislikes_sum"),
            func.sum(M.comments).label("comments_sum"),
        )
        if video_id is not None:
            stmt = stmt.where(M.video_id == video_id)
        stmt = stmt.group_by(day).order_by(day)

        rows = self._execute("daily_totals", stmt)
        return [
            DailyTotals(
                day=_to_date(r["day"]),
                sample_count=int(r["sample_count"] or 0),
                views_sum=int(r["views_sum"] or 0),
                likes_sum=int(r["likes_sum"] or 0),
                dislikes_sum=int(r["dislikes_sum"] or 0),
                comments_sum=int(r["comments_sum"] or 0),
            )
            for r in rows
        ]

    def fetch_latest_by_video(self, metric: Metric, limit: int, offset: int = 0) -> list[VideoSummary]:
        """
        영상별 최신 샘플을 골라 지표 내림차순(동점은 video_id 오름차순)으로 페이지 조회한다.
        """
        row_number = (
            func.row_number()
            .over(partition_by=M.video_id, order_by=M.recorded_at.desc())
            .label("rn")
        )
        ranked = select(
            M.video_id, M.recorded_at, M.views, M.likes, M.dislikes, M.comments, row_number
        ).subquery("ranked")
        # 정렬 컬럼은 Metric enum 값으로만 결정된다.
        metric_column = ranked.c[metric.value]
        stmt = (
            select(
                ranked.c.video_id,
                ranked.c.recorded_at,
                ranked.c.views,
                ranked.c.likes,
                ranked.c.dislikes,
                ranked.c.comments,
            )
            .where(ranked.c.rn == 1)
            .order_by(metric_column.desc(), ranked.c.video_id.asc())
            .limit(limit)
            .offset(offset)
        )

        rows = self._execute("latest_by_video", stmt)
        return [
            VideoSummary(
                video_id=r["video_id"],
                timestamp=_as_utc(r["recorded_at"]),
                views=int(r["views"]),
                likes=int(r["likes"]),
                dislikes=int(r["dislikes"]),
                comments=int(r["comments"]),
            )
            for r in rows
        ]

    def fetch_top_growth(self, limit: int = 10) -> list[GrowthRow]:
        """
        영상별 조회수 최대값 - 최소값을 성장폭으로 보고 상위 N개를 조회한다.
        """
        growth = (func.max(M.views) - func.min(M.views)).label("growth")
        stmt = (
            select(M.video_id, growth)
            .group_by(M.video_id)
            .order_by(growth.desc(), M.video_id.asc())
            .limit(limit)
        )
        rows = self._execute("top_growth", stmt)
        return [GrowthRow(video_id=r["video_id"], growth=int(r["growth"] or 0)) for r in rows]

    def fetch_top_engagement(self, limit: int = 10) -> list[EngagementRow]:
        """
        영상별 최대 좋아요 + 최대 댓글 수를 참여도로 보고 상위 N개를 조회한다.
        """
        engagement = (func.max(M.likes) + func.max(M.comments)).label("engagement")
        stmt = (
            select(M.video_id, engagement)
            .group_by(M.video_id)
            .order_by(engagement.desc(), M.video_id.asc())
            .limit(limit)
        )
        rows = self._execute("top_engagement", stmt)
        return [EngagementRow(video_id=r["video_id"], engagement=int(r["engagement"] or 0)) for r in rows]

    def fetch_samples(self, video_ids: Sequence[str]) -> list[MetricSample]:
        """
        주어진 영상들의 원본 샘플을 시간 오름차순으로 조회한다. (IN 절은 ID마다 바인딩)
        """
        if not video_ids:
            return []
        stmt = (
            select(M.video_id, M.recorded_at, M.views, M.likes, M.dislikes, M.comments)
            .where(M.video_id.in_(list(video_ids)))
            .order_by(M.recorded_at.asc(), M.video_id.asc())
        )
        rows = self._execute("samples", stmt)
        return [
            MetricSample(
                video_id=r["video_id"],
                timestamp=_as_utc(r["recorded_at"]),
                views=int(r["views"]),
                likes=int(r["likes"]),
                dislikes=int(r["dislikes"]),
                comments=int(r["comments"]),
            )
            for r in rows
        ]

    def _execute(self, name: str, stmt) -> list[dict]:
        try:
            with self.session_factory() as db:
                rows = [dict(row) for row in db.execute(stmt).mappings()]
        except SQLAlchemyError as exc:
            logger.error("metric store query failed | query=%s, error=%s", name, exc.__class__.__name__, exc_info=True)
            raise UpstreamUnavailableError("metric store is unavailable") from exc
        logger.debug("metric store query | query=%s, rows=%d", name, len(rows))
        return rows


def _to_date(value) -> date:
    # SQLite 는 date() 결과를 문자열로 돌려줄 수 있다.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
