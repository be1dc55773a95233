import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from performance.application.usecase.performance_query_usecase import PerformanceQueryUseCase
from performance.domain.errors import (
    InvalidArgumentError,
    NotFoundError,
    UpstreamUnavailableError,
)
from performance.infrastructure.repository.metric_store_repository_impl import MetricStoreRepositoryImpl

logger = logging.getLogger(__name__)

performance_router = APIRouter(tags=["performance"])

# 조회 전용 유스케이스 싱글턴 (세션은 호출마다 열고 닫는다)
_usecase = PerformanceQueryUseCase(MetricStoreRepositoryImpl())


def get_performance_usecase() -> PerformanceQueryUseCase:
    return _usecase


def _run(operation: str, func, *args, **kwargs):
    try:
        return func(*args, **kwargs)
    except InvalidArgumentError as exc:
        logger.info("[%s] invalid argument: %s", operation, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        logger.info("[%s] not found: %s", operation, exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        raise HTTPException(status_code=503, detail="metric store is unavailable") from exc
    except Exception as exc:
        # 내부 쿼리/스택 정보는 로그에만 남기고 응답에는 노출하지 않는다.
        logger.exception("[%s] unexpected failure | args=%s, kwargs=%s", operation, args, kwargs)
        raise HTTPException(status_code=500, detail="internal error") from exc


@performance_router.get("/trends")
def get_trends(
    granularity: str = Query(default=..., description="daily / weekly / monthly"),
    video_id: str | None = Query(default=None, description="특정 영상만 집계"),
    usecase: PerformanceQueryUseCase = Depends(get_performance_usecase),
):
    """
    기간 버킷별(UTC, ISO 주) 평균 조회/좋아요/싫어요/댓글 수를 조회한다.
    """
    result = _run("trends", usecase.get_trends, granularity, video_id=video_id)
    return JSONResponse(jsonable_encoder(result))


@performance_router.get("/videos/top")
def get_top_videos(
    metric: str = Query(default="views", description="views / likes / dislikes / comments"),
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
    usecase: PerformanceQueryUseCase = Depends(get_performance_usecase),
):
    """
    영상별 최신 샘플 기준 상위 영상을 페이지 단위로 조회한다.
    """
    result = _run("top_videos", usecase.get_top_videos, metric=metric, page=page, page_size=page_size)
    return JSONResponse(jsonable_encoder(result))


@performance_router.get("/videos/growth")
def get_top_growth(
    limit: int | None = Query(default=None),
    usecase: PerformanceQueryUseCase = Depends(get_performance_usecase),
):
    """
    조회수 성장폭(최대 - 최소) 상위 영상을 조회한다.
    """
    items = _run("top_growth", usecase.get_top_growth, limit)
    return JSONResponse(jsonable_encoder({"items": items}))


@performance_router.get("/videos/engagement")
def get_most_engaging(
    limit: int | None = Query(default=None),
    usecase: PerformanceQueryUseCase = Depends(get_performance_usecase),
):
    """
    참여도(최대 좋아요 + 최대 댓글) 상위 영상을 조회한다.
    """
    items = _run("most_engaging", usecase.get_most_engaging, limit)
    return JSONResponse(jsonable_encoder({"items": items}))


@performance_router.get("/videos/compare")
def compare_videos(
    video_ids: str = Query(default="", description="콤마로 구분한 영상 ID 목록"),
    usecase: PerformanceQueryUseCase = Depends(get_performance_usecase),
):
    """
    여러 영상의 원본 샘플을 시간 순으로 조회한다. 없는 영상 ID 는 결과에서 빠진다.
    """
    items = _run("compare", usecase.compare_videos, video_ids)
    return JSONResponse(jsonable_encoder({"items": items}))


@performance_router.get("/videos/{video_id}/summary")
def get_video_summary(
    video_id: str,
    usecase: PerformanceQueryUseCase = Depends(get_performance_usecase),
):
    result = _run("video_summary", usecase.get_video_summary, video_id)
    return JSONResponse(jsonable_encoder(result))
