from pydantic import BaseModel, ConfigDict, Field, field_validator

from performance.domain.granularity import Granularity
from performance.domain.metric import Metric


class TrendQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    granularity: Granularity
    video_id: str | None = None

    @field_validator("granularity", mode="before")
    @classmethod
    def _parse_granularity(cls, value):
        return Granularity.parse(value)

    @field_validator("video_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class TopVideosQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    metric: Metric = Metric.VIEWS
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)

    @field_validator("metric", mode="before")
    @classmethod
    def _parse_metric(cls, value):
        return Metric.parse(value)


class RankingQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=10, ge=1)


class CompareQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    video_ids: list[str] = Field(min_length=1, description="비교할 영상 ID (콤마 구분 문자열 또는 리스트)")

    @field_validator("video_ids", mode="before")
    @classmethod
    def _split_ids(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        ids: list[str] = []
        for raw in value:
            video_id = str(raw).strip()
            if video_id and video_id not in ids:
                ids.append(video_id)
        return ids


class VideoQuery(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    video_id: str = Field(min_length=1)
