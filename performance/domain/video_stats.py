from dataclasses import dataclass
from datetime import datetime

from performance.domain.video_summary import VideoSummary


@dataclass(frozen=True)
class VideoStats:
    """
    단일 영상의 관측 이력 요약입니다.
    growth/engagement 는 랭킹과 동일한 정의를 따릅니다.
    """
    video_id: str
    sample_count: int
    first_seen: datetime
    last_seen: datetime
    latest: VideoSummary
    growth: int
    engagement: int
