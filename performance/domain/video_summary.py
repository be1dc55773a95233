from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VideoSummary:
    # 영상별 최신 샘플 값 (누적 카운터이므로 합계가 아닌 최신값을 사용)
    video_id: str
    timestamp: datetime
    views: int
    likes: int
    dislikes: int
    comments: int
