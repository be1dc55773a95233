from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MetricSample:
    """
    특정 시점에 관측된 영상 1건의 성과 지표입니다.
    (video_id, timestamp) 조합은 유일하며, 카운터는 대체로 증가하지만 단조 증가를 보장하지 않습니다.
    """
    video_id: str
    timestamp: datetime
    views: int
    likes: int
    dislikes: int
    comments: int
