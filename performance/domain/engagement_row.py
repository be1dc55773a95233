from dataclasses import dataclass


@dataclass(frozen=True)
class EngagementRow:
    video_id: str
    engagement: int
