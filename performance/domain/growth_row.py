from dataclasses import dataclass


@dataclass(frozen=True)
class GrowthRow:
    video_id: str
    growth: int
