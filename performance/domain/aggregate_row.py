from dataclasses import dataclass

from performance.domain.time_bucket import TimeBucket


@dataclass(frozen=True)
class AggregateRow:
    bucket: TimeBucket
    sample_count: int
    avg_views: float
    avg_likes: float
    avg_dislikes: float
    avg_comments: float
