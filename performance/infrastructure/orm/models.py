from sqlalchemy import Column, String, BigInteger, DateTime, Index

from config.database.session import Base


class PerformanceMetricORM(Base):
    """
    외부 수집 프로세스가 적재하는 영상 성과 지표 시계열 테이블입니다.
    recorded_at 은 UTC 기준 naive datetime 으로 저장됩니다.
    """
    __tablename__ = "performance_metrics"

    video_id = Column(String(100), primary_key=True)
    recorded_at = Column(DateTime, primary_key=True)
    views = Column(BigInteger, nullable=False, default=0)
    likes = Column(BigInteger, nullable=False, default=0)
    dislikes = Column(BigInteger, nullable=False, default=0)
    comments = Column(BigInteger, nullable=False, default=0)

    __table_args__ = (Index("ix_performance_metrics_recorded_at", "recorded_at"),)
