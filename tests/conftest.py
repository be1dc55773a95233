import os

# 테스트는 PostgreSQL 대신 메모리 SQLite 를 사용한다. (모듈 import 전에 설정)
os.environ["SQL_URL"] = "sqlite://"

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database.session import Base
from performance.infrastructure.orm.models import PerformanceMetricORM
from performance.infrastructure.repository.metric_store_repository_impl import MetricStoreRepositoryImpl


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def seed(session_factory):
    def _seed(rows):
        with session_factory() as db:
            for video_id, recorded_at, views, likes, dislikes, comments in rows:
                db.add(
                    PerformanceMetricORM(
                        video_id=video_id,
                        recorded_at=recorded_at,
                        views=views,
                        likes=likes,
                        dislikes=dislikes,
                        comments=comments,
                    )
                )
            db.commit()

    return _seed


@pytest.fixture
def repository(session_factory):
    return MetricStoreRepositoryImpl(session_factory=session_factory)


@pytest.fixture
def ranking_rows():
    # a: 조회수 100 -> 150 -> 120 (성장폭 50, 참여도 20 + 9)
    # b: 샘플 1건 (성장폭 0)
    # c: 10 -> 300 (성장폭 290)
    return [
        ("a", datetime(2024, 1, 1, 9, 0), 100, 10, 1, 5),
        ("a", datetime(2024, 1, 2, 9, 0), 150, 20, 2, 9),
        ("a", datetime(2024, 1, 3, 9, 0), 120, 15, 2, 7),
        ("b", datetime(2024, 1, 2, 12, 0), 500, 1, 0, 1),
        ("c", datetime(2024, 1, 1, 8, 0), 10, 1, 0, 0),
        ("c", datetime(2024, 1, 4, 8, 0), 300, 2, 0, 0),
    ]
