from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import DatabaseSettings

# Uses SQL_* env vars (SQL_USER, SQL_PASSWORD, SQL_HOST, SQL_PORT, SQL_DATABASE) or a full SQL_URL.
# 한국어 주석: 지표 테이블은 외부 수집 프로세스가 적재하며, 이 서버는 읽기 전용으로 접속합니다.
settings = DatabaseSettings()

engine = create_engine(
    settings.url,
    echo=settings.echo,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db_schema():
    """
    INIT_DB_SCHEMA=true 인 경우 기동 시 테이블이 없을 때를 대비해 스키마를 생성합니다.
    """
    Base.metadata.create_all(bind=engine)


def dispose_engine():
    """
    종료 시 커넥션 풀을 정리합니다.
    """
    engine.dispose()
