import os
import urllib.parse
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _build_database_url() -> str:
    # SQL_URL 이 주어지면 그대로 사용한다 (로컬/테스트용 SQLite 등).
    url = os.getenv("SQL_URL")
    if url:
        return url
    password = urllib.parse.quote_plus(os.getenv("SQL_PASSWORD", ""))
    return (
        f"postgresql+psycopg2://{os.getenv('SQL_USER','postgres')}:{password}"
        f"@{os.getenv('SQL_HOST','localhost')}:{os.getenv('SQL_PORT','5432')}/{os.getenv('SQL_DATABASE','youtube_trends')}"
    )


@dataclass
class DatabaseSettings:
    url: str = field(default_factory=_build_database_url)
    echo: bool = field(default_factory=lambda: os.getenv("SQL_ECHO", "false").lower() == "true")
    init_schema: bool = field(default_factory=lambda: os.getenv("INIT_DB_SCHEMA", "false").lower() == "true")


@dataclass
class TrendSettings:
    """
    트렌드/랭킹 조회의 응답 크기 상한과 기본값.
    """
    max_rows: int = field(default_factory=lambda: _int_env("TREND_MAX_ROWS", 100))
    default_page_size: int = field(default_factory=lambda: _int_env("DEFAULT_PAGE_SIZE", 10))
    max_page_size: int = field(default_factory=lambda: _int_env("MAX_PAGE_SIZE", 100))
    default_ranking_limit: int = field(default_factory=lambda: _int_env("DEFAULT_RANKING_LIMIT", 10))
    max_ranking_limit: int = field(default_factory=lambda: _int_env("MAX_RANKING_LIMIT", 100))
    max_page: int = field(default_factory=lambda: _int_env("MAX_PAGE", 100_000))
    compare_max_videos: int = field(default_factory=lambda: _int_env("COMPARE_MAX_VIDEOS", 10))

    def __post_init__(self):
        for name in (
            "max_rows",
            "default_page_size",
            "max_page_size",
            "default_ranking_limit",
            "max_ranking_limit",
            "compare_max_videos",
            "max_page",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must not exceed max_page_size")
        if self.default_ranking_limit > self.max_ranking_limit:
            raise ValueError("default_ranking_limit must not exceed max_ranking_limit")
        # OFFSET 은 64비트 정수 범위 안에 있어야 한다.
        if self.max_page * self.max_page_size >= 2**63:
            raise ValueError("max_page * max_page_size must fit in a 64-bit integer")


@dataclass
class AppSettings:
    host: str = os.getenv("APP_HOST", "0.0.0.0")
    port: int = _int_env("APP_PORT", 8000)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: str | None = os.getenv("CORS_ORIGINS")

    def origins(self) -> list[str]:
        if not self.cors_origins:
            return ["http://localhost:3000"]
        return [origin for origin in self.cors_origins.split(",") if origin]
