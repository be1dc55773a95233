import logging

from config.settings import AppSettings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    level_name = (level or AppSettings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    # SQL 본문은 SQL_ECHO 로만 노출한다.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
