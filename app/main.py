import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.database.session import dispose_engine, init_db_schema, settings as database_settings
from config.logging_config import configure_logging
from config.settings import AppSettings
from performance.adapter.input.web.performance_router import performance_router

app_settings = AppSettings()
configure_logging(app_settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan 훅으로 스키마 생성과 커넥션 풀 정리를 관리합니다.
    """
    if database_settings.init_schema:
        init_db_schema()
    logger.info("YouTube Trends Explorer server started")
    try:
        yield
    finally:
        dispose_engine()
        logger.info("database pool closed")


app = FastAPI(title="YouTube Trends Explorer", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 타입이 맞지 않는 쿼리 파라미터도 도메인 검증 실패와 같은 400 으로 응답한다.
    messages = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}" for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


app.include_router(performance_router, prefix="/performance")


@app.get("/health")
def health_check() -> dict[str, str]:
    """
    헬스체크 엔드포인트입니다.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app_settings.host, port=app_settings.port)
