"""Constract AI FastAPI 애플리케이션."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from constract import __version__
from constract.core.settings import settings
from constract.routes import analysis

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Sentry 초기화
if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        integrations=[FastApiIntegration()],
        environment=settings.app_env,
        traces_sample_rate=0.1 if settings.app_env == "production" else 1.0,
    )
    logger.info("Sentry 초기화 완료")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 시작/종료 시 실행되는 코드."""
    logger.info("Constract AI 서비스 시작")
    logger.info(f"환경: {settings.app_env}")
    logger.info(f"Primary LLM: {settings.primary_llm} (API 키 {'설정됨' if settings.llm_api_key else '없음 - 규칙 기반'})")

    yield

    logger.info("Constract AI 서비스 종료")


# FastAPI 앱 생성
app = FastAPI(
    title="Constract AI",
    description="전세 계약서/등기부 사기 위험도 분석 서비스",
    version=__version__,
    lifespan=lifespan,
)


# CORS 미들웨어 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """헬스체크 응답 모델."""
    ok: bool
    version: str = __version__
    environment: str


@app.get("/healthz", response_model=HealthResponse)
async def health_check():
    """헬스체크 엔드포인트."""
    return HealthResponse(ok=True, environment=settings.app_env)


app.include_router(analysis.router)
