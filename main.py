"""main: FastAPI 애플리케이션의 메인 진입점.

애플리케이션 설정, 미들웨어 구성, 라우터 등록, 전역 예외 핸들러를 설정합니다.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from routers import password_router
from middleware import TimingMiddleware, LoggingMiddleware, RateLimitMiddleware
from middleware.exception_handler import (
    global_exception_handler,
    password_generation_exception_handler,
    request_validation_exception_handler,
)
from core.config import settings
from fastapi.exceptions import RequestValidationError
from models.generation_record_models import cleanup_expired_records
from utils.exceptions import PasswordGenerationError
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
from mangum import Mangum


logger = logging.getLogger("api")


async def _periodic_record_cleanup() -> None:
    """만료된 생성 이력을 주기적으로 정리하는 백그라운드 작업."""
    while True:
        await asyncio.sleep(settings.GENERATION_CLEANUP_INTERVAL_MINUTES * 60)
        try:
            await cleanup_expired_records()
        except Exception:
            logger.exception("생성 이력 정리 중 오류 발생")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리.

    시작 시 만료 이력 정리 작업을 스케줄링하고, 종료 시 작업을 취소합니다.
    """
    cleanup_task = asyncio.create_task(_periodic_record_cleanup())
    yield
    cleanup_task.cancel()


app = FastAPI(
    title="Password Composer API",
    description="구성 요건 기반 안전한 비밀번호 생성 API 서버",
    version="1.0.0",
    lifespan=lifespan,
)

# 나중에 추가한 미들웨어가 바깥쪽에서 실행되므로,
# TimingMiddleware가 요청 ID를 먼저 설정한 뒤 LoggingMiddleware가 기록함
app.add_middleware(LoggingMiddleware)

app.add_middleware(TimingMiddleware)

# 대량 생성 남용 방지를 위한 IP 기반 요청 속도 제한
app.add_middleware(RateLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Session-ID", "X-Request-ID"],
    expose_headers=["X-Request-ID", "X-Process-Time"],
)

# trusted_hosts="*"는 IP 스푸핑 위험이 있으므로 명시적 IP만 허용
_proxy_trusted_hosts = list(settings.TRUSTED_PROXIES) if settings.TRUSTED_PROXIES else ["127.0.0.1", "::1"]
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=_proxy_trusted_hosts)

app.include_router(password_router)


@app.get("/health", status_code=200)
async def health_check():
    """서버 상태 확인."""
    return {"status": "ok"}


app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(PasswordGenerationError, password_generation_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)  # type: ignore[arg-type]

# AWS 핸들러 설정
handler = Mangum(app)
