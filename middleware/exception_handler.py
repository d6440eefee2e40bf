"""exception_handler: 전역 예외 처리 핸들러 모듈.

처리되지 않은 예외를 일관된 형식의 응답으로 변환합니다.
"""

import uuid
import logging
import traceback
from logging.handlers import RotatingFileHandler
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from core.config import settings
from dependencies.request_context import get_request_timestamp
from utils.exceptions import PasswordGenerationError


logger = logging.getLogger("api")

# 에러 전용 파일 로거 설정
error_logger = logging.getLogger("api.error")
error_logger.setLevel(logging.ERROR)

# RotatingFileHandler: 10MB 단위로 로테이션, 최대 5개 백업 파일
if not error_logger.handlers:
    error_file_handler = RotatingFileHandler(
        settings.ERROR_LOG_FILE,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
        delay=True,
    )
    error_file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    error_logger.addHandler(error_file_handler)


def _sanitize(value):
    if isinstance(value, bytes):
        return f"<binary data: {len(value)} bytes>"
    return value


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """전역 예외 처리 핸들러.

    모든 예외를 잡아서 일관된 형식의 500 에러 응답을 반환합니다.
    프로덕션 환경(DEBUG=False)에서는 상세 에러 정보를 숨깁니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 예외.

    Returns:
        500 에러 JSON 응답.
    """
    tracking_id = str(uuid.uuid4())
    timestamp = get_request_timestamp(request)

    logger.error(f"[{tracking_id}] Unhandled exception: {exc}")
    error_logger.error(
        f"[{tracking_id}] Unhandled exception: {exc}\n{traceback.format_exc()}"
    )

    content = {
        "trackingID": tracking_id,
        "error": "Internal Server Error",
        "timestamp": timestamp,
    }

    # DEBUG 모드에서만 상세 정보 포함
    if settings.DEBUG:
        content["detail"] = str(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


async def password_generation_exception_handler(
    request: Request, exc: PasswordGenerationError
) -> JSONResponse:
    """컨트롤러에서 변환되지 않은 생성 엔진 예외 처리 핸들러.

    예외에 지정된 상태 코드(입력 오류 400, 난수 소스 장애 503)와
    에러 코드를 그대로 응답에 사용합니다.

    Args:
        request: FastAPI Request 객체.
        exc: 생성 엔진 예외.

    Returns:
        에러 코드와 메시지를 담은 JSON 응답.
    """
    timestamp = get_request_timestamp(request)

    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"비밀번호 생성 서버 오류: {exc.error_code} ({exc.message})")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": {
                "error": exc.error_code,
                "message": exc.message,
                "timestamp": timestamp,
            }
        },
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 데이터 유효성 검사 예외 처리 핸들러.

    Pydantic 유효성 검사 실패 시 호출됩니다.
    오류 정보에 바이너리 데이터가 포함된 경우 디코딩 오류를 방지하기 위해
    해당 데이터를 문자열 플레이스홀더로 대체합니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 Validation 예외.

    Returns:
        422 Unprocessable Entity 에러 JSON 응답.
    """
    timestamp = get_request_timestamp(request)

    sanitized_errors = []
    for error in exc.errors():
        error_copy = dict(error)

        # 비밀번호 분석 요청의 입력값은 응답/로그에 남기지 않음
        if "password" in error_copy.get("loc", ()):
            error_copy.pop("input", None)
        elif "input" in error_copy:
            error_copy["input"] = _sanitize(error_copy["input"])

        if isinstance(error_copy.get("ctx"), dict):
            error_copy["ctx"] = {k: _sanitize(v) for k, v in error_copy["ctx"].items()}

        sanitized_errors.append(error_copy)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={"detail": jsonable_encoder(sanitized_errors), "timestamp": timestamp},
    )
