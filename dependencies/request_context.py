# request_context: 요청 컨텍스트 의존성
# 미들웨어에서 설정한 요청 정보와 요청 출처 정보에 대한 접근을 제공합니다.

from datetime import datetime, timezone
from fastapi import Request

from middleware.rate_limiter import get_client_ip
from models.generation_record_models import RequestMetadata
from utils.formatters import format_datetime

SESSION_HEADER = "X-Session-ID"


# 요청 시간을 datetime 객체로 반환
def get_request_time(request: Request) -> datetime:
    if hasattr(request.state, "request_time"):
        return request.state.request_time
    # 미들웨어가 설정되지 않은 경우 폴백
    return datetime.now(timezone.utc)


# 요청 타임스탬프를 반환
def get_request_timestamp(request: Request) -> str:
    """
    요청 타임스탬프를 반환

    TimingMiddleware에서 설정한 request_time을 ISO 8601 형식의 문자열로 반환
    미들웨어가 설정되지 않은 경우 현재 시간을 반환
    """
    return format_datetime(get_request_time(request))


def get_request_metadata(request: Request) -> RequestMetadata:
    """생성 이력에 함께 기록할 요청 출처 정보를 추출합니다.

    세션 ID는 X-Session-ID 헤더, IP는 프록시 검증을 거친 클라이언트 IP를 사용합니다.
    """
    return RequestMetadata(
        session_id=request.headers.get(SESSION_HEADER) or None,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("User-Agent") or None,
    )
