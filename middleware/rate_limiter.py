"""rate_limiter: API 요청 속도 제한 미들웨어.

비밀번호 대량 생성 남용을 막기 위한 IP 기반 Rate Limiting을 제공합니다.

- 슬라이딩 윈도우: (IP, 경로)별로 윈도우 내 요청 시각만 유지
- LRU 기반 메모리 보호 (최대 추적 키 수 제한)
- IP 위조 방어 (X-Forwarded-For 검증)
- "unknown" IP에 대한 엄격한 제한
"""

from collections import defaultdict
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import asyncio
import ipaddress
import logging
import os
import time

from core.config import settings

logger = logging.getLogger(__name__)

_UNKNOWN_IPS = ("unknown", "0.0.0.0", "")
_UNKNOWN_IP_MAX_REQUESTS = 10


def is_valid_ip(ip_str: str) -> bool:
    """IP 주소 형식을 검증합니다.

    IPv4와 IPv6 모두 지원합니다.

    Args:
        ip_str: 검증할 IP 주소 문자열.

    Returns:
        유효한 IP 주소이면 True, 아니면 False.
    """
    try:
        ipaddress.ip_address(ip_str)
        return True
    except ValueError:
        return False


class RateLimiter:
    """메모리 기반 Rate Limiter (LRU 메모리 보호 적용).

    (IP, 경로) 키별로 요청 시각을 추적하고 제한합니다.
    Lambda 인스턴스마다 독립적인 카운터를 사용하므로,
    여러 인스턴스에 분산되면 실제 제한보다 관대하게 적용됩니다.
    """

    def __init__(self, max_tracked_keys: int | None = None, clock=time.monotonic):
        """RateLimiter 초기화.

        Args:
            max_tracked_keys: 최대 추적 키 수 (기본: settings.RATE_LIMIT_MAX_IPS).
            clock: 초 단위 시각을 반환하는 함수 (테스트에서 교체 가능).
        """
        self._requests: dict[str, list[float]] = defaultdict(list)
        self._lock = asyncio.Lock()
        self._clock = clock
        self.max_tracked_keys = (
            max_tracked_keys if max_tracked_keys is not None else settings.RATE_LIMIT_MAX_IPS
        )

    def _evict_oldest(self) -> None:
        # 마지막 요청이 가장 오래된 키부터 10%를 일괄 제거 (분할 상환 O(1))
        eviction_count = max(1, self.max_tracked_keys // 10)
        sorted_keys = sorted(
            self._requests.items(),
            key=lambda item: item[1][-1] if item[1] else float("-inf"),
        )
        for key, _ in sorted_keys[:eviction_count]:
            del self._requests[key]

        logger.warning(
            f"Rate Limiter 배치 제거: {eviction_count}개 키 제거 "
            f"(남은 키: {len(self._requests)}개)"
        )

    async def is_rate_limited(
        self, ip: str, path: str, max_requests: int, window_seconds: int
    ) -> tuple[bool, int]:
        """요청이 속도 제한에 걸리는지 확인합니다.

        Args:
            ip: 클라이언트 IP 주소.
            path: 요청 경로.
            max_requests: 윈도우 내 최대 요청 수.
            window_seconds: 시간 윈도우 (초).

        Returns:
            (제한 여부, 남은 요청 수) 튜플.
        """
        key = f"{ip}|{path}"
        async with self._lock:
            if key not in self._requests and len(self._requests) >= self.max_tracked_keys:
                self._evict_oldest()

            now = self._clock()
            window_start = now - window_seconds

            # 윈도우 내의 요청만 유지
            self._requests[key] = [
                req_time for req_time in self._requests[key] if req_time > window_start
            ]
            current_count = len(self._requests[key])

            if ip in _UNKNOWN_IPS:
                max_requests = min(max_requests, _UNKNOWN_IP_MAX_REQUESTS)
                logger.warning(
                    f"Unknown IP 감지: {ip!r}, 엄격한 제한 적용 (최대 {max_requests}회)"
                )

            if current_count >= max_requests:
                return True, 0

            self._requests[key].append(now)
            return False, max_requests - current_count - 1


# 전역 Rate Limiter 인스턴스
_rate_limiter = RateLimiter()


# 엔드포인트별 Rate Limit 설정 (생성 개수 100 x 길이 128이 요청당 상한)
RATE_LIMIT_CONFIG = {
    "/v1/passwords": {"max_requests": 30, "window_seconds": 60},
    "/v1/passwords/composition": {"max_requests": 30, "window_seconds": 60},
    "/v1/passwords/analysis": {"max_requests": 60, "window_seconds": 60},
}

# 기본 Rate Limit (설정되지 않은 엔드포인트): 15분에 100회
DEFAULT_RATE_LIMIT = {"max_requests": 100, "window_seconds": 15 * 60}


def get_client_ip(request: Request) -> str:
    """클라이언트 IP를 신뢰할 수 있는 방식으로 추출합니다.

    처리 순서:
    1. X-Forwarded-For 헤더 확인 (신뢰된 프록시 검증)
    2. X-Real-IP 헤더 확인 (일부 프록시가 사용)
    3. 직접 연결된 클라이언트 IP

    Args:
        request: FastAPI Request 객체.

    Returns:
        클라이언트 IP 주소. 추출 실패 시 "unknown".
    """
    trusted_proxies = settings.TRUSTED_PROXIES

    x_forwarded_for = request.headers.get("X-Forwarded-For")
    if x_forwarded_for:
        # X-Forwarded-For: client, proxy1, proxy2 형식
        ips = [ip.strip() for ip in x_forwarded_for.split(",") if ip.strip()]
        ips = [ip for ip in ips if is_valid_ip(ip)]

        if not ips:
            logger.warning(
                f"X-Forwarded-For 헤더에 유효한 IP 없음: {x_forwarded_for}"
            )
            if request.client and request.client.host:
                return request.client.host
            return "unknown"

        # 가장 오른쪽부터 신뢰된 프록시 제거
        if trusted_proxies:
            for ip in reversed(ips):
                if ip not in trusted_proxies:
                    return ip
            logger.warning(f"모든 IP가 신뢰된 프록시: {ips}, 첫 번째 IP 반환")
            return ips[0]

        return ips[0]

    x_real_ip = request.headers.get("X-Real-IP")
    if x_real_ip and is_valid_ip(x_real_ip.strip()):
        return x_real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    logger.warning("클라이언트 IP 추출 실패, 'unknown' 반환")
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate Limiting 미들웨어.

    IP 기반으로 생성/분석 API 요청 속도를 제한합니다.
    """

    async def dispatch(self, request: Request, call_next):
        # 테스트 환경에서는 Rate Limit 적용 안 함
        if os.environ.get("TESTING") == "true":
            return await call_next(request)

        # GET, OPTIONS 요청과 Health check는 제외
        if request.method in ("GET", "OPTIONS") or request.url.path == "/health":
            return await call_next(request)

        path = request.url.path.rstrip("/") or "/"
        config = RATE_LIMIT_CONFIG.get(path, DEFAULT_RATE_LIMIT)

        is_limited, remaining = await _rate_limiter.is_rate_limited(
            ip=get_client_ip(request),
            path=path,
            max_requests=config["max_requests"],
            window_seconds=config["window_seconds"],
        )

        if is_limited:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "too_many_requests",
                    "message": "요청이 너무 많습니다. 잠시 후 다시 시도해주세요.",
                    "retry_after_seconds": config["window_seconds"],
                },
                headers={
                    "Retry-After": str(config["window_seconds"]),
                    "X-RateLimit-Limit": str(config["max_requests"]),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(config["max_requests"])
        response.headers["X-RateLimit-Remaining"] = str(remaining)

        return response
