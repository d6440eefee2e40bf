"""dependencies: FastAPI 의존성 주입 패키지.

요청 컨텍스트 관련 의존성 함수를 제공합니다.
"""

from .request_context import get_request_metadata, get_request_timestamp, get_request_time

__all__ = [
    "get_request_metadata",
    "get_request_timestamp",
    "get_request_time",
]
