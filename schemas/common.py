"""common: 공통 응답 유틸리티 모듈.

모든 엔드포인트가 공유하는 응답 envelope 생성 함수를 정의합니다.
"""

from typing import Any

from utils.formatters import utc_now_iso


def create_response(
    code: str,
    message: str,
    data: dict[str, Any] | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """표준 API 응답 딕셔너리를 생성합니다.

    Args:
        code: 응답 코드 (예: "PASSWORDS_GENERATED", "PRESETS_RETRIEVED").
        message: 사용자에게 표시할 메시지.
        data: 응답 데이터 (기본값: 빈 딕셔너리).
        timestamp: 요청 타임스탬프 (기본값: 현재 UTC 시간).

    Returns:
        code, message, data, errors, timestamp 키를 가진 딕셔너리.
    """
    return {
        "code": code,
        "message": message,
        "data": data if data is not None else {},
        "errors": [],
        "timestamp": timestamp or utc_now_iso(),
    }
