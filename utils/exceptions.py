"""exceptions: 비밀번호 생성 엔진 예외 및 API 에러 응답 생성 헬퍼 모듈.

엔진은 입력 오류를 타입별 예외로 알리고,
컨트롤러는 이 모듈의 헬퍼로 표준화된 HTTP 에러 응답을 생성합니다.
"""

from fastapi import HTTPException, status


class PasswordGenerationError(Exception):
    """비밀번호 생성 요청 오류의 기반 클래스.

    모든 하위 예외는 호출자 입력 오류이며 엔진 상태를 오염시키지 않습니다.

    Attributes:
        error_code: API 응답에 사용할 에러 코드.
        status_code: 매핑될 HTTP 상태 코드.
    """

    error_code = "password_generation_failed"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidLengthError(PasswordGenerationError):
    """비밀번호 길이가 허용 범위를 벗어난 경우."""

    error_code = "invalid_length"

    def __init__(self, length: int, minimum: int, maximum: int):
        super().__init__(
            f"비밀번호 길이는 {minimum}자 이상 {maximum}자 이하로 지정해야 합니다. (입력: {length})"
        )
        self.length = length


class InvalidCountError(PasswordGenerationError):
    """생성 개수가 허용 범위를 벗어난 경우."""

    error_code = "invalid_count"

    def __init__(self, count: int, minimum: int, maximum: int):
        super().__init__(
            f"생성 개수는 {minimum}개 이상 {maximum}개 이하로 지정해야 합니다. (입력: {count})"
        )
        self.count = count


class UnknownCompositionError(PasswordGenerationError):
    """등록되지 않은 구성 프리셋 ID가 지정된 경우."""

    error_code = "unknown_composition"

    def __init__(self, composition_id: str):
        super().__init__(f"알 수 없는 구성 프리셋입니다: {composition_id}")
        self.composition_id = composition_id


class EmptyCharsetError(PasswordGenerationError):
    """필수 문자 클래스의 문자 집합이 제외 필터링 후 비어 있는 경우."""

    error_code = "empty_charset"

    def __init__(self, requirement_name: str):
        super().__init__(
            f"'{requirement_name}' 문자 클래스에 사용할 수 있는 문자가 없습니다."
        )
        self.requirement_name = requirement_name


class RequirementOverflowError(PasswordGenerationError):
    """최소 출현 횟수의 합이 비밀번호 길이를 초과하는 경우."""

    error_code = "requirement_overflow"

    def __init__(self, required: int, length: int):
        super().__init__(
            f"필수 문자 수의 합({required})이 비밀번호 길이({length})를 초과합니다."
        )
        self.required = required
        self.length = length


class InvalidRequirementError(PasswordGenerationError):
    """문자 클래스의 최소 출현 횟수가 음수인 경우."""

    error_code = "invalid_requirement"

    def __init__(self, requirement_name: str, min_count: int):
        super().__init__(
            f"'{requirement_name}' 문자 클래스의 최소 출현 횟수는 0 이상이어야 합니다. (입력: {min_count})"
        )
        self.requirement_name = requirement_name
        self.min_count = min_count


class NoCharacterClassSelectedError(PasswordGenerationError):
    """사용 가능한 문자 클래스가 하나도 없는 경우."""

    error_code = "no_character_class_selected"

    def __init__(self):
        super().__init__("사용할 문자 종류를 하나 이상 선택해야 합니다.")


class RandomSourceUnavailableError(PasswordGenerationError):
    """운영체제의 암호학적 난수 소스를 사용할 수 없는 경우.

    입력 오류가 아닌 서버 측 장애이므로 5xx로 매핑됩니다.
    """

    error_code = "random_source_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, reason: str | None = None):
        message = "암호학적 난수 소스를 사용할 수 없습니다."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


def not_found_error(resource: str, timestamp: str) -> HTTPException:
    """리소스를 찾을 수 없을 때 404 에러를 생성합니다.

    Args:
        resource: 리소스 이름 (예: 'preset').
        timestamp: 요청 타임스탬프.

    Returns:
        HTTPException: 404 Not Found 예외.
    """
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": f"{resource}_not_found",
            "timestamp": timestamp,
        },
    )


def bad_request_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """잘못된 요청에 대한 400 에러를 생성합니다.

    Args:
        error_code: 에러 코드 (예: 'invalid_length', 'requirement_overflow').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).

    Returns:
        HTTPException: 400 Bad Request 예외.
    """
    detail = {
        "error": error_code,
        "timestamp": timestamp,
    }
    if message:
        detail["message"] = message
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


def service_unavailable_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """일시적인 서버 측 장애에 대한 503 에러를 생성합니다.

    Args:
        error_code: 에러 코드 (예: 'random_source_unavailable').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).

    Returns:
        HTTPException: 503 Service Unavailable 예외.
    """
    detail = {
        "error": error_code,
        "timestamp": timestamp,
    }
    if message:
        detail["message"] = message
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=detail,
    )


def generation_error(exc: PasswordGenerationError, timestamp: str) -> HTTPException:
    """엔진 예외를 상태 코드에 맞는 HTTPException으로 변환합니다.

    Args:
        exc: 엔진에서 발생한 예외.
        timestamp: 요청 타임스탬프.

    Returns:
        HTTPException: 400 또는 503 예외.
    """
    if exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        return service_unavailable_error(exc.error_code, timestamp, exc.message)
    return bad_request_error(exc.error_code, timestamp, exc.message)
