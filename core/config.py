import logging
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def _resolve_ssm_secrets() -> None:
    """Lambda 환경에서 SSM Parameter Store의 SecureString 값을 환경 변수로 설정합니다.

    SSM 파라미터 이름은 Lambda 환경변수 PASSWORD_SALT_SSM_NAME에 지정.
    pydantic-settings가 환경변수에서 값을 읽기 전에 호출해야 합니다.
    """
    if os.getenv("AWS_LAMBDA_EXEC") != "true":
        return

    ssm_mappings = {
        "PASSWORD_SALT": os.getenv("PASSWORD_SALT_SSM_NAME"),
    }

    params_to_fetch = {k: v for k, v in ssm_mappings.items() if v}
    if not params_to_fetch:
        return

    import boto3  # Lambda 런타임에 기본 포함

    ssm = boto3.client("ssm")

    try:
        response = ssm.get_parameters(
            Names=list(params_to_fetch.values()),
            WithDecryption=True,
        )
    except Exception:
        logger.exception("SSM 배치 파라미터 조회 실패")
        raise

    if response.get("InvalidParameters"):
        raise RuntimeError(
            f"SSM 파라미터 조회 실패: {response['InvalidParameters']}"
        )

    # 모든 파라미터 조회 성공 후 환경변수 일괄 설정
    name_to_env = {v: k for k, v in params_to_fetch.items()}
    for param in response["Parameters"]:
        os.environ[name_to_env[param["Name"]]] = param["Value"]


# Settings 인스턴스 생성 전에 SSM에서 시크릿을 환경변수로 설정
_resolve_ssm_secrets()


class Settings(BaseSettings):
    """애플리케이션 설정을 관리하는 클래스.

    환경 변수에서 설정을 로드하며, 기본값을 제공합니다.

    Attributes:
        ALLOWED_ORIGINS: CORS 허용 오리진 목록.
        DEBUG: 500 응답에 상세 에러 메시지를 포함할지 여부.
        RATE_LIMIT_MAX_IPS: Rate Limiter가 추적하는 최대 IP 수.
        TRUSTED_PROXIES: X-Forwarded-For를 신뢰할 프록시 IP 목록.
        PASSWORD_SALT: 생성 이력 해시에 붙이는 서버 측 솔트.
        GENERATION_RETENTION_HOURS: 생성 이력 보관 시간.
        GENERATION_CLEANUP_INTERVAL_MINUTES: 만료 이력 정리 주기.
        GENERATION_MAX_RECORDS: 메모리 보호를 위한 최대 보관 이력 수.
        ERROR_LOG_FILE: 처리되지 않은 예외를 기록할 파일 경로.
    """

    ALLOWED_ORIGINS: list[str] = [
        "http://127.0.0.1:3000",  # 로컬 개발 (프론트엔드)
        "http://localhost:3000",  # 로컬 개발 (프론트엔드)
    ]

    # 프로덕션에서는 False로 설정하여 상세 에러 메시지 노출 방지
    DEBUG: bool = True

    RATE_LIMIT_MAX_IPS: int = 10000  # 메모리 보호를 위한 최대 추적 IP 수
    TRUSTED_PROXIES: set[str] = set()  # 프로덕션에서 nginx 등의 프록시 IP 설정 필요

    PASSWORD_SALT: str = "password-composer-salt"
    GENERATION_RETENTION_HOURS: int = 24
    GENERATION_CLEANUP_INTERVAL_MINUTES: int = 60
    GENERATION_MAX_RECORDS: int = 100_000  # 메모리 보호를 위한 최대 보관 이력 수

    ERROR_LOG_FILE: str = "server_error.log"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
