"""routers: FastAPI 라우터 패키지.

비밀번호 생성 관련 API 엔드포인트를 정의하는 라우터 모듈을 제공합니다.
"""

from .password_router import password_router

__all__ = [
    "password_router",
]
