"""controllers: 요청 핸들러 패키지.

비밀번호 생성 관련 컨트롤러 모듈을 제공합니다.
"""

from . import password_controller

__all__ = [
    "password_controller",
]
