"""password_router: 비밀번호 생성 관련 라우터 모듈.

구성 프리셋 기반 생성, 기본 생성, 프리셋 조회, 강도 분석, 생성 이력 엔드포인트를 제공합니다.
"""

from fastapi import APIRouter, Query, Request, status

from controllers import password_controller
from schemas.password_schemas import (
    AnalyzePasswordRequest,
    BasicPasswordRequest,
    CompositionPasswordRequest,
)

password_router = APIRouter(prefix="/v1/passwords", tags=["passwords"])
"""비밀번호 관련 라우터 인스턴스."""


# ============ 비밀번호 생성 ============


@password_router.post("", status_code=status.HTTP_200_OK)
async def generate_passwords(password_data: BasicPasswordRequest, request: Request) -> dict:
    """문자 종류 선택만으로 비밀번호를 생성합니다."""
    return await password_controller.generate_basic(password_data, request)


@password_router.post("/composition", status_code=status.HTTP_200_OK)
async def generate_with_composition(
    password_data: CompositionPasswordRequest, request: Request
) -> dict:
    """구성 프리셋 또는 사용자 정의 문자 클래스로 비밀번호를 생성합니다.

    Args:
        password_data: 길이, 개수, 구성 ID, 제외 옵션 등을 담은 요청.
        request: FastAPI Request 객체.

    Returns:
        생성된 비밀번호 목록과 강도, 크래킹 시간, 적용 요건.
    """
    return await password_controller.generate_with_composition(password_data, request)


# ============ 프리셋 ============


@password_router.get("/presets", status_code=status.HTTP_200_OK)
async def get_presets(request: Request) -> dict:
    """사용 가능한 구성 프리셋 목록을 조회합니다."""
    return await password_controller.get_presets(request)


@password_router.get("/presets/{preset_id}", status_code=status.HTTP_200_OK)
async def get_preset(preset_id: str, request: Request) -> dict:
    """구성 프리셋 하나를 조회합니다."""
    return await password_controller.get_preset(preset_id, request)


# ============ 분석 / 이력 ============


@password_router.post("/analysis", status_code=status.HTTP_200_OK)
async def analyze_password(password_data: AnalyzePasswordRequest, request: Request) -> dict:
    """비밀번호 강도를 분석합니다."""
    return await password_controller.analyze_password(password_data, request)


@password_router.get("/history", status_code=status.HTTP_200_OK)
async def get_history(
    request: Request,
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
) -> dict:
    """현재 세션(X-Session-ID)의 생성 이력을 조회합니다."""
    return await password_controller.get_history(offset, limit, request)
