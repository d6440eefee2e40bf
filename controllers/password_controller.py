"""password_controller: 비밀번호 생성 관련 컨트롤러 모듈.

엔진 예외를 HTTP 에러로 변환하고, 생성 결과를 표준 응답 형식으로 가공합니다.
"""

import logging

from fastapi import Request

from dependencies.request_context import get_request_metadata, get_request_timestamp
from models.composition_models import (
    CompositionDefinition,
    GenerationRequest,
    GenerationResult,
    charset_to_str,
)
from models.generation_record_models import generation_record_store
from schemas.common import create_response
from schemas.password_schemas import (
    AnalyzePasswordRequest,
    BasicPasswordRequest,
    CompositionPasswordRequest,
)
from services.password_service import PasswordService
from utils.exceptions import (
    PasswordGenerationError,
    UnknownCompositionError,
    generation_error,
    not_found_error,
)
from utils.formatters import format_datetime

logger = logging.getLogger("api")


def serialize_preset(preset: CompositionDefinition) -> dict:
    """구성 정의를 API 응답용 딕셔너리로 변환합니다."""
    return {
        "id": preset.id,
        "label": preset.label,
        "description": preset.description,
        "requirements": [
            {
                "name": requirement.name,
                "charset": charset_to_str(requirement.charset),
                "min": requirement.min_count,
            }
            for requirement in preset.requirements
        ],
    }


def _serialize_result(result: GenerationResult, criteria: dict, timestamp: str) -> dict:
    # appliedRequirements는 첫 번째 비밀번호 기준으로 보고한다
    first = result.passwords[0] if result.passwords else None
    applied = [summary.to_dict() for summary in first.requirement_summaries] if first else []
    return {
        "passwords": result.values,
        "criteria": criteria,
        "strength": result.strength,
        "estimatedCrackTime": result.estimated_crack_time,
        "entropyBits": round(result.crack_time.entropy_bits, 2),
        "composition": {
            "usedPreset": result.used_preset,
            "appliedRequirements": applied,
        },
        "generatedAt": timestamp,
    }


async def _record_generation(result: GenerationResult, length: int, request: Request) -> None:
    # 이력 저장 실패는 생성 결과에 영향을 주지 않는다
    try:
        await generation_record_store.add_records(
            result.values,
            composition=result.used_preset,
            length=length,
            strength=result.strength,
            estimated_crack_time=result.estimated_crack_time,
            metadata=get_request_metadata(request),
        )
    except Exception:
        logger.exception("생성 이력 저장 중 오류 발생")


async def _generate(
    generation_request: GenerationRequest,
    criteria: dict,
    request: Request,
    code: str,
) -> dict:
    timestamp = get_request_timestamp(request)

    try:
        result = PasswordService.generate_passwords(generation_request)
    except PasswordGenerationError as e:
        logger.info(f"비밀번호 생성 요청 거부: {e.error_code} ({e.message})")
        raise generation_error(e, timestamp)

    await _record_generation(result, generation_request.length, request)

    return create_response(
        code,
        f"비밀번호 {len(result.passwords)}개를 생성했습니다.",
        data=_serialize_result(result, criteria, timestamp),
        timestamp=timestamp,
    )


async def generate_with_composition(
    password_data: CompositionPasswordRequest, request: Request
) -> dict:
    """구성 프리셋 기반으로 비밀번호를 생성합니다.

    Args:
        password_data: 생성 요청 데이터.
        request: FastAPI Request 객체.

    Returns:
        생성된 비밀번호, 강도, 크래킹 시간, 적용 요건을 담은 응답.

    Raises:
        HTTPException: 입력 오류 시 400, 난수 소스 장애 시 503.
    """
    return await _generate(
        password_data.to_generation_request(),
        password_data.model_dump(by_alias=True),
        request,
        "PASSWORDS_GENERATED",
    )


async def generate_basic(password_data: BasicPasswordRequest, request: Request) -> dict:
    """문자 종류 선택만으로 비밀번호를 생성합니다."""
    return await _generate(
        password_data.to_generation_request(),
        password_data.model_dump(by_alias=True),
        request,
        "PASSWORDS_GENERATED",
    )


async def get_presets(request: Request) -> dict:
    """구성 프리셋 목록을 조회합니다."""
    timestamp = get_request_timestamp(request)
    presets = [serialize_preset(preset) for preset in PasswordService.get_presets()]
    return create_response(
        "PRESETS_RETRIEVED",
        "구성 프리셋 목록 조회에 성공했습니다.",
        data={"presets": presets, "count": len(presets)},
        timestamp=timestamp,
    )


async def get_preset(preset_id: str, request: Request) -> dict:
    """구성 프리셋 하나를 조회합니다.

    Raises:
        HTTPException: 등록되지 않은 ID인 경우 404.
    """
    timestamp = get_request_timestamp(request)
    try:
        preset = PasswordService.get_preset(preset_id)
    except UnknownCompositionError:
        raise not_found_error("preset", timestamp)

    return create_response(
        "PRESET_RETRIEVED",
        "구성 프리셋 조회에 성공했습니다.",
        data={"preset": serialize_preset(preset)},
        timestamp=timestamp,
    )


async def analyze_password(password_data: AnalyzePasswordRequest, request: Request) -> dict:
    """비밀번호 강도를 분석합니다."""
    timestamp = get_request_timestamp(request)
    analysis = PasswordService.analyze(password_data.password)
    return create_response(
        "PASSWORD_ANALYZED",
        "비밀번호 분석에 성공했습니다.",
        data=analysis.to_dict(),
        timestamp=timestamp,
    )


async def get_history(offset: int, limit: int, request: Request) -> dict:
    """현재 세션의 생성 이력을 조회합니다.

    X-Session-ID 헤더가 없으면 빈 목록을 반환합니다. 해시는 응답에 포함하지 않습니다.
    """
    timestamp = get_request_timestamp(request)
    session_id = get_request_metadata(request).session_id

    records = await generation_record_store.get_records(session_id) if session_id else []
    page = records[offset : offset + limit]

    return create_response(
        "HISTORY_RETRIEVED",
        "생성 이력 조회에 성공했습니다.",
        data={
            "history": [
                {
                    "composition": record.composition,
                    "length": record.length,
                    "strength": record.strength,
                    "estimatedCrackTime": record.estimated_crack_time,
                    "createdAt": format_datetime(record.created_at),
                    "expiresAt": format_datetime(record.expires_at),
                }
                for record in page
            ],
            "pagination": {
                "offset": offset,
                "limit": limit,
                "total_count": len(records),
                "has_more": offset + limit < len(records),
            },
        },
        timestamp=timestamp,
    )
