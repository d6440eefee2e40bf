"""password_service: 구성 조건 기반 비밀번호 생성 서비스.

요건 해석 → 배치 → 섞기 → (검증, 강도 평가, 크래킹 시간 추정) 순으로
비밀번호 묶음을 생성합니다. 모든 단계는 입력에만 의존하는 순수 함수이며,
공유 상태는 읽기 전용 프리셋 레지스트리뿐입니다.
"""

import logging
import time

from models.composition_models import (
    CompositionDefinition,
    GeneratedPassword,
    GenerationRequest,
    GenerationResult,
    ResolvedRequirement,
)
from models.composition_presets import DEFAULT_REGISTRY, PresetRegistry
from services.composition_resolver import resolve_requirements
from services.password_allocator import allocate
from services.requirement_verifier import verify_requirements
from services.strength_service import (
    PasswordAnalysis,
    analyze_password,
    calculate_strength,
    estimate_crack_time,
)
from utils.secure_random import RandomSource, default_random_source, secure_shuffle

logger = logging.getLogger(__name__)


def generate_one(
    length: int,
    requirements: tuple[ResolvedRequirement, ...],
    rng: RandomSource,
) -> GeneratedPassword:
    """검증된 요건으로 비밀번호 하나를 생성하고 요건 충족 여부를 다시 셉니다."""
    chars = allocate(length, requirements, rng)
    secure_shuffle(chars, rng)
    value = "".join(chars)
    return GeneratedPassword(
        value=value,
        requirement_summaries=verify_requirements(value, requirements),
    )


def generate(
    request: GenerationRequest,
    registry: PresetRegistry = DEFAULT_REGISTRY,
    rng: RandomSource | None = None,
) -> GenerationResult:
    """요청한 개수만큼 비밀번호를 생성합니다.

    모든 검증은 난수를 뽑기 전에 끝나므로, 실패하면 비밀번호는 하나도 생성되지 않습니다.

    Args:
        request: 생성 요청.
        registry: 프리셋 레지스트리 (테스트에서 교체 가능).
        rng: 난수 소스 (기본: 운영체제 CSPRNG).

    Returns:
        GenerationResult.

    Raises:
        PasswordGenerationError: 입력 오류 (utils.exceptions 참조).
        RandomSourceUnavailableError: 난수 소스를 사용할 수 없는 경우.
    """
    rng = rng or default_random_source
    requirements = resolve_requirements(request, registry)

    passwords = tuple(
        generate_one(request.length, requirements, rng) for _ in range(request.count)
    )

    unsatisfied = sum(1 for password in passwords if not password.satisfied)
    if unsatisfied:
        # 2단계 배치가 올바르면 발생할 수 없음
        logger.error(
            f"요건 미충족 비밀번호 {unsatisfied}건 생성: composition={request.composition_id}"
        )

    return GenerationResult(
        passwords=passwords,
        strength=calculate_strength(
            request.length,
            requirements,
            request.composition_id,
            request.exclude_ambiguous,
            request.exclude_similar,
        ),
        crack_time=estimate_crack_time(request.length, requirements),
        used_preset=request.composition_id,
        requirements=requirements,
    )


class PasswordService:
    """비밀번호 생성 서비스."""

    @staticmethod
    def generate_passwords(
        request: GenerationRequest,
        registry: PresetRegistry = DEFAULT_REGISTRY,
        rng: RandomSource | None = None,
    ) -> GenerationResult:
        """비밀번호를 생성하고 처리 시간을 기록합니다."""
        start_time = time.perf_counter()
        result = generate(request, registry=registry, rng=rng)
        process_time = time.perf_counter() - start_time

        logger.info(
            f"비밀번호 생성 완료: {len(result.passwords)}건 "
            f"(composition={result.used_preset}, strength={result.strength}, "
            f"time={process_time:.3f}s)"
        )
        return result

    @staticmethod
    def get_presets(registry: PresetRegistry = DEFAULT_REGISTRY) -> list[CompositionDefinition]:
        """사용 가능한 구성 프리셋 목록을 반환합니다."""
        return registry.list()

    @staticmethod
    def get_preset(
        composition_id: str, registry: PresetRegistry = DEFAULT_REGISTRY
    ) -> CompositionDefinition:
        """구성 프리셋 하나를 반환합니다.

        Raises:
            UnknownCompositionError: 등록되지 않은 ID인 경우.
        """
        return registry.get(composition_id)

    @staticmethod
    def analyze(password: str) -> PasswordAnalysis:
        """기존 비밀번호의 강도를 분석합니다."""
        return analyze_password(password)
