"""composition_resolver: 생성 요청을 실제 적용할 요건 목록으로 변환하는 모듈.

모든 입력 검증은 여기서 끝나며, 이후 단계는 난수를 뽑기 전에
검증된 요건만 받는다는 전제로 동작합니다.
"""

from models.composition_models import (
    AMBIGUOUS_CHARS,
    COMPOSITION_CUSTOM_CHARSETS,
    COMPOSITION_CUSTOM_SYMBOLS,
    COMPOSITION_NONE,
    COMPOSITION_OTHER,
    DEFAULT_CUSTOM_SYMBOLS,
    LOWERCASE,
    MAX_COUNT,
    MAX_LENGTH,
    MIN_COUNT,
    MIN_LENGTH,
    NUMBERS,
    SIMILAR_CHARS,
    SYMBOLS,
    UPPERCASE,
    BasicFlags,
    CompositionRequirement,
    GenerationRequest,
    ResolvedRequirement,
)
from models.composition_presets import (
    DEFAULT_REGISTRY,
    NAME_CUSTOM_SYMBOLS,
    NAME_LOWERCASE,
    NAME_NUMBERS,
    NAME_SYMBOLS,
    NAME_UPPERCASE,
    PresetRegistry,
)
from utils.exceptions import (
    EmptyCharsetError,
    InvalidCountError,
    InvalidLengthError,
    InvalidRequirementError,
    NoCharacterClassSelectedError,
    RequirementOverflowError,
)


def validate_length(length: int) -> None:
    """비밀번호 길이 범위를 검증합니다.

    Raises:
        InvalidLengthError: 길이가 4~128 범위를 벗어난 경우.
    """
    if not MIN_LENGTH <= length <= MAX_LENGTH:
        raise InvalidLengthError(length, MIN_LENGTH, MAX_LENGTH)


def validate_count(count: int) -> None:
    """생성 개수 범위를 검증합니다.

    Raises:
        InvalidCountError: 개수가 1~100 범위를 벗어난 경우.
    """
    if not MIN_COUNT <= count <= MAX_COUNT:
        raise InvalidCountError(count, MIN_COUNT, MAX_COUNT)


def _basic_requirements(flags: BasicFlags | None) -> list[CompositionRequirement]:
    # 선택 클래스: 최소 횟수 없이 채우기용 문자만 제공
    flags = flags or BasicFlags()
    requirements = []
    if flags.use_uppercase:
        requirements.append(CompositionRequirement.of(NAME_UPPERCASE, UPPERCASE))
    if flags.use_lowercase:
        requirements.append(CompositionRequirement.of(NAME_LOWERCASE, LOWERCASE))
    if flags.use_numbers:
        requirements.append(CompositionRequirement.of(NAME_NUMBERS, NUMBERS))
    if flags.use_symbols:
        requirements.append(CompositionRequirement.of(NAME_SYMBOLS, SYMBOLS))
    return requirements


def _custom_symbol_requirements(symbols: str | None) -> list[CompositionRequirement]:
    if not symbols or not symbols.strip():
        symbols = DEFAULT_CUSTOM_SYMBOLS
    return [
        CompositionRequirement.of(NAME_NUMBERS, NUMBERS, 1),
        CompositionRequirement.of(NAME_UPPERCASE, UPPERCASE, 1),
        CompositionRequirement.of(NAME_LOWERCASE, LOWERCASE, 1),
        CompositionRequirement.of(NAME_CUSTOM_SYMBOLS, symbols, 1),
    ]


def _custom_charset_requirements(request: GenerationRequest) -> list[CompositionRequirement]:
    return [
        CompositionRequirement.of(custom.name, custom.charset, custom.min_count)
        for custom in request.custom_charsets
        if custom.enabled
    ]


def assemble_requirements(
    request: GenerationRequest, registry: PresetRegistry = DEFAULT_REGISTRY
) -> list[CompositionRequirement]:
    """구성 ID에 따라 필터링 전 요건 목록을 조립합니다.

    Raises:
        UnknownCompositionError: 등록되지 않은 프리셋 ID인 경우.
    """
    composition_id = request.composition_id
    if composition_id in (COMPOSITION_NONE, COMPOSITION_OTHER):
        return _basic_requirements(request.basic_flags)
    if composition_id == COMPOSITION_CUSTOM_SYMBOLS:
        return _custom_symbol_requirements(request.custom_symbols)
    if composition_id == COMPOSITION_CUSTOM_CHARSETS:
        return _custom_charset_requirements(request)
    return list(registry.get(composition_id).requirements)


def excluded_chars(exclude_ambiguous: bool, exclude_similar: bool) -> frozenset[str]:
    """제외 플래그에 해당하는 문자 집합을 반환합니다."""
    excluded: frozenset[str] = frozenset()
    if exclude_ambiguous:
        excluded |= AMBIGUOUS_CHARS
    if exclude_similar:
        excluded |= SIMILAR_CHARS
    return excluded


def resolve_requirements(
    request: GenerationRequest, registry: PresetRegistry = DEFAULT_REGISTRY
) -> tuple[ResolvedRequirement, ...]:
    """요청에 적용할 최종 요건 목록을 계산합니다.

    처리 순서:
    1. 생성 개수 범위 검증
    2. 구성 ID에 따른 요건 조립
    3. 음수 최소 횟수 검증
    4. 모호한/비슷한 문자 제외 필터링 (같은 이름의 클래스도 각각 별도 요건으로 유지)
    5. 빈 필수 문자 집합 검증
    6. 최소 횟수 합계 초과 검증 (길이 범위 검증보다 먼저 수행하여
       길이 3에 4개 클래스를 요구하는 요청은 RequirementOverflowError가 됨)
    7. 길이 범위 검증, 사용 가능 문자 없음 검증

    Args:
        request: 생성 요청.
        registry: 프리셋 레지스트리.

    Returns:
        순서가 보존된 요건 튜플.

    Raises:
        InvalidLengthError, InvalidCountError, UnknownCompositionError,
        InvalidRequirementError, EmptyCharsetError, RequirementOverflowError,
        NoCharacterClassSelectedError.
    """
    validate_count(request.count)

    assembled = assemble_requirements(request, registry)
    for requirement in assembled:
        if requirement.min_count < 0:
            raise InvalidRequirementError(requirement.name, requirement.min_count)

    excluded = excluded_chars(request.exclude_ambiguous, request.exclude_similar)
    filtered = [
        CompositionRequirement(
            name=requirement.name,
            charset=requirement.charset - excluded,
            min_count=requirement.min_count,
        )
        for requirement in assembled
    ]

    resolved = []
    for requirement in filtered:
        if requirement.charset:
            resolved.append(requirement)
        elif requirement.min_count > 0:
            raise EmptyCharsetError(requirement.name)
        # 비어 있는 선택 클래스는 기여하는 문자가 없으므로 생략

    required = sum(requirement.min_count for requirement in resolved)
    if 0 < request.length < required:
        raise RequirementOverflowError(required, request.length)

    validate_length(request.length)

    if not resolved:
        raise NoCharacterClassSelectedError()

    return tuple(resolved)
