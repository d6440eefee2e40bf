"""composition_presets: 구성 프리셋 레지스트리 모듈.

프로세스 수명 동안 변경되지 않는 구성 정의 카탈로그를 제공합니다.
테스트에서는 임의의 구성으로 별도 레지스트리를 만들어 주입할 수 있습니다.
"""

from types import MappingProxyType
from typing import Iterable

from models.composition_models import (
    BASIC_SYMBOLS,
    LOWERCASE,
    NUMBERS,
    SYMBOLS,
    UPPERCASE,
    CompositionDefinition,
    CompositionRequirement,
)
from utils.exceptions import UnknownCompositionError


# 문자 클래스 이름
NAME_NUMBERS = "숫자"
NAME_UPPERCASE = "대문자"
NAME_LOWERCASE = "소문자"
NAME_SYMBOLS = "기호"
NAME_CUSTOM_SYMBOLS = "커스텀 기호"


class PresetRegistry:
    """읽기 전용 구성 정의 레지스트리.

    생성 후 내용이 바뀌지 않으므로 여러 스레드에서 잠금 없이 공유할 수 있습니다.
    """

    def __init__(self, definitions: Iterable[CompositionDefinition]):
        presets: dict[str, CompositionDefinition] = {}
        for definition in definitions:
            if definition.id in presets:
                raise ValueError(f"중복된 구성 ID입니다: {definition.id}")
            presets[definition.id] = definition
        self._presets = MappingProxyType(presets)

    def list(self) -> list[CompositionDefinition]:
        """등록 순서대로 모든 구성 정의를 반환합니다."""
        return list(self._presets.values())

    def get(self, composition_id: str) -> CompositionDefinition:
        """구성 ID로 구성 정의를 조회합니다.

        Args:
            composition_id: 구성 ID.

        Returns:
            구성 정의.

        Raises:
            UnknownCompositionError: 등록되지 않은 ID인 경우.
        """
        try:
            return self._presets[composition_id]
        except KeyError:
            raise UnknownCompositionError(composition_id) from None

    def __contains__(self, composition_id: object) -> bool:
        return composition_id in self._presets

    def __len__(self) -> int:
        return len(self._presets)


def _num_upper_lower() -> tuple[CompositionRequirement, ...]:
    return (
        CompositionRequirement.of(NAME_NUMBERS, NUMBERS, 1),
        CompositionRequirement.of(NAME_UPPERCASE, UPPERCASE, 1),
        CompositionRequirement.of(NAME_LOWERCASE, LOWERCASE, 1),
    )


DEFAULT_PRESETS: tuple[CompositionDefinition, ...] = (
    CompositionDefinition(
        id="web-standard",
        label="웹 표준",
        description="웹 서비스에서 흔히 쓰이는 표준 비밀번호",
        requirements=_num_upper_lower(),
    ),
    CompositionDefinition(
        id="num-upper-lower",
        label="숫자·대문자·소문자",
        description="숫자, 대문자, 소문자를 각각 최소 1자 포함",
        requirements=_num_upper_lower(),
    ),
    CompositionDefinition(
        id="high-security",
        label="고보안",
        description="금융기관 수준의 고보안 비밀번호",
        requirements=_num_upper_lower()
        + (CompositionRequirement.of(NAME_SYMBOLS, SYMBOLS, 1),),
    ),
    CompositionDefinition(
        id="enterprise-policy",
        label="기업 정책",
        description="기업 비밀번호 정책 준수",
        requirements=_num_upper_lower()
        + (CompositionRequirement.of(NAME_SYMBOLS, BASIC_SYMBOLS, 1),),
    ),
    CompositionDefinition(
        id="num-upper-lower-symbol",
        label="숫자·대문자·소문자·기호",
        description="숫자, 대문자, 소문자, 기호를 각각 최소 1자 포함",
        requirements=_num_upper_lower()
        + (CompositionRequirement.of(NAME_SYMBOLS, BASIC_SYMBOLS, 1),),
    ),
)

DEFAULT_REGISTRY = PresetRegistry(DEFAULT_PRESETS)
"""프로덕션 구성 프리셋 레지스트리."""
