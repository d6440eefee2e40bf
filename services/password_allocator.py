"""password_allocator: 요건을 만족하는 문자 배치 모듈.

필수 최소 횟수를 먼저 배치한 뒤 남은 길이를 전체 문자 풀에서 채우는
2단계 방식으로, 문자열 전체를 다시 뽑는 거부 샘플링 없이 요건을 만족시킵니다.
"""

from typing import Iterable

from models.composition_models import ResolvedRequirement
from utils.exceptions import NoCharacterClassSelectedError
from utils.secure_random import RandomSource, choice


def build_fill_charset(requirements: Iterable[ResolvedRequirement]) -> str:
    """모든 요건 문자 집합의 합집합을 정렬된 문자열로 반환합니다.

    최소 횟수가 0인 선택 클래스도 채우기 풀에 포함됩니다.
    정렬해 두면 스크립트 난수 소스로 결과를 재현할 수 있습니다.
    """
    pool: set[str] = set()
    for requirement in requirements:
        pool |= requirement.charset
    return "".join(sorted(pool))


def allocate(
    length: int,
    requirements: Iterable[ResolvedRequirement],
    rng: RandomSource,
) -> list[str]:
    """섞기 전의 문자 목록을 정확히 length개 만듭니다.

    1. 요건 순서대로 각 클래스에서 min_count개를 복원 추출합니다.
    2. 남은 길이를 채우기 풀(모든 클래스의 합집합)에서 뽑습니다.

    Args:
        length: 목표 길이.
        requirements: 검증이 끝난 요건 목록.
        rng: 난수 소스.

    Returns:
        길이가 length인 문자 목록. 클래스별로 뭉쳐 있으므로 반드시 섞어야 합니다.

    Raises:
        NoCharacterClassSelectedError: 채울 문자가 남았는데 풀이 비어 있는 경우.
    """
    requirements = tuple(requirements)
    buffer: list[str] = []

    for requirement in requirements:
        if requirement.min_count <= 0:
            continue
        charset = "".join(sorted(requirement.charset))
        buffer.extend(choice(charset, rng) for _ in range(requirement.min_count))

    remaining = length - len(buffer)
    if remaining <= 0:
        return buffer

    fill_charset = build_fill_charset(requirements)
    if not fill_charset:
        raise NoCharacterClassSelectedError()

    buffer.extend(choice(fill_charset, rng) for _ in range(remaining))
    return buffer
