"""secure_random: 암호학적으로 안전한 난수 소스 모듈.

모든 난수 사용을 uniform_index 하나로 좁혀,
테스트에서는 스크립트/시드 기반 소스로 교체할 수 있게 합니다.
"""

import secrets
from typing import MutableSequence, Protocol, TypeVar

from utils.exceptions import RandomSourceUnavailableError

T = TypeVar("T")


class RandomSource(Protocol):
    """균등 분포 인덱스를 제공하는 난수 소스 인터페이스."""

    def uniform_index(self, n: int) -> int:
        """[0, n) 범위의 균등 분포 정수를 반환합니다."""
        ...


class SystemRandomSource:
    """운영체제 엔트로피 소스 기반 난수 소스.

    secrets.randbelow는 필요한 비트 수만큼 뽑은 뒤 범위를 벗어나면
    다시 뽑는 방식(rejection sampling)이므로 모듈로 편향이 없습니다.
    """

    def uniform_index(self, n: int) -> int:
        """[0, n) 범위의 균등 분포 정수를 반환합니다.

        Args:
            n: 범위 상한 (양의 정수).

        Returns:
            0 이상 n 미만의 정수.

        Raises:
            ValueError: n이 양의 정수가 아닌 경우.
            RandomSourceUnavailableError: 엔트로피 소스를 읽을 수 없는 경우.
        """
        if n <= 0:
            raise ValueError(f"n은 양의 정수여야 합니다: {n}")
        try:
            return secrets.randbelow(n)
        except (OSError, NotImplementedError) as e:
            # 비암호학적 난수로 대체하지 않음
            raise RandomSourceUnavailableError(str(e)) from e


def choice(charset: str, rng: RandomSource) -> str:
    """문자열에서 문자 하나를 균등하게 선택합니다."""
    return charset[rng.uniform_index(len(charset))]


def secure_shuffle(items: MutableSequence[T], rng: RandomSource) -> None:
    """Fisher-Yates 알고리즘으로 시퀀스를 제자리에서 섞습니다.

    필수 문자가 앞쪽에 클래스별로 몰려 배치되므로,
    모든 교환 인덱스를 난수 소스에서 뽑아 위치 패턴을 제거합니다.

    Args:
        items: 섞을 시퀀스 (제자리 수정).
        rng: 난수 소스.
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.uniform_index(i + 1)
        items[i], items[j] = items[j], items[i]


default_random_source = SystemRandomSource()
"""프로덕션에서 사용하는 기본 난수 소스."""
