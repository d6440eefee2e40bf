"""requirement_verifier: 최종 문자열의 요건 충족 여부를 다시 세는 모듈."""

from typing import Iterable

from models.composition_models import RequirementSummary, ResolvedRequirement


def verify_requirements(
    value: str, requirements: Iterable[ResolvedRequirement]
) -> tuple[RequirementSummary, ...]:
    """클래스별 실제 출현 횟수를 계산합니다.

    배치 단계의 기록을 신뢰하지 않고 최종 문자열에서 직접 셉니다.

    Args:
        value: 섞기가 끝난 비밀번호.
        requirements: 적용된 요건 목록.

    Returns:
        요건 순서대로의 RequirementSummary 튜플.
    """
    return tuple(
        RequirementSummary(
            name=requirement.name,
            charset=requirement.charset,
            required_count=requirement.min_count,
            actual_count=sum(1 for char in value if char in requirement.charset),
        )
        for requirement in requirements
    )
