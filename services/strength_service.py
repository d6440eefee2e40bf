"""strength_service: 비밀번호 강도 평가 및 크래킹 시간 추정 모듈.

여기서 계산하는 강도와 엔트로피는 사용자 안내용 참고값이며,
실제 보안 강도를 보장하는 지표가 아닙니다.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Iterable

from models.composition_models import (
    CUSTOM_COMPOSITIONS,
    LOWERCASE,
    NUMBERS,
    SYMBOLS,
    UPPERCASE,
    CrackTimeEstimate,
    ResolvedRequirement,
)
from services.password_allocator import build_fill_charset


STRENGTH_WEAK = "weak"
STRENGTH_MEDIUM = "medium"
STRENGTH_STRONG = "strong"
STRENGTH_VERY_STRONG = "very-strong"

# 공격자는 초당 10억 회 시도, 평균적으로 탐색 공간의 절반에서 성공한다고 가정
GUESSES_PER_SECOND = 10**9
_AVERAGE_CASE_DIVISOR = 2 * GUESSES_PER_SECOND

CRACK_TIME_INCALCULABLE = "incalculable"
CRACK_TIME_INSTANT = "less than a second"
CRACK_TIME_BILLIONS_OF_YEARS = "billions of years"

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_YEAR = 365 * _DAY

# (상한 초, 단위 초, 단위 이름)
_DURATION_BUCKETS = (
    (_MINUTE, 1, "second"),
    (_HOUR, _MINUTE, "minute"),
    (_DAY, _HOUR, "hour"),
    (_YEAR, _DAY, "day"),
    (10**9 * _YEAR, _YEAR, "year"),
)


def strength_from_score(score: int) -> str:
    """점수를 네 단계 강도로 변환합니다."""
    if score >= 8:
        return STRENGTH_VERY_STRONG
    if score >= 6:
        return STRENGTH_STRONG
    if score >= 4:
        return STRENGTH_MEDIUM
    return STRENGTH_WEAK


def calculate_strength(
    length: int,
    requirements: Iterable[ResolvedRequirement],
    composition_id: str,
    exclude_ambiguous: bool = False,
    exclude_similar: bool = False,
) -> str:
    """요청 조건으로 비밀번호 강도를 대략적으로 분류합니다.

    - 길이: 16자 이상 +3, 12자 이상 +2, 8자 이상 +1
    - 최소 횟수가 있는 클래스마다 +1
    - 커스텀 구성(custom-symbols, custom-charsets) +1
    - 제외 옵션 중 하나라도 사용 시 +1

    Returns:
        "weak", "medium", "strong", "very-strong" 중 하나.
    """
    score = 0

    if length >= 16:
        score += 3
    elif length >= 12:
        score += 2
    elif length >= 8:
        score += 1

    score += sum(1 for requirement in requirements if requirement.min_count > 0)

    if composition_id in CUSTOM_COMPOSITIONS:
        score += 1

    if exclude_ambiguous or exclude_similar:
        score += 1

    return strength_from_score(score)


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def _plural(value: int, unit: str) -> str:
    return f"{value:,} {unit}" if value == 1 else f"{value:,} {unit}s"


def format_crack_time(combinations: int) -> str:
    """전체 조합 수를 평균 탐색 시간 표현으로 변환합니다.

    큰 정수를 float로 나누면 오버플로가 나므로 정수 비교로 구간을 찾습니다.
    """
    if combinations < _AVERAGE_CASE_DIVISOR:
        return CRACK_TIME_INSTANT
    for upper, unit, name in _DURATION_BUCKETS:
        if combinations < upper * _AVERAGE_CASE_DIVISOR:
            value = _round_half_up(combinations, unit * _AVERAGE_CASE_DIVISOR)
            return _plural(value, name)
    return CRACK_TIME_BILLIONS_OF_YEARS


def estimate_crack_time(
    length: int, requirements: Iterable[ResolvedRequirement]
) -> CrackTimeEstimate:
    """채우기 풀 크기로 엔트로피와 전수 탐색 시간을 추정합니다.

    Args:
        length: 비밀번호 길이.
        requirements: 적용된 요건 목록.

    Returns:
        CrackTimeEstimate. 풀이 비어 있으면 label이 "incalculable".
    """
    pool_size = len(build_fill_charset(requirements))
    if pool_size == 0:
        return CrackTimeEstimate(
            pool_size=0,
            entropy_bits=0.0,
            seconds=None,
            label=CRACK_TIME_INCALCULABLE,
        )

    combinations = pool_size**length
    try:
        seconds = combinations / _AVERAGE_CASE_DIVISOR
    except OverflowError:
        seconds = math.inf

    return CrackTimeEstimate(
        pool_size=pool_size,
        entropy_bits=math.log2(pool_size) * length,
        seconds=seconds,
        label=format_crack_time(combinations),
    )


# ============ 개별 비밀번호 분석 ============

_KEYBOARD_SEQUENCES = (
    "abcdefghijklmnopqrstuvwxyz",
    "0123456789",
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
)
_REPEATING_PATTERN = re.compile(r"(.)\1{2,}")
_ANALYSIS_CHARSETS = (LOWERCASE, UPPERCASE, NUMBERS, SYMBOLS)
ANALYSIS_MAX_SCORE = 10


@dataclass(frozen=True)
class PasswordAnalysis:
    """비밀번호 하나에 대한 분석 결과."""

    strength: str
    score: int
    length: int
    has_uppercase: bool
    has_lowercase: bool
    has_numbers: bool
    has_symbols: bool
    has_repeating: bool
    has_sequential: bool
    entropy: float
    recommendations: list[str] = field(default_factory=list)
    max_score: int = ANALYSIS_MAX_SCORE

    def to_dict(self) -> dict:
        """API 응답용 딕셔너리로 변환합니다."""
        return {
            "strength": self.strength,
            "score": self.score,
            "maxScore": self.max_score,
            "analysis": {
                "length": self.length,
                "hasUppercase": self.has_uppercase,
                "hasLowercase": self.has_lowercase,
                "hasNumbers": self.has_numbers,
                "hasSymbols": self.has_symbols,
                "hasRepeating": self.has_repeating,
                "hasSequential": self.has_sequential,
                "entropy": round(self.entropy, 2),
            },
            "recommendations": self.recommendations,
        }


def has_sequential(password: str) -> bool:
    """abc, 123, qwe 같은 3자 연속 문자(역순 포함)가 있는지 확인합니다."""
    lowered = password.lower()
    for sequence in _KEYBOARD_SEQUENCES:
        for i in range(len(sequence) - 2):
            run = sequence[i : i + 3]
            if run in lowered or run[::-1] in lowered:
                return True
    return False


def estimate_entropy(password: str) -> float:
    """비밀번호에 나타난 문자 클래스 크기로 엔트로피를 추정합니다."""
    pool_size = sum(
        len(charset)
        for charset in _ANALYSIS_CHARSETS
        if any(char in charset for char in password)
    )
    if pool_size == 0:
        return 0.0
    return math.log2(pool_size) * len(password)


def _recommendations(analysis: dict) -> list[str]:
    recommendations = []
    if analysis["length"] < 12:
        recommendations.append("비밀번호를 12자 이상으로 하는 것을 권장합니다.")
    if not analysis["has_uppercase"]:
        recommendations.append("대문자를 포함하면 강도가 높아집니다.")
    if not analysis["has_lowercase"]:
        recommendations.append("소문자를 포함하면 강도가 높아집니다.")
    if not analysis["has_numbers"]:
        recommendations.append("숫자를 포함하면 강도가 높아집니다.")
    if not analysis["has_symbols"]:
        recommendations.append("기호를 포함하면 강도가 크게 높아집니다.")
    if analysis["has_repeating"]:
        recommendations.append("같은 문자의 반복은 피하는 것을 권장합니다.")
    if analysis["has_sequential"]:
        recommendations.append("연속된 문자(abc, 123 등)는 피하는 것을 권장합니다.")
    if analysis["entropy"] < 50:
        recommendations.append("더 다양한 문자 종류를 사용하는 것을 권장합니다.")
    if not recommendations:
        recommendations.append("충분한 보안 수준의 비밀번호입니다.")
    return recommendations


def analyze_password(password: str) -> PasswordAnalysis:
    """기존 비밀번호의 강도를 분석합니다.

    점수 (최대 10점):
    - 길이 8자/12자/16자 이상 각 +1
    - 대문자, 소문자, 숫자 포함 각 +1, 기호 포함 +2
    - 3회 이상 반복 문자 없음 +1, 3자 연속 문자 없음 +1

    Args:
        password: 분석할 비밀번호.

    Returns:
        PasswordAnalysis.
    """
    analysis = {
        "length": len(password),
        "has_uppercase": any(char.isascii() and char.isupper() for char in password),
        "has_lowercase": any(char.isascii() and char.islower() for char in password),
        "has_numbers": any(char in NUMBERS for char in password),
        "has_symbols": any(not (char.isascii() and char.isalnum()) for char in password),
        "has_repeating": bool(_REPEATING_PATTERN.search(password)),
        "has_sequential": has_sequential(password),
        "entropy": estimate_entropy(password),
    }

    score = 0
    score += sum(1 for threshold in (8, 12, 16) if analysis["length"] >= threshold)
    score += analysis["has_uppercase"] + analysis["has_lowercase"] + analysis["has_numbers"]
    if analysis["has_symbols"]:
        score += 2
    if not analysis["has_repeating"]:
        score += 1
    if not analysis["has_sequential"]:
        score += 1

    return PasswordAnalysis(
        strength=strength_from_score(score),
        score=score,
        recommendations=_recommendations(analysis),
        **analysis,
    )
