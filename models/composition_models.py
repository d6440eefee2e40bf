"""composition_models: 비밀번호 구성 관련 데이터 클래스 모듈.

구성 요건, 구성 정의, 생성 요청, 생성 결과를 표현하는 불변 값 객체를 제공합니다.
모든 객체는 요청 단위로 생성되며 요청 간에 공유되지 않습니다.
"""

from dataclasses import dataclass, field


# 기본 문자 클래스
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
NUMBERS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
BASIC_SYMBOLS = "!@#$%^&*"
DEFAULT_CUSTOM_SYMBOLS = "$@_#&?"

# 제외 대상 문자 집합
AMBIGUOUS_CHARS = frozenset("il1Lo0O")
SIMILAR_CHARS = frozenset("il1Lo0O")

# 요청 범위
MIN_LENGTH = 4
MAX_LENGTH = 128
MIN_COUNT = 1
MAX_COUNT = 100

# 특수 구성 ID
COMPOSITION_NONE = "none"
COMPOSITION_OTHER = "other"
COMPOSITION_CUSTOM_SYMBOLS = "custom-symbols"
COMPOSITION_CUSTOM_CHARSETS = "custom-charsets"
CUSTOM_COMPOSITIONS = frozenset({COMPOSITION_CUSTOM_SYMBOLS, COMPOSITION_CUSTOM_CHARSETS})


def charset_to_str(charset: frozenset[str]) -> str:
    """문자 집합을 정렬된 문자열로 변환합니다."""
    return "".join(sorted(charset))


@dataclass(frozen=True)
class CompositionRequirement:
    """문자 클래스 하나에 대한 최소 출현 요건.

    Attributes:
        name: 문자 클래스 이름 (예: "숫자").
        charset: 클래스에 속한 문자 집합.
        min_count: 최소 출현 횟수 (0이면 선택 클래스).
    """

    name: str
    charset: frozenset[str]
    min_count: int = 0

    @classmethod
    def of(cls, name: str, charset: str, min_count: int = 0) -> "CompositionRequirement":
        """문자열 문자 집합으로 요건을 생성합니다."""
        return cls(name=name, charset=frozenset(charset), min_count=min_count)


# 제외 필터링과 중복 제거가 끝난 요건. 구조는 동일하다.
ResolvedRequirement = CompositionRequirement


@dataclass(frozen=True)
class CompositionDefinition:
    """재사용 가능한 이름 있는 구성 정책.

    Attributes:
        id: 구성 ID (예: "high-security").
        label: 표시용 이름.
        description: 설명.
        requirements: 순서가 있는 요건 목록.
    """

    id: str
    label: str
    description: str
    requirements: tuple[CompositionRequirement, ...]


@dataclass(frozen=True)
class CustomCharset:
    """호출자가 직접 정의한 문자 클래스."""

    name: str
    charset: str
    min_count: int = 0
    enabled: bool = True


@dataclass(frozen=True)
class BasicFlags:
    """구성 "none"/"other"에서 사용하는 기본 문자 종류 선택."""

    use_uppercase: bool = True
    use_lowercase: bool = True
    use_numbers: bool = True
    use_symbols: bool = True


@dataclass(frozen=True)
class GenerationRequest:
    """비밀번호 생성 요청.

    Attributes:
        length: 비밀번호 길이 (4~128).
        count: 생성 개수 (1~100).
        composition_id: 프리셋 ID 또는 "none", "other", "custom-symbols", "custom-charsets".
        custom_symbols: "custom-symbols"에서 사용할 기호 집합.
        custom_charsets: "custom-charsets"에서 사용할 문자 클래스 목록.
        exclude_ambiguous: 모호한 문자 제외 여부.
        exclude_similar: 비슷하게 보이는 문자 제외 여부.
        basic_flags: "none"/"other"에서 사용할 문자 종류 (None이면 전부 사용).
    """

    length: int
    count: int = 1
    composition_id: str = COMPOSITION_NONE
    custom_symbols: str | None = None
    custom_charsets: tuple[CustomCharset, ...] = ()
    exclude_ambiguous: bool = False
    exclude_similar: bool = False
    basic_flags: BasicFlags | None = None


@dataclass(frozen=True)
class RequirementSummary:
    """최종 문자열에 대한 요건 충족 여부.

    Attributes:
        name: 문자 클래스 이름.
        charset: 문자 집합.
        required_count: 요구 최소 횟수.
        actual_count: 실제 출현 횟수 (최종 문자열에서 다시 센 값).
    """

    name: str
    charset: frozenset[str]
    required_count: int
    actual_count: int

    @property
    def satisfied(self) -> bool:
        return self.actual_count >= self.required_count

    def to_dict(self) -> dict:
        """API 응답용 딕셔너리로 변환합니다."""
        return {
            "name": self.name,
            "charset": charset_to_str(self.charset),
            "requiredCount": self.required_count,
            "actualCount": self.actual_count,
            "satisfied": self.satisfied,
        }


@dataclass(frozen=True)
class GeneratedPassword:
    """생성된 비밀번호와 요건 검증 결과."""

    value: str
    requirement_summaries: tuple[RequirementSummary, ...]

    @property
    def satisfied(self) -> bool:
        return all(summary.satisfied for summary in self.requirement_summaries)


@dataclass(frozen=True)
class CrackTimeEstimate:
    """전수 탐색 소요 시간 추정값.

    Attributes:
        pool_size: 사용 가능한 문자 수.
        entropy_bits: log2(pool_size) * length.
        seconds: 평균 탐색 시간(초). pool_size가 0이면 None.
        label: 사람이 읽을 수 있는 표현.
    """

    pool_size: int
    entropy_bits: float
    seconds: float | None
    label: str


@dataclass(frozen=True)
class GenerationResult:
    """generate()의 반환값."""

    passwords: tuple[GeneratedPassword, ...]
    strength: str
    crack_time: CrackTimeEstimate
    used_preset: str
    requirements: tuple[ResolvedRequirement, ...] = field(default_factory=tuple)

    @property
    def values(self) -> list[str]:
        return [password.value for password in self.passwords]

    @property
    def estimated_crack_time(self) -> str:
        return self.crack_time.label
