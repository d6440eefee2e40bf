"""password_schemas: 비밀번호 생성 관련 Pydantic 모델 모듈.

JSON 본문은 프론트엔드와 동일한 camelCase 키를 사용하며, snake_case 키도 허용합니다.
길이/개수 범위는 엔진에서 검증하여 400 에러로 응답하므로 여기서는 타입만 확인합니다.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.composition_models import (
    COMPOSITION_NONE,
    BasicFlags,
    CustomCharset,
    GenerationRequest,
)


class CustomCharsetRequest(BaseModel):
    """사용자 정의 문자 클래스 모델.

    Attributes:
        name: 문자 클래스 이름.
        charset: 문자 집합 (중복 문자는 무시됨).
        min_count: 최소 출현 횟수.
        enabled: 사용 여부.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=50)
    charset: str = Field("", max_length=256)
    min_count: int = Field(0, ge=0, le=128, alias="min")
    enabled: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("문자 클래스 이름은 비어 있을 수 없습니다.")
        return v


class CompositionPasswordRequest(BaseModel):
    """구성 프리셋 기반 비밀번호 생성 요청 모델.

    Attributes:
        length: 비밀번호 길이 (4~128, 엔진에서 검증).
        count: 생성 개수 (1~100, 엔진에서 검증).
        composition: 프리셋 ID 또는 "none", "other", "custom-symbols", "custom-charsets".
        custom_symbols: "custom-symbols" 구성에서 사용할 기호.
        custom_charsets: "custom-charsets" 구성에서 사용할 문자 클래스 목록.
        exclude_ambiguous: 모호한 문자(il1Lo0O) 제외 여부.
        exclude_similar: 비슷하게 보이는 문자 제외 여부.
        use_uppercase, use_lowercase, use_numbers, use_symbols:
            "none"/"other" 구성에서 사용할 문자 종류.
    """

    model_config = ConfigDict(populate_by_name=True)

    length: int
    count: int = 1
    composition: str = Field(COMPOSITION_NONE, min_length=1, max_length=50)
    custom_symbols: str | None = Field(None, max_length=64, alias="customSymbols")
    custom_charsets: list[CustomCharsetRequest] = Field(
        default_factory=list, max_length=20, alias="customCharsets"
    )
    exclude_ambiguous: bool = Field(False, alias="excludeAmbiguous")
    exclude_similar: bool = Field(False, alias="excludeSimilar")
    use_uppercase: bool = Field(True, alias="useUppercase")
    use_lowercase: bool = Field(True, alias="useLowercase")
    use_numbers: bool = Field(True, alias="useNumbers")
    use_symbols: bool = Field(True, alias="useSymbols")

    def to_generation_request(self) -> GenerationRequest:
        """엔진 입력용 불변 요청 객체로 변환합니다."""
        return GenerationRequest(
            length=self.length,
            count=self.count,
            composition_id=self.composition,
            custom_symbols=self.custom_symbols,
            custom_charsets=tuple(
                CustomCharset(
                    name=custom.name,
                    charset=custom.charset,
                    min_count=custom.min_count,
                    enabled=custom.enabled,
                )
                for custom in self.custom_charsets
            ),
            exclude_ambiguous=self.exclude_ambiguous,
            exclude_similar=self.exclude_similar,
            basic_flags=BasicFlags(
                use_uppercase=self.use_uppercase,
                use_lowercase=self.use_lowercase,
                use_numbers=self.use_numbers,
                use_symbols=self.use_symbols,
            ),
        )


class BasicPasswordRequest(BaseModel):
    """문자 종류 선택 기반 비밀번호 생성 요청 모델 (구성 "none")."""

    model_config = ConfigDict(populate_by_name=True)

    length: int
    count: int = 1
    use_uppercase: bool = Field(True, alias="useUppercase")
    use_lowercase: bool = Field(True, alias="useLowercase")
    use_numbers: bool = Field(True, alias="useNumbers")
    use_symbols: bool = Field(True, alias="useSymbols")
    exclude_ambiguous: bool = Field(False, alias="excludeAmbiguous")
    exclude_similar: bool = Field(False, alias="excludeSimilar")

    def to_generation_request(self) -> GenerationRequest:
        """엔진 입력용 불변 요청 객체로 변환합니다."""
        return GenerationRequest(
            length=self.length,
            count=self.count,
            composition_id=COMPOSITION_NONE,
            exclude_ambiguous=self.exclude_ambiguous,
            exclude_similar=self.exclude_similar,
            basic_flags=BasicFlags(
                use_uppercase=self.use_uppercase,
                use_lowercase=self.use_lowercase,
                use_numbers=self.use_numbers,
                use_symbols=self.use_symbols,
            ),
        )


class AnalyzePasswordRequest(BaseModel):
    """비밀번호 강도 분석 요청 모델."""

    password: str = Field(..., min_length=1, max_length=256)
