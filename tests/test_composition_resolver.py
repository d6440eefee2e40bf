"""test_composition_resolver: 요건 해석 및 입력 검증 단위 테스트."""

import pytest

from models.composition_models import (
    AMBIGUOUS_CHARS,
    DEFAULT_CUSTOM_SYMBOLS,
    BasicFlags,
    CompositionDefinition,
    CompositionRequirement,
    CustomCharset,
    GenerationRequest,
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
from services.composition_resolver import excluded_chars, resolve_requirements
from utils.exceptions import (
    EmptyCharsetError,
    InvalidCountError,
    InvalidLengthError,
    InvalidRequirementError,
    NoCharacterClassSelectedError,
    RequirementOverflowError,
    UnknownCompositionError,
)


def _names(requirements):
    return [requirement.name for requirement in requirements]


class TestPresetResolution:
    """프리셋 기반 요건 해석 테스트."""

    def test_web_standard_requirements(self):
        requirements = resolve_requirements(
            GenerationRequest(length=8, composition_id="web-standard")
        )

        assert _names(requirements) == [NAME_NUMBERS, NAME_UPPERCASE, NAME_LOWERCASE]
        assert all(requirement.min_count == 1 for requirement in requirements)

    def test_high_security_includes_symbols(self):
        requirements = resolve_requirements(
            GenerationRequest(length=16, composition_id="high-security")
        )

        assert _names(requirements)[-1] == NAME_SYMBOLS
        assert "?" in requirements[-1].charset

    def test_unknown_composition(self):
        with pytest.raises(UnknownCompositionError) as exc_info:
            resolve_requirements(GenerationRequest(length=8, composition_id="no-such-preset"))

        assert exc_info.value.composition_id == "no-such-preset"
        assert exc_info.value.error_code == "unknown_composition"

    def test_injected_registry(self):
        """테스트용 레지스트리를 주입하면 프로덕션 프리셋과 무관하게 동작합니다."""
        registry = PresetRegistry(
            [
                CompositionDefinition(
                    id="hex",
                    label="HEX",
                    description="16진수",
                    requirements=(CompositionRequirement.of("hex", "0123456789abcdef", 2),),
                )
            ]
        )

        requirements = resolve_requirements(
            GenerationRequest(length=6, composition_id="hex"), registry
        )

        assert requirements[0].charset == frozenset("0123456789abcdef")
        with pytest.raises(UnknownCompositionError):
            resolve_requirements(GenerationRequest(length=6, composition_id="web-standard"), registry)


class TestBasicComposition:
    """구성 "none"/"other" 테스트."""

    @pytest.mark.parametrize("composition_id", ["none", "other"])
    def test_all_classes_optional(self, composition_id):
        requirements = resolve_requirements(
            GenerationRequest(length=12, composition_id=composition_id)
        )

        assert _names(requirements) == [
            NAME_UPPERCASE,
            NAME_LOWERCASE,
            NAME_NUMBERS,
            NAME_SYMBOLS,
        ]
        assert all(requirement.min_count == 0 for requirement in requirements)

    def test_flags_select_classes(self):
        requirements = resolve_requirements(
            GenerationRequest(
                length=12,
                basic_flags=BasicFlags(
                    use_uppercase=False, use_lowercase=True, use_numbers=True, use_symbols=False
                ),
            )
        )

        assert _names(requirements) == [NAME_LOWERCASE, NAME_NUMBERS]

    def test_no_flags_selected(self):
        flags = BasicFlags(
            use_uppercase=False, use_lowercase=False, use_numbers=False, use_symbols=False
        )

        with pytest.raises(NoCharacterClassSelectedError):
            resolve_requirements(GenerationRequest(length=12, basic_flags=flags))


class TestCustomCompositions:
    """커스텀 구성 테스트."""

    def test_custom_symbols(self):
        requirements = resolve_requirements(
            GenerationRequest(length=8, composition_id="custom-symbols", custom_symbols="~+")
        )

        assert _names(requirements)[-1] == NAME_CUSTOM_SYMBOLS
        assert requirements[-1].charset == frozenset("~+")
        assert requirements[-1].min_count == 1

    @pytest.mark.parametrize("symbols", [None, "", "   "])
    def test_custom_symbols_default(self, symbols):
        requirements = resolve_requirements(
            GenerationRequest(length=8, composition_id="custom-symbols", custom_symbols=symbols)
        )

        assert requirements[-1].charset == frozenset(DEFAULT_CUSTOM_SYMBOLS)

    def test_custom_charsets_enabled_only(self):
        requirements = resolve_requirements(
            GenerationRequest(
                length=8,
                composition_id="custom-charsets",
                custom_charsets=(
                    CustomCharset(name="모음", charset="aeiou", min_count=2),
                    CustomCharset(name="비활성", charset="xyz", min_count=1, enabled=False),
                ),
            )
        )

        assert _names(requirements) == ["모음"]
        assert requirements[0].min_count == 2

    def test_empty_custom_charsets(self):
        """빈 커스텀 문자 클래스 목록은 선택된 클래스 없음 오류입니다."""
        with pytest.raises(NoCharacterClassSelectedError):
            resolve_requirements(
                GenerationRequest(length=4, composition_id="custom-charsets", custom_charsets=())
            )

    def test_duplicate_names_kept_separate(self):
        """같은 이름의 클래스도 각자의 최소 횟수를 가진 별도 요건으로 유지됩니다."""
        requirements = resolve_requirements(
            GenerationRequest(
                length=8,
                composition_id="custom-charsets",
                custom_charsets=(
                    CustomCharset(name="x", charset="abc", min_count=1),
                    CustomCharset(name="x", charset="XYZ", min_count=1),
                ),
            )
        )

        assert len(requirements) == 2
        assert [requirement.charset for requirement in requirements] == [
            frozenset("abc"),
            frozenset("XYZ"),
        ]
        assert sum(requirement.min_count for requirement in requirements) == 2

    def test_duplicate_characters_collapse(self):
        requirements = resolve_requirements(
            GenerationRequest(
                length=8,
                composition_id="custom-charsets",
                custom_charsets=(CustomCharset(name="a", charset="aaab", min_count=1),),
            )
        )

        assert requirements[0].charset == frozenset("ab")


class TestExclusion:
    """모호한/비슷한 문자 제외 테스트."""

    def test_excluded_chars(self):
        assert excluded_chars(False, False) == frozenset()
        assert excluded_chars(True, False) == AMBIGUOUS_CHARS
        assert excluded_chars(True, True) >= frozenset("il1Lo0O")

    def test_exclusion_applied_to_every_class(self):
        requirements = resolve_requirements(
            GenerationRequest(
                length=16,
                composition_id="high-security",
                exclude_ambiguous=True,
                exclude_similar=True,
            )
        )

        for requirement in requirements:
            assert not requirement.charset & frozenset("il1Lo0O")

    def test_required_class_emptied_by_exclusion(self):
        with pytest.raises(EmptyCharsetError) as exc_info:
            resolve_requirements(
                GenerationRequest(
                    length=8,
                    composition_id="custom-charsets",
                    exclude_ambiguous=True,
                    custom_charsets=(CustomCharset(name="혼동", charset="0O1l", min_count=1),),
                )
            )

        assert exc_info.value.requirement_name == "혼동"

    def test_optional_class_emptied_by_exclusion_is_dropped(self):
        requirements = resolve_requirements(
            GenerationRequest(
                length=8,
                composition_id="custom-charsets",
                exclude_similar=True,
                custom_charsets=(
                    CustomCharset(name="혼동", charset="0O", min_count=0),
                    CustomCharset(name="문자", charset="abc", min_count=1),
                ),
            )
        )

        assert _names(requirements) == ["문자"]


class TestValidation:
    """길이/개수/요건 합계 검증 테스트."""

    @pytest.mark.parametrize("length", [-1, 0, 3, 129, 1000])
    def test_invalid_length(self, length):
        with pytest.raises(InvalidLengthError):
            resolve_requirements(GenerationRequest(length=length))

    @pytest.mark.parametrize("length", [4, 128])
    def test_length_bounds_inclusive(self, length):
        assert resolve_requirements(GenerationRequest(length=length))

    @pytest.mark.parametrize("count", [0, -5, 101])
    def test_invalid_count(self, count):
        with pytest.raises(InvalidCountError):
            resolve_requirements(GenerationRequest(length=8, count=count))

    def test_requirement_overflow(self):
        """4개 클래스를 요구하는 프리셋에 길이 3을 지정하면 요건 합계 초과입니다."""
        with pytest.raises(RequirementOverflowError) as exc_info:
            resolve_requirements(GenerationRequest(length=3, composition_id="high-security"))

        assert exc_info.value.required == 4
        assert exc_info.value.length == 3

    def test_negative_min_count_rejected(self):
        """음수 최소 횟수로 요건 합계 검증을 우회할 수 없습니다."""
        with pytest.raises(InvalidRequirementError) as exc_info:
            resolve_requirements(
                GenerationRequest(
                    length=4,
                    composition_id="custom-charsets",
                    custom_charsets=(
                        CustomCharset(name="a", charset="abc", min_count=5),
                        CustomCharset(name="b", charset="xyz", min_count=-5),
                    ),
                )
            )

        assert exc_info.value.requirement_name == "b"
        assert exc_info.value.error_code == "invalid_requirement"
        assert exc_info.value.status_code == 400

    def test_negative_min_count_on_disabled_class_ignored(self):
        requirements = resolve_requirements(
            GenerationRequest(
                length=4,
                composition_id="custom-charsets",
                custom_charsets=(
                    CustomCharset(name="a", charset="abc", min_count=1),
                    CustomCharset(name="b", charset="xyz", min_count=-5, enabled=False),
                ),
            )
        )

        assert [requirement.name for requirement in requirements] == ["a"]

    def test_requirement_overflow_within_length_range(self):
        with pytest.raises(RequirementOverflowError):
            resolve_requirements(
                GenerationRequest(
                    length=5,
                    composition_id="custom-charsets",
                    custom_charsets=(
                        CustomCharset(name="a", charset="abc", min_count=3),
                        CustomCharset(name="b", charset="xyz", min_count=3),
                    ),
                )
            )

    def test_requirements_equal_to_length_allowed(self):
        requirements = resolve_requirements(
            GenerationRequest(length=4, composition_id="high-security")
        )

        assert sum(requirement.min_count for requirement in requirements) == 4

    def test_registry_unchanged_after_resolution(self):
        before = DEFAULT_REGISTRY.get("high-security")
        resolve_requirements(
            GenerationRequest(length=16, composition_id="high-security", exclude_ambiguous=True)
        )

        assert DEFAULT_REGISTRY.get("high-security") == before
        assert "1" in before.requirements[0].charset


class TestPresetRegistry:
    """PresetRegistry 테스트."""

    def test_default_presets_order(self):
        assert [preset.id for preset in DEFAULT_REGISTRY.list()] == [
            "web-standard",
            "num-upper-lower",
            "high-security",
            "enterprise-policy",
            "num-upper-lower-symbol",
        ]

    def test_contains_and_len(self):
        assert "high-security" in DEFAULT_REGISTRY
        assert "none" not in DEFAULT_REGISTRY
        assert len(DEFAULT_REGISTRY) == 5

    def test_duplicate_ids_rejected(self):
        definition = DEFAULT_REGISTRY.get("web-standard")

        with pytest.raises(ValueError):
            PresetRegistry([definition, definition])
