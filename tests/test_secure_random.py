"""test_secure_random: 난수 소스 및 섞기 단위 테스트."""

from collections import Counter
from unittest.mock import patch

import pytest

from utils.exceptions import RandomSourceUnavailableError
from utils.secure_random import (
    SystemRandomSource,
    choice,
    default_random_source,
    secure_shuffle,
)

# 자유도 61, 유의수준 약 0.01의 카이제곱 임계값
CHI_SQUARED_CRITICAL_DF61 = 90.8


class TestSystemRandomSource:
    def test_range(self):
        rng = SystemRandomSource()

        values = {rng.uniform_index(5) for _ in range(500)}

        assert values <= {0, 1, 2, 3, 4}
        assert len(values) == 5

    def test_single_value_range(self):
        assert SystemRandomSource().uniform_index(1) == 0

    @pytest.mark.parametrize("n", [0, -1])
    def test_invalid_upper_bound(self, n):
        with pytest.raises(ValueError):
            SystemRandomSource().uniform_index(n)

    def test_uniform_distribution(self):
        """62개 문자에 대한 분포가 카이제곱 검정을 통과해야 합니다."""
        n = 62
        draws = 62_000
        counts = Counter(default_random_source.uniform_index(n) for _ in range(draws))

        expected = draws / n
        chi_squared = sum((counts.get(i, 0) - expected) ** 2 / expected for i in range(n))

        # 임계값의 1.5배를 허용하여 정상 구현의 우연한 실패를 피한다
        assert chi_squared < CHI_SQUARED_CRITICAL_DF61 * 1.5

    @pytest.mark.parametrize("error", [OSError("entropy pool"), NotImplementedError()])
    def test_entropy_failure(self, error):
        with patch("utils.secure_random.secrets.randbelow", side_effect=error):
            with pytest.raises(RandomSourceUnavailableError) as exc_info:
                SystemRandomSource().uniform_index(10)

        assert exc_info.value.status_code == 503
        assert exc_info.value.error_code == "random_source_unavailable"


class TestChoice:
    def test_uses_index(self, scripted_rng):
        rng = scripted_rng([2])

        assert choice("abc", rng) == "c"
        assert rng.calls == [3]


class TestSecureShuffle:
    def test_fisher_yates_indices(self, scripted_rng):
        rng = scripted_rng([0, 0, 0])
        items = ["a", "b", "c", "d"]

        secure_shuffle(items, rng)

        assert rng.calls == [4, 3, 2]
        # i=3↔0, i=2↔0, i=1↔0
        assert items == ["b", "c", "d", "a"]

    def test_identity_when_index_equals_position(self, scripted_rng):
        rng = scripted_rng([3, 2, 1])
        items = ["a", "b", "c", "d"]

        secure_shuffle(items, rng)

        assert items == ["a", "b", "c", "d"]

    @pytest.mark.parametrize("items", [[], ["a"]])
    def test_short_sequences(self, items, scripted_rng):
        rng = scripted_rng()

        secure_shuffle(items, rng)

        assert rng.calls == []

    def test_preserves_multiset(self):
        items = list("aabbccddee")

        secure_shuffle(items, default_random_source)

        assert sorted(items) == list("aabbccddee")

    def test_first_position_not_fixed(self):
        """필수 문자가 항상 같은 위치에 남지 않아야 합니다."""
        first_chars = set()
        for _ in range(200):
            items = list("ABCDEFGH")
            secure_shuffle(items, default_random_source)
            first_chars.add(items[0])

        assert len(first_chars) > 1
