"""Unit tests for the roll combination search."""

from decimal import Decimal
from itertools import combinations_with_replacement

import pytest

from roll_core import (
    POSSIBLE_SUBSTAT_ROLLS,
    InvalidTargetError,
    RoundingMode,
    SearchCancelledError,
    coerce_target,
    find_combinations,
    round_value,
)

ONE = RoundingMode.ONE_DECIMAL
WHOLE = RoundingMode.WHOLE_NUMBER


def _rounded_sum(values, mode) -> Decimal:
    return round_value(sum((Decimal(str(v)) for v in values), Decimal(0)), mode)


def _brute_force(candidates, target, mode, max_rolls=6) -> set:
    """Every multiset whose total hits the target and no ascending prefix does first."""

    goal = round_value(coerce_target(target), mode)
    expected = set()
    for size in range(1, max_rolls + 1):
        for combo in combinations_with_replacement(sorted(candidates), size):
            if _rounded_sum(combo, mode) != goal:
                continue
            if all(_rounded_sum(combo[:k], mode) < goal for k in range(1, size)):
                expected.add(combo)
    return expected


class TestScenarios:
    def test_single_roll_match(self) -> None:
        result = find_combinations([0.8, 1.6, 2.2], 2.2, ONE)
        assert (2.2,) in result

    def test_mixed_rolls(self) -> None:
        result = find_combinations([1.0, 2.0], 3.0, ONE)
        assert sorted(result) == [(1.0, 1.0, 1.0), (1.0, 2.0)]
        assert (2.0, 2.0) not in result

    def test_unreachable_target_is_empty(self) -> None:
        assert find_combinations([5], 12, WHOLE) == []

    def test_discovery_order_is_collapsed(self) -> None:
        result = find_combinations([2.0, 1.0], 3.0, ONE)
        assert result.count((1.0, 2.0)) == 1
        assert (2.0, 1.0) not in result

    def test_crit_damage_pair(self) -> None:
        result = find_combinations(POSSIBLE_SUBSTAT_ROLLS["critDmg"], "14.0", ONE)
        assert (6.22, 7.77) in result
        assert (6.99, 6.99) in result
        assert {len(combo) for combo in result} == {2}

    def test_flat_defence_rounds_to_integer(self) -> None:
        assert find_combinations(POSSIBLE_SUBSTAT_ROLLS["Def"], "21", WHOLE) == [(20.83,)]


class TestRounding:
    def test_target_is_rounded_to_one_decimal(self) -> None:
        assert find_combinations([7.0], 14.04, ONE) == [(7.0, 7.0)]

    def test_whole_number_mode_is_coarser(self) -> None:
        assert find_combinations([0.4], 1, WHOLE) == [(0.4, 0.4)]
        assert find_combinations([0.4], 1, ONE) == []

    def test_half_rounds_away_from_zero(self) -> None:
        assert find_combinations([0.5], 1, WHOLE) == [(0.5,)]
        assert find_combinations([0.25], 0.3, ONE) == [(0.25,)]

    def test_decimal_sums_do_not_drift(self) -> None:
        # 0.1 + 0.2 in binary floating point is 0.30000000000000004
        assert (0.1, 0.2) in find_combinations([0.1, 0.2], 0.3, ONE)


class TestBounds:
    def test_no_combination_longer_than_six(self) -> None:
        assert find_combinations([0.1], 0.6, ONE) == [(0.1,) * 6]
        assert find_combinations([0.1], 0.7, ONE) == []

    def test_custom_max_rolls(self) -> None:
        assert find_combinations([1.0], 3.0, ONE, max_rolls=2) == []
        assert find_combinations([1.0], 2.0, ONE, max_rolls=2) == [(1.0, 1.0)]

    def test_invalid_max_rolls(self) -> None:
        with pytest.raises(ValueError):
            find_combinations([1.0], 2.0, ONE, max_rolls=0)

    @pytest.mark.parametrize("target", ["12.8", "10.9", "15.6", "7.0", "3.9"])
    def test_prefixes_stay_below_target(self, target: str) -> None:
        goal = round_value(Decimal(target), ONE)
        result = find_combinations(POSSIBLE_SUBSTAT_ROLLS["critRate"], target, ONE)
        assert result
        for combo in result:
            assert len(combo) <= 6
            assert list(combo) == sorted(combo)
            assert _rounded_sum(combo, ONE) == goal
            for k in range(1, len(combo)):
                assert _rounded_sum(combo[:k], ONE) < goal


class TestExhaustiveness:
    @pytest.mark.parametrize(
        ("stat", "target", "mode"),
        [
            ("critRate", "12.8", ONE),
            ("critDmg", "21.8", ONE),
            ("Atk%", "16.3", ONE),
            ("EM", "61", WHOLE),
            ("HP", "747", WHOLE),
        ],
    )
    def test_matches_brute_force(self, stat: str, target: str, mode: RoundingMode) -> None:
        candidates = POSSIBLE_SUBSTAT_ROLLS[stat]
        result = find_combinations(candidates, target, mode)
        assert len(result) == len(set(result))
        assert set(result) == _brute_force(candidates, target, mode)

    def test_repeat_calls_agree(self) -> None:
        candidates = POSSIBLE_SUBSTAT_ROLLS["critDmg"]
        first = find_combinations(candidates, "27.2", ONE)
        second = find_combinations(candidates, "27.2", ONE)
        assert set(first) == set(second)


class TestEdgeCases:
    def test_empty_candidates(self) -> None:
        assert find_combinations([], 1.0, ONE) == []

    def test_empty_candidates_zero_target(self) -> None:
        assert find_combinations([], 0, WHOLE) == [()]

    def test_duplicate_candidates_collapse(self) -> None:
        assert find_combinations([1.0, 1, 1.0], 2, WHOLE) == [(1.0, 1.0)]

    def test_keeps_caller_values(self) -> None:
        result = find_combinations(["1.5", "2.5"], 4, ONE)
        assert sorted(result) == [("1.5", "2.5")]

    def test_negative_candidate_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            find_combinations([-1.0, 2.0], 2.0, ONE)

    @pytest.mark.parametrize("target", ["abc", "", None, True, float("nan"), "inf", [1]])
    def test_invalid_target(self, target: object) -> None:
        with pytest.raises(InvalidTargetError):
            find_combinations([1.0], target, ONE)

    def test_numeric_string_with_whitespace(self) -> None:
        assert find_combinations([1.0], " 2.0 ", ONE) == [(1.0, 1.0)]

    @pytest.mark.parametrize("target", ["1e30", 1e27])
    def test_target_too_large_to_round(self, target: object) -> None:
        with pytest.raises(InvalidTargetError):
            find_combinations([1.0], target, ONE)

    def test_huge_candidate_is_pruned(self) -> None:
        assert find_combinations([1e30], 5, WHOLE) == []
        assert find_combinations([5, 1e30], 10, WHOLE) == [(5, 5)]


class TestCancellation:
    def test_stop_immediately(self) -> None:
        with pytest.raises(SearchCancelledError):
            find_combinations([1.0, 2.0], 3.0, ONE, should_stop=lambda: True)

    def test_stop_after_some_nodes(self) -> None:
        calls = []

        def should_stop() -> bool:
            calls.append(None)
            return len(calls) > 3

        with pytest.raises(SearchCancelledError):
            find_combinations([0.1, 0.2, 0.3], 10.0, ONE, should_stop=should_stop)
        assert len(calls) == 4

    def test_never_stopping_hook_is_harmless(self) -> None:
        result = find_combinations([1.0, 2.0], 3.0, ONE, should_stop=lambda: False)
        assert sorted(result) == [(1.0, 1.0, 1.0), (1.0, 2.0)]
