import pytest

from tsp_ea.errors import DataConsistencyError
from tsp_ea.operators import (
    fix_crossover,
    inversion,
    invert,
    multiple_swap,
    ordered_child,
    ordered_crossover,
    repair,
    single_swap,
)

from conftest import assert_permutation


class ScriptedRandom:
    """Returns queued values in place of randint/randrange/sample draws."""

    def __init__(self, *values):
        self.values = list(values)

    def _next(self):
        return self.values.pop(0)

    def randint(self, a, b):
        return self._next()

    def randrange(self, *args):
        return self._next()

    def sample(self, population, k):
        return self._next()


def test_repair_fixed_scenario():
    # p1 [2, 1, 0, 3] and p2 [0, 2, 3, 1] crossed at point 3.
    assert repair([2, 1, 0, 1]) == [2, 3, 0, 1]


def test_repair_resolves_left_to_right_with_ascending_missing():
    assert repair([3, 1, 2, 1, 3, 0]) == [4, 5, 2, 1, 3, 0]


def test_repair_leaves_permutation_untouched():
    assert repair([1, 0, 3, 2]) == [1, 0, 3, 2]


def test_repair_rejects_unrepairable_child():
    with pytest.raises(DataConsistencyError):
        repair([0, 0, 0, 1])


def test_fix_crossover_children():
    first, second = fix_crossover([2, 1, 0, 3], [0, 2, 3, 1], ScriptedRandom(3))
    assert first == [2, 3, 0, 1]
    assert second == [0, 2, 1, 3]


def test_fix_crossover_random_children_are_permutations(rng):
    for _ in range(100):
        a = list(range(9))
        b = list(range(9))
        rng.shuffle(a)
        rng.shuffle(b)
        for child in fix_crossover(a, b, rng):
            assert_permutation(child, 9)


def test_ordered_child_keeps_segments_and_second_parent_order():
    first = [0, 1, 2, 3, 4, 5, 6, 7]
    second = [7, 6, 5, 4, 3, 2, 1, 0]
    assert ordered_child(first, second, [1, 2, 5, 6]) == [7, 1, 2, 4, 3, 5, 6, 0]


def test_ordered_child_missing_city_raises():
    with pytest.raises(DataConsistencyError):
        ordered_child([0, 1, 2, 3, 4], [0, 1, 2, 3, 3], [0, 0, 1, 1])


def test_ordered_crossover_uses_same_points_for_both_children():
    first = [0, 1, 2, 3, 4, 5]
    second = [5, 3, 1, 4, 0, 2]
    a, b = ordered_crossover(first, second, ScriptedRandom([4, 0, 1, 3]))
    assert a[0:2] == [0, 1] and a[3:5] == [3, 4]
    assert b[0:2] == [5, 3] and b[3:5] == [4, 0]
    assert_permutation(a, 6)
    assert_permutation(b, 6)


def test_inversion_reverses_outer_parts():
    assert inversion([0, 1, 2, 3, 4, 5], 2, 4) == [5, 4, 2, 3, 1, 0]


def test_inversion_full_length_cut():
    assert inversion([0, 1, 2, 3], 1, 4) == [0, 1, 2, 3]


def test_inversion_rejects_bad_cuts():
    with pytest.raises(ValueError):
        inversion([0, 1, 2], 2, 2)


def test_invert_resamples_equal_index():
    route = [0, 1, 2, 3, 4, 5]
    # Second draw repeats the first and is resampled.
    assert invert(route, ScriptedRandom(4, 4, 2)) == inversion(route, 2, 4)


def test_single_swap_resamples_equal_index():
    assert single_swap([0, 1, 2, 3], ScriptedRandom(1, 1, 3)) == [0, 3, 2, 1]


def test_multiple_swap_swaps_two_pairs():
    assert multiple_swap([0, 1, 2, 3, 4], ScriptedRandom([0, 4, 1, 2])) == [4, 2, 1, 3, 0]
