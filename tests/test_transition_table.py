"""
Tests for TransitionTable.
"""
import random

import numpy as np
import pytest

from textchain.services.transition_table import TransitionTable, narrowest_int


class TestNarrowestInt:
    def test_widths(self):
        assert isinstance(narrowest_int(1), np.int8)
        assert isinstance(narrowest_int(127), np.int8)
        assert isinstance(narrowest_int(128), np.int16)
        assert isinstance(narrowest_int(32767), np.int16)
        assert isinstance(narrowest_int(32768), np.int32)
        assert isinstance(narrowest_int(2 ** 31), int)

    def test_value_preserved(self):
        for n in (-128, 1, 127, 128, 40000, 2 ** 31 + 5):
            assert int(narrowest_int(n)) == n

    def test_small_counts_are_shared(self):
        assert narrowest_int(5) is narrowest_int(5)
        assert narrowest_int(-128) is narrowest_int(-128)
        assert narrowest_int(127) is narrowest_int(127)

    def test_tables_share_count_objects(self):
        first = TransitionTable("a")
        first.add("b")
        second = TransitionTable("x")
        second.add("y")

        assert first.as_map()["a"] is second.as_map()["x"]
        assert first.as_map()["b"] is second.as_map()["y"]


class TestScalarForm:
    def test_size_is_one(self):
        table = TransitionTable("a")

        assert table.size() == 1
        assert not table.is_weighted

    def test_choose_ignores_random_source(self, fixed_random):
        table = TransitionTable("a")

        for index in (0, 3, 99):
            assert table.choose_transition(fixed_random(index)) == "a"

    def test_choose_still_advances_random_source(self, fixed_random):
        table = TransitionTable("a")
        rnd = fixed_random()

        table.choose_transition(rnd)

        assert rnd.calls == [1]

    def test_as_map_does_not_promote(self):
        table = TransitionTable("a")

        assert table.as_map() == {"a": 1}
        assert not table.is_weighted


class TestWeightedForm:
    def test_first_add_promotes(self):
        table = TransitionTable("a")
        table.add("b")

        assert table.is_weighted
        assert table.size() == 2
        assert table.as_map() == {"a": 1, "b": 1}

    def test_adding_same_value_promotes_with_one_entry(self):
        table = TransitionTable("a")
        table.add("a")

        assert table.is_weighted
        assert table.size() == 1
        assert table.as_map() == {"a": 2}

    def test_counts_accumulate(self):
        table = TransitionTable("a")
        for code in ["b", "a", "c", "a"]:
            table.add(code)

        assert table.as_map() == {"a": 3, "b": 1, "c": 1}
        assert table.total() == 5

    def test_counts_widen(self):
        table = TransitionTable("a")
        for _ in range(200):
            table.add("a")

        count = table.as_map()["a"]
        assert isinstance(count, np.int16)
        assert count == 201

    def test_choose_follows_insertion_order(self, fixed_random):
        table = TransitionTable("a")
        table.add("a")
        table.add("b")

        # working list is [a, a, b]
        assert table.choose_transition(fixed_random(0)) == "a"
        assert table.choose_transition(fixed_random(1)) == "a"
        assert table.choose_transition(fixed_random(2)) == "b"

    def test_frequencies_match_counts(self):
        """Counts 2:1 give the first value about 2/3 of the draws."""
        table = TransitionTable("a")
        table.add("a")
        table.add("b")
        rnd = random.Random(12345)
        trials = 100_000

        hits = sum(1 for _ in range(trials) if table.choose_transition(rnd) == "a")

        assert hits / trials == pytest.approx(2 / 3, abs=0.02)
        assert hits < trials


class TestFromCounts:
    def test_single_observation_is_scalar(self):
        table = TransitionTable.from_counts([("a", 1)])

        assert not table.is_weighted
        assert table.as_map() == {"a": 1}

    def test_repeated_single_value_is_weighted(self):
        table = TransitionTable.from_counts([("a", 2)])

        assert table.is_weighted
        assert table.as_map() == {"a": 2}

    def test_order_and_width_preserved(self):
        table = TransitionTable.from_counts([("b", 40000), ("a", 1)])

        assert list(table.as_map()) == ["b", "a"]
        assert isinstance(table.as_map()["b"], np.int32)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            TransitionTable.from_counts([])


def test_repr():
    table = TransitionTable(3)
    assert repr(table) == "TransitionTable(3)"

    table.add(4)
    assert repr(table) == 'TransitionTable({"3": 1, "4": 1})'
