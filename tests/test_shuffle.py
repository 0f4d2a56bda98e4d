"""Tests for numgrid.core.shuffle – Fisher–Yates permutations."""

from __future__ import annotations

import random

from numgrid.core.shuffle import fisher_yates, shuffled_range


class TestFisherYates:
    def test_returns_same_list_object(self):
        items = [1, 2, 3]
        assert fisher_yates(items, random.Random(0)) is items

    def test_output_is_permutation(self):
        for seed in range(200):
            items = list(range(1, 31))
            fisher_yates(items, random.Random(seed))
            assert sorted(items) == list(range(1, 31))

    def test_keeps_duplicates(self):
        items = [4, 4, 7, 1, 1, 1]
        fisher_yates(items, random.Random(3))
        assert sorted(items) == [1, 1, 1, 4, 4, 7]

    def test_empty_and_single(self):
        assert fisher_yates([], random.Random(1)) == []
        assert fisher_yates([9], random.Random(1)) == [9]

    def test_same_seed_same_order(self):
        a = fisher_yates(list(range(20)), random.Random(42))
        b = fisher_yates(list(range(20)), random.Random(42))
        assert a == b

    def test_actually_shuffles(self):
        orders = {tuple(fisher_yates(list(range(10)), random.Random(seed))) for seed in range(20)}
        assert len(orders) > 1

    def test_every_element_reaches_first_slot(self):
        firsts = {fisher_yates([0, 1, 2, 3], random.Random(seed))[0] for seed in range(200)}
        assert firsts == {0, 1, 2, 3}


class TestShuffledRange:
    def test_contains_one_to_size(self):
        assert sorted(shuffled_range(25, random.Random(7))) == list(range(1, 26))

    def test_size_one(self):
        assert shuffled_range(1) == [1]
