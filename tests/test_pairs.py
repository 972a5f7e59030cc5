"""
Tests for src/solvers/pairs.py — pair and tiger-pair closed forms.

The closed forms are cross-validated against scipy's hypergeometric
distribution and against brute-force enumeration of small shoes.
"""

from __future__ import annotations

import itertools

import pytest
from scipy import stats

from src.engine.shoe import create_shoe
from src.solvers.pairs import (
    MIN_CARDS_TIGER_PAIR,
    TigerPairProbabilities,
    pair_probability,
    tiger_pair_probabilities,
)
from tests.conftest import shoe


def _cards(counts) -> list[int]:
    """Expand rank counts into one entry per physical card (its rank index)."""
    return [r for r, c in enumerate(counts.tolist()) for _ in range(c)]


def _brute_force_tiger_pair(counts) -> tuple[float, float, float]:
    cards = _cards(counts)
    same = dual = single = 0
    n = 0
    for p1, p2, b1, b2 in itertools.permutations(range(len(cards)), 4):
        n += 1
        player_pair = cards[p1] == cards[p2]
        banker_pair = cards[b1] == cards[b2]
        if player_pair and banker_pair:
            if cards[p1] == cards[b1]:
                same += 1
            else:
                dual += 1
        elif player_pair or banker_pair:
            single += 1
    return same / n, dual / n, single / n


class TestPairProbability:
    def test_single_rank_two_cards_is_certain(self):
        assert pair_probability(shoe(Q=2)) == pytest.approx(1.0)

    def test_all_distinct_is_zero(self):
        assert pair_probability(shoe(A=1, K=1, **{'5': 1})) == 0.0

    @pytest.mark.parametrize("total", [0, 1])
    def test_below_two_cards_is_zero(self, total):
        assert pair_probability(shoe(A=total)) == 0.0

    def test_full_shoe(self):
        # 13 * 32 * 31 / (416 * 415)
        assert pair_probability(create_shoe()) == pytest.approx(13 * 32 * 31 / (416 * 415))

    def test_matches_hypergeometric(self):
        counts = shoe(A=5, **{'2': 3, '7': 9}, T=1, K=4)
        total = int(counts.sum())
        expected = sum(stats.hypergeom(total, int(c), 2).pmf(2) for c in counts)
        assert pair_probability(counts) == pytest.approx(expected, rel=1e-12)


class TestTigerPairProbabilities:
    def test_below_four_cards_is_zero(self):
        probs = tiger_pair_probabilities(shoe(A=MIN_CARDS_TIGER_PAIR - 1))
        assert probs == TigerPairProbabilities()
        assert probs.total == 0.0

    def test_single_rank_shoe_is_always_same(self):
        probs = tiger_pair_probabilities(shoe(A=6))
        assert probs.same == pytest.approx(1.0)
        assert probs.dual == 0.0
        assert probs.single == pytest.approx(0.0)

    def test_two_pairs_exactly(self):
        # A A K K: player pairs iff banker pairs (dual), or neither pairs
        probs = tiger_pair_probabilities(shoe(A=2, K=2))
        assert probs.same == 0.0
        assert probs.single == pytest.approx(0.0)
        assert probs.dual == pytest.approx(8 / 24)

    @pytest.mark.parametrize(
        "counts",
        [
            shoe(A=3, **{'2': 2, '3': 4}, K=1),
            shoe(A=4, **{'9': 4}),
            shoe(**{'5': 2, '6': 2, '7': 2, '8': 1}, Q=2),
        ],
    )
    def test_matches_brute_force(self, counts):
        same, dual, single = _brute_force_tiger_pair(counts)
        probs = tiger_pair_probabilities(counts)
        assert probs.same == pytest.approx(same, abs=1e-12)
        assert probs.dual == pytest.approx(dual, abs=1e-12)
        assert probs.single == pytest.approx(single, abs=1e-12)

    def test_total_bounded_by_union_of_pairs(self):
        counts = create_shoe()
        probs = tiger_pair_probabilities(counts)
        p = pair_probability(counts)
        # P(either pairs) = 2p − P(both pair)
        assert probs.total == pytest.approx(2 * p - probs.same - probs.dual, rel=1e-12)
        assert 0.0 < probs.total < 1.0
