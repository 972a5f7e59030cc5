"""
Tests for src/solvers/enumeration.py — exact deal enumeration.

Covers:
    - Deterministic single-value shoes with known outcomes
    - Conservation (win + loss + tie = 1) and tie decomposition
    - Brute-force cross-check over every ordered deal of small shoes
    - Published 8-deck probabilities
    - Scratch buffer is private: caller's buckets untouched
"""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from src.engine.cards import RANK_VALUES
from src.engine.rules import banker_draws, hand_value, is_natural, player_draws
from src.engine.shoe import create_shoe, value_buckets
from src.solvers.enumeration import MIN_CARDS_DEAL, DealProbabilities, enumerate_deals
from tests.conftest import shoe


def _enumerate(counts) -> DealProbabilities:
    return enumerate_deals(value_buckets(counts))


def _brute_force(counts) -> DealProbabilities:
    """Play out every ordered 6-card sequence of physical cards with equal weight."""
    values = [RANK_VALUES[r] for r, c in enumerate(counts.tolist()) for _ in range(c)]
    acc = DealProbabilities()
    seqs = list(itertools.permutations(range(len(values)), MIN_CARDS_DEAL))
    weight = 1.0 / len(seqs)
    for seq in seqs:
        p1, b1, p2, b2, c5, c6 = (values[i] for i in seq)
        pt, bt = hand_value(p1, p2), hand_value(b1, b2)
        if is_natural(pt, bt):
            acc.tally(pt, bt, weight, 2)
            continue
        p3 = None
        next_card = c5
        if player_draws(pt):
            p3 = c5
            next_card = c6
        pf = pt if p3 is None else hand_value(pt, p3)
        if banker_draws(bt, p3):
            acc.tally(pf, hand_value(bt, next_card), weight, 3)
        else:
            acc.tally(pf, bt, weight, 2)
    return acc


class TestDeterministicShoes:
    def test_six_aces(self):
        probs = _enumerate(shoe(A=6))
        assert probs.tie == 1.0
        assert probs.player_win == 0.0
        assert probs.banker_win == 0.0
        assert probs.tie_points[3] == 1.0
        assert sum(probs.tie_points) == 1.0
        assert probs.banker_six == 0.0
        assert probs.tie_six == 0.0

    def test_all_fours_is_natural_tie(self):
        # 4 + 4 = 8 for both hands
        probs = _enumerate(shoe(**{'4': 8}))
        assert probs.tie == pytest.approx(1.0)
        assert probs.tie_points[8] == pytest.approx(1.0)

    def test_all_threes_tie_at_six(self):
        # 3 + 3 = 6: player stands, banker stands on 6 → tiger tie
        probs = _enumerate(shoe(**{'3': 6}))
        assert probs.tie_six == pytest.approx(1.0)
        assert probs.tie_points[6] == pytest.approx(1.0)

    def test_banker_six_split_by_card_count(self):
        probs = _enumerate(create_shoe(1))
        assert probs.banker_six == pytest.approx(
            probs.banker_six_two_cards + probs.banker_six_three_cards
        )
        assert probs.banker_six_two_cards > 0
        assert probs.banker_six_three_cards > 0


class TestConservation:
    def test_single_deck_sums_to_one(self, one_deck):
        probs = _enumerate(one_deck)
        assert probs.total == pytest.approx(1.0, rel=1e-9)

    def test_tie_decomposition(self, one_deck):
        probs = _enumerate(one_deck)
        assert sum(probs.tie_points) == pytest.approx(probs.tie, rel=1e-12)
        assert probs.tie_points[6] == pytest.approx(probs.tie_six, rel=1e-12)

    @pytest.mark.parametrize(
        "counts",
        [
            shoe(A=1, **{'2': 1, '3': 1, '4': 1, '5': 1}, K=1),
            shoe(**{'7': 3, '9': 2}, J=4),
            shoe(**{'6': 30, '8': 1}, Q=5),
        ],
    )
    def test_small_shoes_sum_to_one(self, counts):
        assert _enumerate(counts).total == pytest.approx(1.0, rel=1e-9)


class TestBruteForce:
    @pytest.mark.parametrize(
        "counts",
        [
            shoe(A=2, **{'3': 1, '6': 2, '7': 1}, K=2),
            shoe(**{'2': 2, '5': 2, '6': 1, '8': 1, '9': 1}, T=2),
        ],
    )
    def test_matches_card_by_card_play(self, counts):
        exact = _enumerate(counts)
        brute = _brute_force(counts)
        assert exact.player_win == pytest.approx(brute.player_win, abs=1e-12)
        assert exact.banker_win == pytest.approx(brute.banker_win, abs=1e-12)
        assert exact.tie == pytest.approx(brute.tie, abs=1e-12)
        assert exact.banker_six_two_cards == pytest.approx(brute.banker_six_two_cards, abs=1e-12)
        assert exact.banker_six_three_cards == pytest.approx(brute.banker_six_three_cards, abs=1e-12)
        assert exact.tie_six == pytest.approx(brute.tie_six, abs=1e-12)
        assert exact.tie_points == pytest.approx(brute.tie_points, abs=1e-12)


class TestMissingValues:
    def test_low_cards_only_cannot_reach_high_totals(self):
        # Values 0 and 1 only: no hand can exceed 3
        probs = _enumerate(shoe(A=4, K=4))
        assert probs.total == pytest.approx(1.0)
        assert all(p == 0.0 for p in probs.tie_points[4:])
        assert probs.banker_six == 0.0

    def test_removing_sixes_keeps_sums(self, one_deck):
        counts = one_deck.copy()
        counts[5] = 0
        probs = _enumerate(counts)
        assert probs.total == pytest.approx(1.0, rel=1e-9)


class TestEightDeckShoe:
    def test_published_probabilities(self, full_shoe):
        probs = _enumerate(full_shoe)
        assert probs.banker_win == pytest.approx(0.458597, abs=1e-6)
        assert probs.player_win == pytest.approx(0.446247, abs=1e-6)
        assert probs.tie == pytest.approx(0.095156, abs=1e-6)
        assert probs.total == pytest.approx(1.0, rel=1e-9)


class TestBoundaries:
    def test_below_minimum_is_all_zero(self):
        probs = _enumerate(shoe(A=MIN_CARDS_DEAL - 1))
        assert probs.total == 0.0
        assert probs.tie_points == [0.0] * 10

    def test_buckets_not_modified(self, one_deck):
        buckets = value_buckets(one_deck)
        before = buckets.copy()
        enumerate_deals(buckets)
        assert np.array_equal(buckets, before)

    def test_wrong_bucket_count_raises(self):
        with pytest.raises(ValueError):
            enumerate_deals(np.ones(13, dtype=np.int64))

    def test_repeatable(self, one_deck):
        assert _enumerate(one_deck) == _enumerate(one_deck)
