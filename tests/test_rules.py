"""
Tests for src/engine/rules.py — totals, naturals, third-card rules, settlement.

The banker table is checked cell by cell against the published tableau.
"""

from __future__ import annotations

import pytest

from src.engine.rules import (
    Outcome,
    banker_draws,
    hand_value,
    is_natural,
    player_draws,
    settle,
)

# Banker total -> player third-card values on which the banker draws
TABLEAU: dict[int, set[int]] = {
    0: set(range(10)),
    1: set(range(10)),
    2: set(range(10)),
    3: {0, 1, 2, 3, 4, 5, 6, 7, 9},
    4: {2, 3, 4, 5, 6, 7},
    5: {4, 5, 6, 7},
    6: {6, 7},
    7: set(),
}


class TestHandValue:
    def test_mod_ten(self):
        assert hand_value(9, 9) == 8
        assert hand_value(5, 5) == 0
        assert hand_value(7, 6, 9) == 2

    def test_single_card(self):
        assert hand_value(4) == 4


class TestNatural:
    @pytest.mark.parametrize("p, b", [(8, 0), (9, 7), (0, 8), (3, 9), (8, 9)])
    def test_naturals(self, p, b):
        assert is_natural(p, b)

    @pytest.mark.parametrize("p, b", [(7, 7), (0, 0), (5, 6)])
    def test_not_natural(self, p, b):
        assert not is_natural(p, b)


class TestPlayerDraws:
    @pytest.mark.parametrize("total", range(0, 6))
    def test_draws_zero_to_five(self, total):
        assert player_draws(total)

    @pytest.mark.parametrize("total", [6, 7])
    def test_stands_six_seven(self, total):
        assert not player_draws(total)


class TestBankerDraws:
    @pytest.mark.parametrize("banker_total", range(0, 8))
    def test_tableau_when_player_drew(self, banker_total):
        for p3 in range(10):
            assert banker_draws(banker_total, p3) == (p3 in TABLEAU[banker_total]), (banker_total, p3)

    @pytest.mark.parametrize("banker_total", range(0, 6))
    def test_player_stood_banker_draws_to_five(self, banker_total):
        assert banker_draws(banker_total, None)

    @pytest.mark.parametrize("banker_total", [6, 7])
    def test_player_stood_banker_stands_six_seven(self, banker_total):
        assert not banker_draws(banker_total, None)

    def test_player_third_zero_is_not_stood(self):
        # A drawn zero-value card is still a draw: banker 6 stands on it
        assert not banker_draws(6, 0)
        assert banker_draws(6, None) is False


class TestSettle:
    def test_player_wins(self):
        assert settle(9, 8) is Outcome.PLAYER

    def test_banker_wins(self):
        assert settle(0, 6) is Outcome.BANKER

    def test_tie(self):
        assert settle(4, 4) is Outcome.TIE
