"""Tests for src/engine/cards.py — rank encoding, values, and label parsing."""

from __future__ import annotations

import pytest

from src.engine.cards import (
    NUM_RANKS,
    RANK_LABELS,
    RANK_VALUES,
    RANKS,
    ZERO_VALUE_RANKS,
    rank_to_str,
    rank_value,
    ranks_to_str,
    str_to_rank,
)


class TestConstants:
    def test_thirteen_ranks(self):
        assert NUM_RANKS == 13
        assert len(RANKS) == 13
        assert len(RANK_VALUES) == 13

    def test_zero_value_ranks(self):
        for rank in ZERO_VALUE_RANKS:
            assert RANK_VALUES[rank - 1] == 0

    def test_pip_ranks_score_face_value(self):
        for rank in range(1, 10):
            assert rank_value(rank) == rank


class TestRankValue:
    @pytest.mark.parametrize("rank", [10, 11, 12, 13])
    def test_ten_and_faces_are_zero(self, rank):
        assert rank_value(rank) == 0

    def test_ace_is_one(self):
        assert rank_value(1) == 1

    @pytest.mark.parametrize("rank", [0, 14, -1])
    def test_out_of_range_raises(self, rank):
        with pytest.raises(ValueError):
            rank_value(rank)


class TestLabels:
    def test_round_trip_all_ranks(self):
        for rank in RANKS:
            assert str_to_rank(rank_to_str(rank)) == rank

    def test_case_insensitive(self):
        assert str_to_rank('k') == 13
        assert str_to_rank('a') == 1

    def test_keyboard_aliases(self):
        assert str_to_rank('0') == 10
        assert str_to_rank('1') == 1

    def test_unknown_label_raises(self):
        with pytest.raises(ValueError):
            str_to_rank('X')

    def test_ranks_to_str(self):
        assert ranks_to_str((1, 10, 12)) == 'A 10 Q'

    def test_labels_cover_every_rank(self):
        assert set(RANK_LABELS) == set(RANKS)
