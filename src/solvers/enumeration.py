"""
Exact deal enumeration for baccarat over a known shoe composition.

Walks every ordered sequence of point values that can be dealt (P1, B1, P2,
B2, then the rule-driven third cards) with its exact path probability.
Drawing is without replacement: the chance of value v is
remaining[v] / remaining_total at the moment it is drawn.

State is a single list of value-bucket counts (index = point value 0–9),
private to one enumerate_deals() call.  Every draw decrements the bucket
before descending and restores it on the way back up, so the list is back
to its starting counts when the walk ends.  Empty buckets are skipped before
recursing, so no division ever sees a zero total.

Worst case is about 10^4 four-card openings × 10 × 10 third-card branches.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from src.engine.cards import NUM_VALUES
from src.engine.rules import banker_draws, hand_value, is_natural, player_draws

MIN_CARDS_DEAL: int = 6
"""Cards needed to resolve any hand (two each plus both third cards)."""

TIGER_VALUE: int = 6
OPENING_CARDS: int = 4


@dataclass
class DealProbabilities:
    """Probability mass accumulated over every resolved deal.

    Attributes:
        player_win:             P(player total > banker total).
        banker_win:             P(banker total > player total).
        tie:                    P(equal totals).
        banker_six_two_cards:   P(banker wins holding 6 with two cards).
        banker_six_three_cards: P(banker wins holding 6 with three cards).
        tie_six:                P(tie at 6).
        tie_points:             P(tie at point value i), i = 0..9.
    """

    player_win: float = 0.0
    banker_win: float = 0.0
    tie: float = 0.0
    banker_six_two_cards: float = 0.0
    banker_six_three_cards: float = 0.0
    tie_six: float = 0.0
    tie_points: list[float] = field(default_factory=lambda: [0.0] * NUM_VALUES)

    @property
    def total(self) -> float:
        """Sum of all leaf probabilities (1.0 for any shoe of six or more cards)."""
        return self.player_win + self.banker_win + self.tie

    @property
    def banker_six(self) -> float:
        """P(banker wins holding 6), any card count."""
        return self.banker_six_two_cards + self.banker_six_three_cards

    def tally(self, player_final: int, banker_final: int, weight: float, banker_cards: int) -> None:
        """Add one resolved deal of probability ``weight``."""
        if player_final > banker_final:
            self.player_win += weight
        elif banker_final > player_final:
            self.banker_win += weight
            if banker_final == TIGER_VALUE:
                if banker_cards == 2:
                    self.banker_six_two_cards += weight
                else:
                    self.banker_six_three_cards += weight
        else:
            self.tie += weight
            self.tie_points[player_final] += weight
            if player_final == TIGER_VALUE:
                self.tie_six += weight


def _draw(counts: list[int], remaining: int) -> Iterator[tuple[int, float]]:
    """Yield (value, probability) for each drawable value, holding that card out.

    While a value is yielded its bucket is decremented; it is restored before
    the next value is tried, even if the consumer raises.
    """
    for value in range(NUM_VALUES):
        c = counts[value]
        if c == 0:
            continue
        counts[value] = c - 1
        try:
            yield value, c / remaining
        finally:
            counts[value] = c


def _deal_opening(
    counts: list[int],
    remaining: int,
    dealt: tuple[int, ...],
    weight: float,
    acc: DealProbabilities,
) -> None:
    """Recurse through the four opening cards, in dealing order P1 B1 P2 B2."""
    if len(dealt) == OPENING_CARDS:
        _resolve(counts, remaining, dealt, weight, acc)
        return
    for value, prob in _draw(counts, remaining):
        _deal_opening(counts, remaining - 1, dealt + (value,), weight * prob, acc)


def _resolve(
    counts: list[int],
    remaining: int,
    opening: tuple[int, ...],
    weight: float,
    acc: DealProbabilities,
) -> None:
    """Apply the third-card rules to one opening and tally every continuation."""
    p1, b1, p2, b2 = opening
    player_total = hand_value(p1, p2)
    banker_total = hand_value(b1, b2)

    if is_natural(player_total, banker_total):
        acc.tally(player_total, banker_total, weight, 2)
        return

    if not player_draws(player_total):
        if banker_draws(banker_total, None):
            for b3, prob in _draw(counts, remaining):
                acc.tally(player_total, hand_value(banker_total, b3), weight * prob, 3)
        else:
            acc.tally(player_total, banker_total, weight, 2)
        return

    for p3, prob in _draw(counts, remaining):
        player_final = hand_value(player_total, p3)
        w3 = weight * prob
        if banker_draws(banker_total, p3):
            for b3, prob_b in _draw(counts, remaining - 1):
                acc.tally(player_final, hand_value(banker_total, b3), w3 * prob_b, 3)
        else:
            acc.tally(player_final, banker_total, w3, 2)


def enumerate_deals(buckets: np.ndarray) -> DealProbabilities:
    """Exact outcome probabilities for the next hand dealt from ``buckets``.

    Args:
        buckets: Counts per point value (length 10), e.g. from value_buckets().
                 Not modified.

    Returns:
        DealProbabilities.  All zero when fewer than MIN_CARDS_DEAL cards
        remain; callers treat that shoe as unplayable.

    Examples:
        >>> probs = enumerate_deals(np.array([0, 6, 0, 0, 0, 0, 0, 0, 0, 0]))
        >>> probs.tie, probs.tie_points[3]
        (1.0, 1.0)
    """
    counts = [int(c) for c in np.asarray(buckets).reshape(-1)]
    if len(counts) != NUM_VALUES:
        raise ValueError(f"Expected {NUM_VALUES} value buckets; got {len(counts)}.")
    acc = DealProbabilities()
    total = sum(counts)
    if total < MIN_CARDS_DEAL:
        return acc
    _deal_opening(counts, total, (), 1.0, acc)
    return acc
