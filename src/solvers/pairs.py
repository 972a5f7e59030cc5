"""
Closed-form pair probabilities for the pair side bets.

Player pair / banker pair only look at one seat's first two cards, so the
unconditional hypergeometric formula applies to either seat:

    P(pair) = Σ_r c_r (c_r − 1) / (N (N − 1))

Tiger pair looks at both seats jointly.  Counting ordered 4-card deals
(player 1, player 2, banker 1, banker 2) out of N (N−1) (N−2) (N−3), each deal
falls in at most one of:

    same    both hands pair, same rank
    dual    both hands pair, different ranks
    single  exactly one hand pairs

Only the "player pairs" half of ``single`` is counted directly; the banker
half is its mirror image, hence the factor 2.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

MIN_CARDS_PAIR: int = 2
MIN_CARDS_TIGER_PAIR: int = 4


@dataclass(frozen=True)
class TigerPairProbabilities:
    """Mutually exclusive joint pair classifications of the two opening hands.

    Attributes:
        same:   Both hands pair in the same rank.
        dual:   Both hands pair in different ranks.
        single: Exactly one hand pairs.
    """

    same: float = 0.0
    dual: float = 0.0
    single: float = 0.0

    @property
    def total(self) -> float:
        """Probability that at least one opening hand is a pair."""
        return self.same + self.dual + self.single


def _ordered_pairs(counts: np.ndarray) -> np.ndarray:
    """Ordered ways to draw two cards of each rank: c (c − 1), zero below 2."""
    return np.where(counts >= 2, counts * (counts - 1), 0)


def pair_probability(shoe: np.ndarray) -> float:
    """Probability that a seat's first two cards share a rank.

    Args:
        shoe: Rank counts (length 13).

    Returns:
        Probability in [0, 1]; 0.0 when fewer than two cards remain.

    Examples:
        >>> pair_probability(np.array([2] + [0] * 12))
        1.0
    """
    counts = np.asarray(shoe, dtype=np.int64)
    total = int(counts.sum())
    if total < MIN_CARDS_PAIR:
        return 0.0
    return float(_ordered_pairs(counts).sum()) / (total * (total - 1))


def tiger_pair_probabilities(shoe: np.ndarray) -> TigerPairProbabilities:
    """Joint pair classification of the player's and banker's opening hands.

    Args:
        shoe: Rank counts (length 13).

    Returns:
        TigerPairProbabilities; all zero when fewer than four cards remain.
    """
    counts = np.asarray(shoe, dtype=np.int64)
    total = int(counts.sum())
    if total < MIN_CARDS_TIGER_PAIR:
        return TigerPairProbabilities()

    ways_all = total * (total - 1) * (total - 2) * (total - 3)
    pair_ways = _ordered_pairs(counts)
    pair_ways_sum = int(pair_ways.sum())
    banker_hands = (total - 2) * (total - 3)

    ways_same = 0
    ways_dual = 0
    ways_single = 0
    for r, c in enumerate(counts.tolist()):
        if c < 2:
            continue
        player_ways = c * (c - 1)

        if c >= 4:
            ways_same += player_ways * (c - 2) * (c - 3)

        ways_dual += player_ways * (pair_ways_sum - int(pair_ways[r]))

        # Banker pairs left once the player's two cards of rank r are gone
        left = c - 2
        banker_pair_ways = pair_ways_sum - int(pair_ways[r]) + left * (left - 1)
        ways_single += player_ways * (banker_hands - banker_pair_ways)

    return TigerPairProbabilities(
        same=ways_same / ways_all,
        dual=ways_dual / ways_all,
        single=2 * ways_single / ways_all,
    )
