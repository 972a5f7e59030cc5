"""
Expected value of every baccarat wager from the exact shoe composition.

calculate_ev() is the single entry point: it takes a snapshot of the shoe,
runs the deal enumeration and the two closed-form pair calculations, and
turns the probabilities into per-bet EVs under a payout table and a rolling
(cashback) rate.

EV conventions (per 1 unit staked):
    player / banker   win pays the ratio, loss costs 1, tie is a push
    everything else   p · (ratio + 1) − 1   (stake returned on a win only)

Every bet also earns the rolling bonus, rolling% / 200, regardless of result.

Minimum cards: 6 for any bet that needs the deal resolved.  Below that the
whole result is zeroed (only total_cards is kept).

Usage (standalone report on a fresh 8-deck shoe):
    PYTHONPATH=. python -m src.solvers.ev
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from src.engine.cards import NUM_VALUES
from src.engine.shoe import cards_remaining, create_shoe, validate_shoe, value_buckets
from src.solvers.enumeration import MIN_CARDS_DEAL, DealProbabilities, enumerate_deals
from src.solvers.pairs import TigerPairProbabilities, pair_probability, tiger_pair_probabilities
from src.solvers.payouts import DEFAULT_TABLE_PAYOUTS, BankerMode, PayoutConfig, TigerPairRates

logger = logging.getLogger(__name__)

DEFAULT_ROLLING: float = 1.4
"""Rolling percentage used when the caller does not give one."""

NO_COMMISSION_SIX_RATIO: float = 0.5


# ─── Result types ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BetOutcome:
    """One wager's exact probability and EV.

    Attributes:
        label:       Display name.
        probability: Probability that the bet wins.
        payout:      Ratio that produced ``ev`` (0 where no single ratio applies).
        ev:          Expected value per unit staked, rolling bonus included.
        payoffs:     Full result distribution as (probability, net units) pairs,
                     losses and pushes included, rolling bonus excluded.
                     Empty for a zeroed result.
    """

    label: str
    probability: float
    payout: float
    ev: float
    payoffs: tuple[tuple[float, float], ...] = ()


@dataclass(frozen=True)
class CalculationResult:
    """Every wager's outcome for one shoe snapshot."""

    player: BetOutcome
    banker: BetOutcome
    tie: BetOutcome
    player_pair: BetOutcome
    banker_pair: BetOutcome
    tie_bonuses: tuple[BetOutcome, ...]
    tiger: BetOutcome
    small_tiger: BetOutcome
    big_tiger: BetOutcome
    tiger_tie: BetOutcome
    tiger_pair: BetOutcome
    total_cards: int

    def all_bets(self) -> list[BetOutcome]:
        """Every BetOutcome in display order."""
        return [
            self.player,
            self.banker,
            self.tie,
            self.player_pair,
            self.banker_pair,
            *self.tie_bonuses,
            self.tiger,
            self.small_tiger,
            self.big_tiger,
            self.tiger_tie,
            self.tiger_pair,
        ]

    @classmethod
    def zeroed(cls, total_cards: int) -> CalculationResult:
        """Result for a shoe too short to deal a hand: everything 0 except total_cards."""

        def _zero(label: str) -> BetOutcome:
            return BetOutcome(label, 0.0, 0.0, 0.0)

        return cls(
            player=_zero(LABEL_PLAYER),
            banker=_zero(LABEL_BANKER),
            tie=_zero(LABEL_TIE),
            player_pair=_zero(LABEL_PLAYER_PAIR),
            banker_pair=_zero(LABEL_BANKER_PAIR),
            tie_bonuses=tuple(_zero(tie_bonus_label(i)) for i in range(NUM_VALUES)),
            tiger=_zero(LABEL_TIGER),
            small_tiger=_zero(LABEL_SMALL_TIGER),
            big_tiger=_zero(LABEL_BIG_TIGER),
            tiger_tie=_zero(LABEL_TIGER_TIE),
            tiger_pair=_zero(LABEL_TIGER_PAIR),
            total_cards=total_cards,
        )


LABEL_PLAYER = "Player"
LABEL_BANKER = "Banker"
LABEL_TIE = "Tie"
LABEL_PLAYER_PAIR = "Player Pair"
LABEL_BANKER_PAIR = "Banker Pair"
LABEL_TIGER = "Tiger"
LABEL_SMALL_TIGER = "Small Tiger"
LABEL_BIG_TIGER = "Big Tiger"
LABEL_TIGER_TIE = "Tiger Tie"
LABEL_TIGER_PAIR = "Tiger Pair"


def tie_bonus_label(point: int) -> str:
    return f"Tie {point}"


# ─── EV formulas ──────────────────────────────────────────────────────────────


def rolling_bonus(rolling_pct: float) -> float:
    """Cashback per unit staked: half the rolling percentage.

    Examples:
        >>> rolling_bonus(2.0)
        0.01
    """
    return rolling_pct / 200


def fixed_odds_ev(probability: float, ratio: float, bonus: float) -> float:
    """EV of a bet that returns stake + ratio on a win and loses the stake otherwise.

    Examples:
        >>> fixed_odds_ev(0.5, 1.0, 0.0)
        0.0
        >>> fixed_odds_ev(0.0, 8.0, 0.0)
        -1.0
    """
    return probability * (ratio + 1) - 1 + bonus


def player_ev(deal: DealProbabilities, payouts: PayoutConfig, bonus: float) -> float:
    """Player bet: ties push."""
    return deal.player_win * payouts.player - deal.banker_win + bonus


def banker_ev(deal: DealProbabilities, payouts: PayoutConfig, bonus: float) -> float:
    """Banker bet under the table's banker mode; ties push."""
    if payouts.banker_mode is BankerMode.NO_COMMISSION:
        non_six = deal.banker_win - deal.banker_six
        return non_six * 1.0 + deal.banker_six * NO_COMMISSION_SIX_RATIO - deal.player_win + bonus
    return deal.banker_win * payouts.banker - deal.player_win + bonus


def tiger_ev(deal: DealProbabilities, payouts: PayoutConfig, bonus: float) -> float:
    """Tiger bet: banker wins on 6, paid by card count; flat 1-unit stake otherwise lost."""
    return (
        deal.banker_six_two_cards * (payouts.tiger.two_cards + 1)
        + deal.banker_six_three_cards * (payouts.tiger.three_cards + 1)
        - 1
        + bonus
    )


def tiger_pair_ev(probs: TigerPairProbabilities, rates: TigerPairRates, bonus: float) -> float:
    """Tiger pair bet, paid by joint pair classification."""
    return (
        probs.same * (rates.same + 1)
        + probs.dual * (rates.dual + 1)
        + probs.single * (rates.single + 1)
        - 1
        + bonus
    )


# ─── Payoff distributions ─────────────────────────────────────────────────────

Payoffs = tuple[tuple[float, float], ...]


def fixed_odds_payoffs(probability: float, ratio: float) -> Payoffs:
    """Win ``ratio`` with ``probability``, lose the stake otherwise."""
    return ((probability, float(ratio)), (1.0 - probability, -1.0))


def player_payoffs(deal: DealProbabilities, payouts: PayoutConfig) -> Payoffs:
    return (
        (deal.player_win, float(payouts.player)),
        (deal.banker_win, -1.0),
        (deal.tie, 0.0),
    )


def banker_payoffs(deal: DealProbabilities, payouts: PayoutConfig) -> Payoffs:
    """Banker results; a no-commission table splits the win on 6 out at half pay."""
    if payouts.banker_mode is BankerMode.NO_COMMISSION:
        wins: Payoffs = (
            (deal.banker_win - deal.banker_six, 1.0),
            (deal.banker_six, NO_COMMISSION_SIX_RATIO),
        )
    else:
        wins = ((deal.banker_win, float(payouts.banker)),)
    return (*wins, (deal.player_win, -1.0), (deal.tie, 0.0))


def tiger_payoffs(deal: DealProbabilities, payouts: PayoutConfig) -> Payoffs:
    return (
        (deal.banker_six_two_cards, float(payouts.tiger.two_cards)),
        (deal.banker_six_three_cards, float(payouts.tiger.three_cards)),
        (1.0 - deal.banker_six, -1.0),
    )


def tiger_pair_payoffs(probs: TigerPairProbabilities, rates: TigerPairRates) -> Payoffs:
    return (
        (probs.same, float(rates.same)),
        (probs.dual, float(rates.dual)),
        (probs.single, float(rates.single)),
        (1.0 - probs.total, -1.0),
    )


# ─── Entry point ──────────────────────────────────────────────────────────────


def calculate_ev(
    shoe: np.ndarray,
    payouts: PayoutConfig = DEFAULT_TABLE_PAYOUTS,
    rolling: float = DEFAULT_ROLLING,
) -> CalculationResult:
    """Compute the probability and EV of every wager for the next hand.

    Args:
        shoe:    Remaining rank counts (length 13).  Copied on entry; the
                 caller's array is never modified or retained.
        payouts: Payout table.
        rolling: Rolling percentage, e.g. 1.5 for 1.5%.

    Returns:
        A fully populated CalculationResult.  Zeroed (apart from total_cards)
        when fewer than six cards remain.

    Raises:
        ValueError: If ``shoe`` is not 13 non-negative counts.
    """
    counts = validate_shoe(shoe)
    total = cards_remaining(counts)
    if total < MIN_CARDS_DEAL:
        logger.debug("Shoe has %d cards; returning zeroed result", total)
        return CalculationResult.zeroed(total)

    start = time.perf_counter()
    bonus = rolling_bonus(rolling)
    deal = enumerate_deals(value_buckets(counts))
    pair_prob = pair_probability(counts)
    tiger_pair = tiger_pair_probabilities(counts)

    tie_bonuses = tuple(
        BetOutcome(
            label=tie_bonus_label(i),
            probability=deal.tie_points[i],
            payout=payouts.tie_bonus[i],
            ev=fixed_odds_ev(deal.tie_points[i], payouts.tie_bonus[i], bonus),
            payoffs=fixed_odds_payoffs(deal.tie_points[i], payouts.tie_bonus[i]),
        )
        for i in range(NUM_VALUES)
    )

    def _fixed(label: str, probability: float, ratio: float) -> BetOutcome:
        return BetOutcome(
            label,
            probability,
            ratio,
            fixed_odds_ev(probability, ratio, bonus),
            fixed_odds_payoffs(probability, ratio),
        )

    result = CalculationResult(
        player=BetOutcome(
            LABEL_PLAYER,
            deal.player_win,
            payouts.player,
            player_ev(deal, payouts, bonus),
            player_payoffs(deal, payouts),
        ),
        banker=BetOutcome(
            LABEL_BANKER,
            deal.banker_win,
            payouts.banker,
            banker_ev(deal, payouts, bonus),
            banker_payoffs(deal, payouts),
        ),
        tie=_fixed(LABEL_TIE, deal.tie, payouts.tie),
        player_pair=_fixed(LABEL_PLAYER_PAIR, pair_prob, payouts.player_pair),
        banker_pair=_fixed(LABEL_BANKER_PAIR, pair_prob, payouts.banker_pair),
        tie_bonuses=tie_bonuses,
        tiger=BetOutcome(
            LABEL_TIGER,
            deal.banker_six,
            payouts.tiger.three_cards,
            tiger_ev(deal, payouts, bonus),
            tiger_payoffs(deal, payouts),
        ),
        small_tiger=_fixed(LABEL_SMALL_TIGER, deal.banker_six_two_cards, payouts.small_tiger),
        big_tiger=_fixed(LABEL_BIG_TIGER, deal.banker_six_three_cards, payouts.big_tiger),
        tiger_tie=_fixed(LABEL_TIGER_TIE, deal.tie_six, payouts.tiger_tie),
        tiger_pair=BetOutcome(
            LABEL_TIGER_PAIR,
            tiger_pair.total,
            0.0,
            tiger_pair_ev(tiger_pair, payouts.tiger_pair, bonus),
            tiger_pair_payoffs(tiger_pair, payouts.tiger_pair),
        ),
        total_cards=total,
    )
    logger.debug("Computed EV for %d-card shoe in %.3fs", total, time.perf_counter() - start)
    return result


# ─── Report ───────────────────────────────────────────────────────────────────


def print_ev_report(result: CalculationResult) -> None:
    """Print every wager as a fixed-width table, positive EVs flagged with '*'."""
    print(f"\nShoe: {result.total_cards} cards remaining")
    header = f"{'Bet':<14}{'P(win)':>12}{'Payout':>10}{'EV':>12}"
    print(header)
    print("─" * len(header))
    for bet in result.all_bets():
        flag = " *" if bet.ev > 0 else ""
        print(f"{bet.label:<14}{bet.probability:>12.6f}{bet.payout:>10.2f}{bet.ev * 100:>+11.4f}%{flag}")


if __name__ == "__main__":
    print("Baccarat exact EV — fresh 8-deck shoe, commission table, rolling 1.4%")
    t0 = time.perf_counter()
    res = calculate_ev(create_shoe())
    print(f"Computed in {time.perf_counter() - t0:.2f}s")
    print_ev_report(res)
