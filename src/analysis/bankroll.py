"""Stake sizing, spread and horizon outlook for exact-EV baccarat wagers.

Provides:
- Kelly-style stake suggestions for positive-EV bets
- Positive-EV recommendations sorted by edge
- Per-unit standard deviation from a bet's exact payoff distribution
- Horizon projections for a recommended stake via CLT

Profit after N identical bets of stake S, each with per-unit mean ev and
standard deviation σ, is approximately

    N(N·S·ev, N·(S·σ)²)

All stakes and projected profits are in the same currency unit as the
bankroll passed in.  The shoe changes after every hand, so a projection is
the outlook if the current edge held for the whole horizon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from scipy import stats

from src.solvers.ev import BetOutcome, CalculationResult, fixed_odds_payoffs

DEFAULT_HORIZONS: tuple[int, ...] = (10, 50, 100, 500)
"""Hand counts shown for each recommendation."""

DEFAULT_CONFIDENCE: float = 0.95

# ─── Dataclasses ──────────────────────────────────────────────────────────────


@dataclass
class HorizonProjection:
    """Outlook for repeating one recommended stake over a number of hands.

    Attributes:
        n_bets:          Number of bets in this horizon.
        expected_profit: n_bets * stake * ev (currency).
        ci_low:          Lower bound of the confidence interval (currency).
        ci_high:         Upper bound of the confidence interval (currency).
        prob_positive:   Probability that cumulative profit > 0 (CLT).
    """

    n_bets: int
    expected_profit: float
    ci_low: float
    ci_high: float
    prob_positive: float


@dataclass
class Recommendation:
    """A positive-EV bet with its suggested stake.

    Attributes:
        bet:         The wager's BetOutcome.
        stake:       Suggested stake (whole currency units).
        projections: Outlook at DEFAULT_HORIZONS when the stake is repeated.
    """

    bet: BetOutcome
    stake: int
    projections: list[HorizonProjection] = field(default_factory=list)


# ─── Computation functions ────────────────────────────────────────────────────


def kelly_stake(bet: BetOutcome, bankroll: float) -> int:
    """Suggested stake for a bet: bankroll * ev / payout, rounded down.

    Zero for bets without a positive EV or without a positive payout ratio.

    Raises:
        ValueError: If bankroll is negative.

    Examples:
        >>> kelly_stake(BetOutcome("Tie", 0.2, 8.0, 0.8), 1000)
        100
    """
    if bankroll < 0:
        raise ValueError(f"Bankroll must be >= 0; got {bankroll}.")
    if bet.ev <= 0 or bet.payout <= 0:
        return 0
    return math.floor(bankroll * bet.ev / bet.payout)


def bet_std(bet: BetOutcome) -> float:
    """Per-unit standard deviation of a bet's net result.

    Taken over ``bet.payoffs`` so pushes, half-paid banker sixes and the
    multi-ratio tiger bets are counted as they settle.  A bet without a
    distribution is treated as fixed odds at ``bet.payout``.  The rolling
    bonus is a constant and does not change the spread.

    Examples:
        >>> bet_std(BetOutcome("Tie", 0.5, 1.0, 0.0))
        1.0
        >>> bet_std(BetOutcome("Player", 0.5, 1.0, 0.0, ((0.5, 1.0), (0.0, -1.0), (0.5, 0.0))))
        0.5
    """
    payoffs = bet.payoffs
    if not payoffs:
        payoffs = fixed_odds_payoffs(min(max(bet.probability, 0.0), 1.0), bet.payout)
    mean = sum(p * x for p, x in payoffs)
    second = sum(p * x * x for p, x in payoffs)
    return math.sqrt(max(second - mean * mean, 0.0))


def project_stake(
    bet: BetOutcome,
    stake: float,
    horizons: tuple[int, ...] = DEFAULT_HORIZONS,
    confidence: float = DEFAULT_CONFIDENCE,
) -> list[HorizonProjection]:
    """CLT outlook for betting ``stake`` on ``bet`` for each horizon.

    Args:
        bet:        The wager; its ev and payoff spread are per unit.
        stake:      Currency staked per hand.
        horizons:   Hand counts to project.
        confidence: Two-sided confidence level for the interval.

    Returns:
        One HorizonProjection per horizon, in input order.

    Raises:
        ValueError: If stake is negative or confidence is outside (0, 1).
    """
    if stake < 0:
        raise ValueError(f"Stake must be >= 0; got {stake}.")
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"Confidence must be in (0, 1); got {confidence}.")

    mean = stake * bet.ev
    spread = stake * bet_std(bet)
    projections = []
    for n in horizons:
        expected = n * mean
        if spread > 0:
            dist = stats.norm(loc=expected, scale=spread * math.sqrt(n))
            low, high = (float(v) for v in dist.interval(confidence))
            prob_positive = float(dist.sf(0.0))
        else:
            low = high = expected
            prob_positive = 1.0 if expected > 0 else 0.0
        projections.append(HorizonProjection(n, expected, low, high, prob_positive))
    return projections


def positive_ev_bets(result: CalculationResult) -> list[BetOutcome]:
    """Every bet with EV > 0, best first."""
    return sorted((b for b in result.all_bets() if b.ev > 0), key=lambda b: b.ev, reverse=True)


def recommend(
    result: CalculationResult,
    bankroll: float,
    horizons: tuple[int, ...] = DEFAULT_HORIZONS,
) -> list[Recommendation]:
    """Positive-EV bets with their Kelly stakes and horizon outlook, best EV first."""
    recs = []
    for b in positive_ev_bets(result):
        stake = kelly_stake(b, bankroll)
        recs.append(Recommendation(bet=b, stake=stake, projections=project_stake(b, stake, horizons)))
    return recs
