"""
Baccarat drawing rules and hand settlement.

Drawing order: player, banker, player, banker, then the optional third cards
(player first, banker second).  All functions work on point values (0–9),
never on ranks.

Player rule:
    0–5 draws, 6–7 stands, 8–9 natural.

Banker rule (after the player has acted):
    player stood      → banker draws on 0–5, stands on 6–7
    player drew p3    → banker total decides, given p3:

        0–2  always
        3    p3 != 8
        4    p3 in 2..7
        5    p3 in 4..7
        6    p3 in 6..7
        7    never
"""

from __future__ import annotations

from enum import Enum, auto

NATURAL_MIN: int = 8
PLAYER_DRAW_MAX: int = 5
BANKER_STAND_ON_STOOD: int = 6

# Banker total -> player third-card values on which the banker draws
BANKER_DRAW_TABLE: dict[int, frozenset[int]] = {
    0: frozenset(range(10)),
    1: frozenset(range(10)),
    2: frozenset(range(10)),
    3: frozenset(range(10)) - {8},
    4: frozenset(range(2, 8)),
    5: frozenset(range(4, 8)),
    6: frozenset({6, 7}),
    7: frozenset(),
}


class Outcome(Enum):
    PLAYER = auto()
    BANKER = auto()
    TIE = auto()


def hand_value(*values: int) -> int:
    """Return the baccarat total of the given point values (sum mod 10).

    Examples:
        >>> hand_value(7, 8)
        5
        >>> hand_value(0, 0)
        0
        >>> hand_value(4, 5, 9)
        8
    """
    return sum(values) % 10


def is_natural(player_total: int, banker_total: int) -> bool:
    """Return True if either two-card total is 8 or 9 (hand ends at once).

    Examples:
        >>> is_natural(8, 2)
        True
        >>> is_natural(7, 7)
        False
    """
    return player_total >= NATURAL_MIN or banker_total >= NATURAL_MIN


def player_draws(player_total: int) -> bool:
    """Return True if the player takes a third card on this two-card total.

    Only meaningful when neither hand is a natural.

    Examples:
        >>> player_draws(5)
        True
        >>> player_draws(6)
        False
    """
    return player_total <= PLAYER_DRAW_MAX


def banker_draws(banker_total: int, player_third: int | None) -> bool:
    """Return True if the banker takes a third card.

    Args:
        banker_total: Banker's two-card total (0–7; naturals never get here).
        player_third: Point value of the player's third card, or None if the
                      player stood.

    Examples:
        >>> banker_draws(5, None)   # player stood: banker draws on 0–5
        True
        >>> banker_draws(6, None)
        False
        >>> banker_draws(3, 8)
        False
        >>> banker_draws(6, 7)
        True
    """
    if player_third is None:
        return banker_total < BANKER_STAND_ON_STOOD
    return player_third in BANKER_DRAW_TABLE.get(banker_total, frozenset())


def settle(player_final: int, banker_final: int) -> Outcome:
    """Compare the two final totals.

    Examples:
        >>> settle(7, 6)
        <Outcome.PLAYER: 1>
        >>> settle(3, 3)
        <Outcome.TIE: 3>
    """
    if player_final > banker_final:
        return Outcome.PLAYER
    if banker_final > player_final:
        return Outcome.BANKER
    return Outcome.TIE
