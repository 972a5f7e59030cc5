"""
Rank constants, baccarat point values, and human-readable I/O helpers.

Rank encoding (integer 1–13):
    1=A, 2..9 as printed, 10=10, 11=J, 12=Q, 13=K

Suits never matter in baccarat, so a card is fully described by its rank.
Point values collapse ranks into 0–9: ten-value ranks (10, J, Q, K) score 0.
String representations are used exclusively at I/O boundaries.
"""

from __future__ import annotations

NUM_RANKS: int = 13
NUM_VALUES: int = 10

RANKS: tuple[int, ...] = tuple(range(1, NUM_RANKS + 1))

RANK_LABELS: dict[int, str] = {
    1: 'A', 2: '2', 3: '3', 4: '4', 5: '5', 6: '6', 7: '7',
    8: '8', 9: '9', 10: '10', 11: 'J', 12: 'Q', 13: 'K',
}

RANK_ACE: int = 1
RANK_SIX: int = 6
RANK_TEN: int = 10
RANK_JACK: int = 11
RANK_QUEEN: int = 12
RANK_KING: int = 13

# Ranks that score 0 points
ZERO_VALUE_RANKS: frozenset[int] = frozenset({RANK_TEN, RANK_JACK, RANK_QUEEN, RANK_KING})

# Point value by rank: index matches rank - 1
RANK_VALUES: list[int] = [1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 0, 0, 0]

# Single-key aliases accepted by the card recorder.  '0' is the ten.
KEY_RANKS: dict[str, int] = {
    '1': 1, '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7, '8': 8, '9': 9,
    '0': RANK_TEN, 'j': RANK_JACK, 'q': RANK_QUEEN, 'k': RANK_KING,
}


def check_rank(rank: int) -> None:
    if rank not in RANK_LABELS:
        raise ValueError(f"Rank must be an integer 1–13; got {rank!r}.")


def rank_value(rank: int) -> int:
    """Return the baccarat point value (0–9) of a rank.

    Examples:
        >>> rank_value(1)    # Ace
        1
        >>> rank_value(9)
        9
        >>> rank_value(12)   # Queen
        0
    """
    check_rank(rank)
    return RANK_VALUES[rank - 1]


def rank_to_str(rank: int) -> str:
    """Convert a rank integer to its label.

    Examples:
        >>> rank_to_str(1)
        'A'
        >>> rank_to_str(10)
        '10'
        >>> rank_to_str(13)
        'K'
    """
    check_rank(rank)
    return RANK_LABELS[rank]


def str_to_rank(s: str) -> int:
    """Parse a rank label (or a single-key alias) to its integer encoding.

    Accepts 'A', '2'-'10', 'J', 'Q', 'K' in any case, plus the keyboard
    aliases '1' (ace) and '0' (ten).

    Raises:
        ValueError: If the label is not a known rank.

    Examples:
        >>> str_to_rank('A')
        1
        >>> str_to_rank('10')
        10
        >>> str_to_rank('0')
        10
        >>> str_to_rank('q')
        12
    """
    label = s.strip().upper()
    for rank, name in RANK_LABELS.items():
        if name == label:
            return rank
    key = label.lower()
    if key in KEY_RANKS:
        return KEY_RANKS[key]
    raise ValueError(f"Unknown card rank label: {s!r}.")


def ranks_to_str(ranks: tuple[int, ...]) -> str:
    """Convert a sequence of ranks to a space-separated string.

    Examples:
        >>> ranks_to_str((1, 13, 6))
        'A K 6'
    """
    return ' '.join(rank_to_str(r) for r in ranks)
