"""
Shoe creation, card removal, and value-bucket derivation.

The shoe is a numpy int64 array of length 13.
    shoe[rank - 1] = number of cards of that rank still in the shoe

Suits are irrelevant to every baccarat wager, so rank counts are the complete
state.  Value buckets collapse the 13 ranks into the 10 baccarat point values
(10/J/Q/K all score 0) and are what the deal enumeration walks over.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from .cards import NUM_RANKS, NUM_VALUES, RANK_LABELS, RANK_VALUES, check_rank

DEFAULT_DECKS: int = 8
CARDS_PER_RANK_PER_DECK: int = 4

INITIAL_RANK_COUNT: int = DEFAULT_DECKS * CARDS_PER_RANK_PER_DECK
"""Cards of each rank in a fresh eight-deck shoe (32)."""

_VALUE_INDEX: np.ndarray = np.array(RANK_VALUES, dtype=np.int64)


def create_shoe(n_decks: int = DEFAULT_DECKS) -> np.ndarray:
    """Create a fresh shoe of ``n_decks`` standard 52-card decks.

    Raises:
        ValueError: If n_decks is not positive.

    Examples:
        >>> shoe = create_shoe()
        >>> int(shoe.sum())
        416
        >>> int(shoe[0])   # aces
        32
    """
    if n_decks < 1:
        raise ValueError(f"A shoe needs at least one deck; got n_decks={n_decks}.")
    return np.full(NUM_RANKS, n_decks * CARDS_PER_RANK_PER_DECK, dtype=np.int64)


def shoe_from_counts(counts: Mapping[int, int]) -> np.ndarray:
    """Build a shoe from a ``{rank: count}`` mapping.  Missing ranks are empty.

    Raises:
        ValueError: On ranks outside 1–13 or negative counts.

    Examples:
        >>> shoe = shoe_from_counts({1: 6})
        >>> int(shoe.sum()), int(shoe[0])
        (6, 6)
    """
    shoe = np.zeros(NUM_RANKS, dtype=np.int64)
    for rank, count in counts.items():
        check_rank(rank)
        if count < 0:
            raise ValueError(f"Count for rank {RANK_LABELS[rank]} must be >= 0; got {count}.")
        shoe[rank - 1] = count
    return shoe


def validate_shoe(shoe: np.ndarray) -> np.ndarray:
    """Return an independent int64 copy of ``shoe`` after checking its shape and counts.

    Raises:
        ValueError: If the array is not 13 long or holds a negative count.
    """
    arr = np.array(shoe, dtype=np.int64).reshape(-1)
    if arr.shape != (NUM_RANKS,):
        raise ValueError(f"Shoe must hold {NUM_RANKS} rank counts; got shape {np.shape(shoe)}.")
    if (arr < 0).any():
        raise ValueError(f"Shoe counts must be non-negative; got {arr.tolist()}.")
    return arr


def cards_remaining(shoe: np.ndarray) -> int:
    """Return the number of cards left in the shoe.

    Examples:
        >>> cards_remaining(create_shoe(1))
        52
    """
    return int(shoe.sum())


def value_buckets(shoe: np.ndarray) -> np.ndarray:
    """Collapse rank counts into counts per baccarat point value (0–9).

    Ranks 10, J, Q and K all land in bucket 0.  The bucket total always
    equals the rank total.

    Examples:
        >>> buckets = value_buckets(create_shoe(1))
        >>> int(buckets[0]), int(buckets[5])
        (16, 4)
    """
    return np.bincount(_VALUE_INDEX, weights=shoe, minlength=NUM_VALUES).astype(np.int64)


def remove_card(shoe: np.ndarray, rank: int) -> None:
    """Take one card of ``rank`` out of the shoe.

    Args:
        shoe: Mutable shoe array — modified in place.
        rank: Rank (1–13) of the card seen on the table.

    Raises:
        ValueError: If no card of that rank remains.

    Examples:
        >>> shoe = create_shoe()
        >>> remove_card(shoe, 13)
        >>> int(shoe[12])
        31
    """
    check_rank(rank)
    if shoe[rank - 1] <= 0:
        raise ValueError(f"No {RANK_LABELS[rank]} left in the shoe.")
    shoe[rank - 1] -= 1


def restore_card(shoe: np.ndarray, rank: int) -> None:
    """Put one card of ``rank`` back into the shoe (undo of remove_card).

    Args:
        shoe: Mutable shoe array — modified in place.
        rank: Rank (1–13) of the card to return.
    """
    check_rank(rank)
    shoe[rank - 1] += 1


def build_shoe_from_cards(*ranks: int, n_decks: int = DEFAULT_DECKS) -> np.ndarray:
    """Create a fresh shoe with the given ranks already dealt out.

    Useful for building test states mid-shoe.

    Examples:
        >>> shoe = build_shoe_from_cards(1, 1, 13, n_decks=1)
        >>> cards_remaining(shoe)
        49
    """
    shoe = create_shoe(n_decks)
    for rank in ranks:
        remove_card(shoe, rank)
    return shoe
