"""
Live shoe tracker: records cards seen on the table against a physical shoe.

Wraps a shoe array with the card history the table operator sees (most recent
first, capped at HISTORY_LIMIT entries) and hand separators.  The tracker is
the only thing that mutates the live shoe; the EV engine is always handed an
independent ``snapshot()``.
"""

from __future__ import annotations

import logging

import numpy as np

from .cards import KEY_RANKS, RANK_LABELS, check_rank
from .shoe import (
    CARDS_PER_RANK_PER_DECK,
    DEFAULT_DECKS,
    cards_remaining,
    create_shoe,
    remove_card,
    restore_card,
)

logger = logging.getLogger(__name__)

HISTORY_LIMIT: int = 100
SEPARATOR: str = '|'
SEPARATOR_KEYS: frozenset[str] = frozenset({'Enter', '\n', '\r'})


class ShoeTracker:
    """Remaining-card inventory plus the operator's card history.

    Attributes:
        n_decks: Number of decks in a full shoe.
        shoe:    Live rank counts (numpy int64, length 13).
        history: Recorded labels, most recent first.  SEPARATOR marks a hand break.
    """

    def __init__(self, n_decks: int = DEFAULT_DECKS) -> None:
        self.n_decks = n_decks
        self.shoe = create_shoe(n_decks)
        self.history: list[str] = []
        self._recorded: list[int] = []

    @property
    def full_count(self) -> int:
        return self.n_decks * CARDS_PER_RANK_PER_DECK

    @property
    def total(self) -> int:
        return cards_remaining(self.shoe)

    def count(self, rank: int) -> int:
        check_rank(rank)
        return int(self.shoe[rank - 1])

    def snapshot(self) -> np.ndarray:
        """Return an independent copy of the current rank counts."""
        return self.shoe.copy()

    def _push(self, label: str) -> None:
        self.history.insert(0, label)
        del self.history[HISTORY_LIMIT:]

    def record(self, rank: int) -> bool:
        """Record one card of ``rank`` leaving the shoe.

        Returns:
            False (and changes nothing) if that rank is already exhausted.
        """
        if self.count(rank) <= 0:
            return False
        remove_card(self.shoe, rank)
        self._recorded.append(rank)
        self._push(RANK_LABELS[rank])
        return True

    def unrecord(self, rank: int) -> bool:
        """Return one card of ``rank`` to the shoe, dropping its newest history entry.

        Returns:
            False if the rank is already at its full-shoe count.
        """
        if self.count(rank) >= self.full_count:
            return False
        restore_card(self.shoe, rank)
        label = RANK_LABELS[rank]
        if label in self.history:
            self.history.remove(label)
        for i in range(len(self._recorded) - 1, -1, -1):
            if self._recorded[i] == rank:
                del self._recorded[i]
                break
        return True

    def undo(self) -> int:
        """Put back the most recently recorded card and return its rank.

        Raises:
            ValueError: If nothing has been recorded.
        """
        if not self._recorded:
            raise ValueError("No recorded card to undo.")
        rank = self._recorded[-1]
        self.unrecord(rank)
        return rank

    def separator(self) -> None:
        """Mark a hand break in the history."""
        self._push(SEPARATOR)

    def clear_history(self) -> None:
        self.history.clear()

    def reset(self) -> None:
        """Start a new shoe: full counts, empty history."""
        self.shoe = create_shoe(self.n_decks)
        self.history.clear()
        self._recorded.clear()
        logger.info("Shoe reset to %d decks (%d cards)", self.n_decks, self.total)

    def record_key(self, key: str) -> bool:
        """Apply a single keystroke from the table-side keyboard.

        '1'–'9' record ranks 1–9, '0' records a ten, J/Q/K (any case) record
        face cards, Enter adds a separator.  Any other key is ignored.

        Returns:
            True if the key changed the shoe or the history.
        """
        if key in SEPARATOR_KEYS:
            self.separator()
            return True
        rank = KEY_RANKS.get(key.lower())
        if rank is None:
            return False
        return self.record(rank)
