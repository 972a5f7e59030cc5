"""
Shared pytest fixtures for the baccarat EV tests.

Provides convenience wrappers around shoe_from_counts for building known shoes.
"""

from __future__ import annotations

import numpy as np
import pytest

from src.engine.cards import str_to_rank
from src.engine.shoe import create_shoe, shoe_from_counts


def shoe(**labelled: int) -> np.ndarray:
    """Build a shoe from rank labels given as keywords (ten is ``T``).

    Examples:
        >>> shoe(A=6).tolist()[0]
        6
        >>> int(shoe(T=2, K=1).sum())
        3
    """
    counts: dict[int, int] = {}
    for label, count in labelled.items():
        rank = str_to_rank('10' if label == 'T' else label)
        counts[rank] = count
    return shoe_from_counts(counts)


@pytest.fixture
def full_shoe() -> np.ndarray:
    """Return a fresh 8-deck shoe."""
    return create_shoe()


@pytest.fixture
def one_deck() -> np.ndarray:
    """Return a single 52-card deck (faster to enumerate)."""
    return create_shoe(1)


@pytest.fixture
def s():
    """Expose the shoe() helper as a fixture for convenience."""
    return shoe
