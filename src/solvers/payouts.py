"""
Payout tables for every baccarat wager.

Ratios are "pays N to 1": a winning 1-unit bet returns the stake plus N.
They are treated as opaque multipliers and never validated.

Banker modes:
    COMMISSION     banker wins pay ``banker`` (typically 0.95)
    NO_COMMISSION  banker wins pay 1:1, except a winning 6 which pays 1:2
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.engine.cards import NUM_VALUES


class BankerMode(Enum):
    COMMISSION = "commission"
    NO_COMMISSION = "no-commission"


@dataclass(frozen=True)
class TigerRates:
    """Tiger bet: banker wins on 6 with two or with three cards."""

    two_cards: float = 12.0
    three_cards: float = 20.0


@dataclass(frozen=True)
class TigerPairRates:
    """Tiger pair bet, by joint pair classification of the opening hands."""

    same: float = 100.0
    dual: float = 20.0
    single: float = 4.0


DEFAULT_TIE_BONUS: tuple[float, ...] = (140.0, 200.0, 210.0, 190.0, 110.0, 100.0, 40.0, 40.0, 70.0, 70.0)
"""Tie-at-point bonus ratios, indexed by point value 0–9."""


@dataclass(frozen=True)
class PayoutConfig:
    """Full payout table for one table configuration.

    Attributes:
        banker:       Banker win ratio (used in COMMISSION mode only).
        player:       Player win ratio.
        tie:          Tie ratio.
        player_pair:  Player pair ratio.
        banker_pair:  Banker pair ratio.
        tie_bonus:    Ten ratios for a tie at point value 0–9.
        tiger:        Tiger (banker wins on 6) two-/three-card ratios.
        small_tiger:  Banker wins on a two-card 6.
        big_tiger:    Banker wins on a three-card 6.
        tiger_tie:    Tie at 6.
        tiger_pair:   Tiger pair same/dual/single ratios.
        banker_mode:  COMMISSION or NO_COMMISSION.
    """

    banker: float = 1.0
    player: float = 1.0
    tie: float = 8.0
    player_pair: float = 11.0
    banker_pair: float = 11.0
    tie_bonus: tuple[float, ...] = DEFAULT_TIE_BONUS
    tiger: TigerRates = field(default_factory=TigerRates)
    small_tiger: float = 22.0
    big_tiger: float = 50.0
    tiger_tie: float = 35.0
    tiger_pair: TigerPairRates = field(default_factory=TigerPairRates)
    banker_mode: BankerMode = BankerMode.NO_COMMISSION

    def __post_init__(self) -> None:
        if len(self.tie_bonus) != NUM_VALUES:
            raise ValueError(f"tie_bonus needs {NUM_VALUES} ratios; got {len(self.tie_bonus)}.")
        object.__setattr__(self, "tie_bonus", tuple(float(r) for r in self.tie_bonus))
        if not isinstance(self.banker_mode, BankerMode):
            object.__setattr__(self, "banker_mode", BankerMode(self.banker_mode))

    def with_changes(self, **changes: Any) -> PayoutConfig:
        """Return a copy with the given fields replaced.

        Dotted names edit nested rates and ``tie_bonus_<n>`` edits one tie
        bonus, so flat form keys can be passed straight through:

            cfg.with_changes(banker=0.95, **{"tiger.two_cards": 15, "tie_bonus_3": 180})
        """
        direct: dict[str, Any] = {}
        tiger: dict[str, float] = {}
        tiger_pair: dict[str, float] = {}
        tie_bonus = list(self.tie_bonus)
        for key, value in changes.items():
            if key.startswith("tiger."):
                tiger[key.split(".", 1)[1]] = value
            elif key.startswith("tiger_pair."):
                tiger_pair[key.split(".", 1)[1]] = value
            elif key.startswith("tie_bonus_"):
                tie_bonus[int(key.rsplit("_", 1)[1])] = value
            else:
                direct[key] = value
        if tiger:
            direct["tiger"] = dataclasses.replace(self.tiger, **tiger)
        if tiger_pair:
            direct["tiger_pair"] = dataclasses.replace(self.tiger_pair, **tiger_pair)
        if "tie_bonus" not in direct:
            direct["tie_bonus"] = tuple(tie_bonus)
        return dataclasses.replace(self, **direct)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PayoutConfig:
        """Build a config from a nested mapping; missing keys keep their defaults.

        Examples:
            >>> PayoutConfig.from_dict({"banker": 0.95, "banker_mode": "commission"}).banker_mode
            <BankerMode.COMMISSION: 'commission'>
        """
        fields = dict(data)
        if isinstance(fields.get("tiger"), Mapping):
            fields["tiger"] = TigerRates(**fields["tiger"])
        if isinstance(fields.get("tiger_pair"), Mapping):
            fields["tiger_pair"] = TigerPairRates(**fields["tiger_pair"])
        if isinstance(fields.get("tie_bonus"), Mapping):
            bonus = fields["tie_bonus"]
            fields["tie_bonus"] = tuple(
                bonus.get(i, bonus.get(str(i), DEFAULT_TIE_BONUS[i])) for i in range(NUM_VALUES)
            )
        return cls(**fields)


DEFAULT_PAYOUTS: PayoutConfig = PayoutConfig()
"""No-commission table with the house's standard side-bet ratios."""

DEFAULT_TABLE_PAYOUTS: PayoutConfig = PayoutConfig(banker=0.95, banker_mode=BankerMode.COMMISSION)
"""Start-up table for the advisor: commission banker at 0.95."""
