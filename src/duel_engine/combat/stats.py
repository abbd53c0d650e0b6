from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config import BattleConfig

logger = logging.getLogger(__name__)

_INT_FIELDS = (
    "max_hp",
    "current_hp",
    "attack",
    "defense",
    "speed",
    "crit_chance",
    "crit_damage",
    "luck",
    "dexterity",
)


@dataclass
class StatBlock:
    """Numeric profile of a combatant for the duration of a battle.

    Attributes:
        max_hp: Maximum hit points (must be >= 1).
        current_hp: Current hit points (clamped to [0, max_hp]).
        attack: Attack power.
        defense: Flat damage reduction.
        speed: Higher speed strikes first each round.
        crit_chance: Percent chance (0-100) that an attack is critical.
        crit_damage: Critical bonus in tenths of a multiplier.
        luck: Added to the base luck chance for bonus attacks.
        dexterity: Adds half its value twice to each attack.
    """

    max_hp: int
    current_hp: int
    attack: int = 0
    defense: int = 0
    speed: int = 0
    crit_chance: int = 0
    crit_damage: int = 0
    luck: int = 0
    dexterity: int = 0

    def __post_init__(self) -> None:
        try:
            for name in _INT_FIELDS:
                setattr(self, name, int(getattr(self, name)))
        except (TypeError, ValueError) as exc:
            raise ValueError("StatBlock numeric fields must be integers") from exc
        if self.max_hp <= 0:
            raise ValueError("max_hp must be >= 1")
        if self.crit_chance < 0 or self.crit_chance > 100:
            logger.warning("crit_chance %s outside 0-100; clamping.", self.crit_chance)
            self.crit_chance = max(0, min(100, self.crit_chance))
        # Clamp HP within [0, max_hp]
        self.current_hp = max(0, min(self.max_hp, self.current_hp))

    @classmethod
    def full(cls, max_hp: int, **stats: int) -> "StatBlock":
        """Build a block at full health."""
        return cls(max_hp=max_hp, current_hp=max_hp, **stats)

    @property
    def alive(self) -> bool:
        return self.current_hp > 0

    def take_damage(self, amount: int) -> int:
        """Apply damage, clamping HP to zero.

        Returns:
            The damage actually removed (may be less than amount if HP was low).
        """
        try:
            dmg = int(amount)
        except (TypeError, ValueError) as exc:
            raise ValueError("damage must be an integer") from exc
        if dmg < 0:
            raise ValueError("damage must be non-negative")

        before = self.current_hp
        self.current_hp = max(0, self.current_hp - dmg)
        return before - self.current_hp

    def copy(self) -> "StatBlock":
        return dataclasses.replace(self)


def player_stats_from_totals(
    totals: Mapping[str, Any],
    base_hp: Optional[int] = None,
) -> StatBlock:
    """Build the player's block from aggregated equipment totals.

    The player starts from a base HP pool (100 unless configured otherwise) and
    adds the equipment's hp bonus; every other stat comes from the totals as-is.
    Missing keys count as zero. Unknown keys are ignored.
    """
    if base_hp is None:
        base_hp = BattleConfig.default().base_player_hp
    max_hp = int(base_hp) + int(totals.get("hp", 0))
    return StatBlock.full(
        max_hp,
        attack=totals.get("attack", 0),
        defense=totals.get("defense", 0),
        speed=totals.get("speed", 0),
        crit_chance=totals.get("crit_chance", 0),
        crit_damage=totals.get("crit_damage", 0),
        luck=totals.get("luck", 0),
        dexterity=totals.get("dexterity", 0),
    )
