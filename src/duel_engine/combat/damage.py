from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import BattleConfig
from ..utils.random_provider import RandomProvider
from .stats import StatBlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DamageBreakdown:
    """Details of a computed damage value.

    Attributes:
        critical: Whether the critical multiplier was applied.
        multiplier: 1.0, or the critical multiplier.
        raw: (attack + dexterity / 2) * multiplier.
        effective: raw - defender defense + attacker dexterity / 2.
        final: The integer damage applied (>= min_damage).
    """

    critical: bool
    multiplier: float
    raw: float
    effective: float
    final: int


def is_critical(crit_chance: int, rng: RandomProvider) -> bool:
    """Roll one uniform integer in [0, 100); critical when below crit_chance."""
    return rng.roll_d100() < crit_chance


class DamageCalculator:
    """Compute basic attack damage from attacker and defender stat blocks.

    The formula is:
      multiplier = 1.0, or 1.0 + crit_damage / 10 + 0.1 on a critical hit
      raw = (attack + dexterity / 2) * multiplier
      effective = raw - defender.defense + attacker.dexterity / 2
      damage = max(1, round(effective))

    Notes:
    - A strict floor at 1 damage is enforced, so every battle terminates.
    - Dexterity counts twice: once scaled by the multiplier, once flat.
    - Critical determination is a separate roll (see is_critical).
    """

    def __init__(self, config: Optional[BattleConfig] = None) -> None:
        self.config = config or BattleConfig.default()

    def critical_multiplier(self, crit_damage: int) -> float:
        return 1.0 + (crit_damage / self.config.crit_damage_divisor) + self.config.crit_bonus

    def compute_damage(self, attacker: StatBlock, defender: StatBlock, critical: bool) -> int:
        """Compute final damage.

        Args:
            attacker: Stats of the attacking side.
            defender: Stats of the defending side.
            critical: Whether this attack rolled a critical hit.

        Returns:
            Final integer damage, floor at 1.
        """
        return self.compute_damage_with_breakdown(attacker, defender, critical).final

    def compute_damage_with_breakdown(
        self, attacker: StatBlock, defender: StatBlock, critical: bool
    ) -> DamageBreakdown:
        """Compute damage and return a detailed breakdown for debugging/tests."""
        multiplier = self.critical_multiplier(attacker.crit_damage) if critical else 1.0
        raw = (attacker.attack + attacker.dexterity / 2.0) * multiplier
        effective = raw - defender.defense + attacker.dexterity / 2.0
        final = max(self.config.min_damage, int(round(effective)))
        logger.debug(
            "Damage computed: critical=%s multiplier=%.3f raw=%.3f effective=%.3f => %d",
            critical,
            multiplier,
            raw,
            effective,
            final,
        )
        return DamageBreakdown(
            critical=critical,
            multiplier=multiplier,
            raw=raw,
            effective=effective,
            final=final,
        )
