from __future__ import annotations

import logging
from typing import Optional

from ..config import BattleConfig
from ..utils.random_provider import RandomProvider

logger = logging.getLogger(__name__)


class LuckResolver:
    """
    Decide whether a side earns a bonus attack.

    Probability (percent) = clamp(base + luck, 0, 100), base defaulting to 35.
    The roll is a uniform float in [0, 100). Callers must evaluate luck at most
    once per side per round; BattleState carries the flags for that.
    """

    def __init__(self, rng: Optional[RandomProvider] = None, config: Optional[BattleConfig] = None) -> None:
        self.rng = rng or RandomProvider()
        self.config = config or BattleConfig.default()

    def chance(self, luck: int) -> float:
        return max(0.0, min(100.0, self.config.luck_base_chance + luck))

    def try_luck(self, luck: int) -> bool:
        chance = self.chance(luck)
        roll = self.rng.roll_percent()
        triggered = roll < chance
        logger.debug("Luck roll: roll=%.3f chance=%.1f triggered=%s", roll, chance, triggered)
        return triggered
