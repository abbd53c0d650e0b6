from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..utils.random_provider import RandomProvider
from .state import Side

logger = logging.getLogger(__name__)


class TurnOrder(Enum):
    PLAYER_FIRST = "player_first"
    ENEMY_FIRST = "enemy_first"

    @property
    def sides(self) -> tuple[Side, Side]:
        """(first attacker, second attacker)."""
        if self is TurnOrder.PLAYER_FIRST:
            return Side.PLAYER, Side.ENEMY
        return Side.ENEMY, Side.PLAYER


class TurnOrderResolver:
    """Speed-based attack order for a single round.

    Higher speed strikes first. An exact tie is settled by an unbiased coin
    flip. Nothing is cached: call resolve_order at the start of every round so
    speed changes between rounds take effect.
    """

    def __init__(self, rng: Optional[RandomProvider] = None) -> None:
        self.rng = rng or RandomProvider()

    def resolve_order(self, player_speed: int, enemy_speed: int) -> TurnOrder:
        if player_speed > enemy_speed:
            order = TurnOrder.PLAYER_FIRST
        elif enemy_speed > player_speed:
            order = TurnOrder.ENEMY_FIRST
        else:
            order = TurnOrder.PLAYER_FIRST if self.rng.coin_flip() else TurnOrder.ENEMY_FIRST
            logger.debug("Speed tie at %d; coin flip -> %s", player_speed, order.value)
            return order
        logger.debug("Speed %d vs %d -> %s", player_speed, enemy_speed, order.value)
        return order
