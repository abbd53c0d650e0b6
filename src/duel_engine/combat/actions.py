from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..utils.random_provider import RandomProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """
    The attack a side uses in a round.

    Only the name is narrated; the damage formula never looks at the action.
    luck_eligible mirrors plain attacks being the only ones that may earn a
    luck bonus; every action this engine models is a plain attack.
    """

    name: str
    description: str = ""
    luck_eligible: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Action.name must be a non-empty string")


BASIC_ATTACK = Action(name="Basic Attack", description="A plain strike with the equipped weapon.")


def pick_enemy_action(attack_names: Sequence[str], rng: RandomProvider) -> Action:
    """Choose the enemy's narrated attack for a turn.

    Falls back to the basic attack when the enemy has no named attacks.
    """
    valid = [n for n in attack_names if n]
    if not valid:
        return BASIC_ATTACK
    name = rng.pick(valid)
    logger.debug("Enemy picks %s from %d attacks", name, len(valid))
    return Action(name=name)
