from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from .stats import StatBlock

if TYPE_CHECKING:
    from .actions import Action


class Side(Enum):
    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def opponent(self) -> "Side":
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class BattleStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    VICTORY = "victory"
    DEFEAT = "defeat"

    @property
    def is_terminal(self) -> bool:
        return self in (BattleStatus.VICTORY, BattleStatus.DEFEAT)


@dataclass
class BattleState:
    """Mutable state of one battle, owned by BattleController.

    Attributes:
        player_stats: Player stat block; only damage mutates it.
        enemy_stats: Enemy stat block; only damage mutates it.
        round: Rounds resolved so far (incremented at the start of each round).
        status: Lifecycle status; VICTORY and DEFEAT are terminal.
        player_luck_used_this_round: Reset only at round start.
        enemy_luck_used_this_round: Reset only at round start.
        selected_action: Action confirmed for the next round, if any.
        reward_coins: Coins handed to progression on victory.
        unlock_level: Opponent tier unlocked on victory (0 = none).
        enemy_name: Used in narration and to mark the enemy defeated.
        experience_reward: Hero experience granted on victory.
        enemy_attacks: Named attacks the enemy picks from for narration.
    """

    player_stats: StatBlock
    enemy_stats: StatBlock
    round: int = 0
    status: BattleStatus = BattleStatus.NOT_STARTED
    player_luck_used_this_round: bool = False
    enemy_luck_used_this_round: bool = False
    selected_action: Optional["Action"] = None
    reward_coins: int = 0
    unlock_level: int = 0
    enemy_name: str = "Enemy"
    experience_reward: int = 0
    enemy_attacks: Tuple[str, ...] = ()
    player_name: str = field(default="Hero")

    def stats_for(self, side: Side) -> StatBlock:
        return self.player_stats if side is Side.PLAYER else self.enemy_stats

    def name_for(self, side: Side) -> str:
        return self.player_name if side is Side.PLAYER else self.enemy_name

    def luck_used(self, side: Side) -> bool:
        if side is Side.PLAYER:
            return self.player_luck_used_this_round
        return self.enemy_luck_used_this_round

    def mark_luck_used(self, side: Side) -> None:
        if side is Side.PLAYER:
            self.player_luck_used_this_round = True
        else:
            self.enemy_luck_used_this_round = True

    def reset_luck(self) -> None:
        self.player_luck_used_this_round = False
        self.enemy_luck_used_this_round = False

    def copy(self) -> "BattleState":
        """Independent copy; stat blocks are duplicated, the action is shared (immutable)."""
        return dataclasses.replace(
            self,
            player_stats=self.player_stats.copy(),
            enemy_stats=self.enemy_stats.copy(),
        )
