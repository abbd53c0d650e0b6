from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..config import BattleConfig
from ..errors import InvalidTransitionError, MissingActionError
from ..events import BattleLost, BattleStarted, BattleWon, EventBus, RoundResolved
from ..progression import BattleReward, RewardSettlement
from ..utils.random_provider import RandomProvider
from .actions import Action
from .damage import DamageCalculator
from .log import CombatLog
from .round import RoundExecutor, RoundResult
from .state import BattleState, BattleStatus
from .stats import StatBlock

if TYPE_CHECKING:
    from ..enemies import EnemyDefinition

logger = logging.getLogger(__name__)


class BattleController:
    """State machine for a single player-vs-enemy battle.

    NOT_STARTED -> IN_PROGRESS -> VICTORY | DEFEAT

    The flow mirrors a two-step UI: submit_action() stores the chosen attack,
    resolve_round() confirms it and plays out a whole round. The chosen action
    stays selected for later rounds until another one is submitted.

    Mutating calls from the wrong state raise InvalidTransitionError and leave
    the battle untouched. Rounds are resolved on a copy of the state which is
    only committed once the round completes.

    A controller runs exactly one battle; start a new one with a new controller.
    """

    def __init__(
        self,
        *,
        rng: Optional[RandomProvider] = None,
        config: Optional[BattleConfig] = None,
        settlement: Optional[RewardSettlement] = None,
        event_bus: Optional[EventBus] = None,
        log: Optional[CombatLog] = None,
        executor: Optional[RoundExecutor] = None,
    ) -> None:
        if executor is not None:
            if rng is not None or config is not None:
                raise ValueError("Pass rng and config to the injected RoundExecutor, not to the controller")
            if log is not None and log is not executor.log:
                raise ValueError("An injected RoundExecutor must share the controller's CombatLog")
            self.executor = executor
        else:
            self.executor = RoundExecutor(
                rng=rng or RandomProvider(),
                damage_calculator=DamageCalculator(config or BattleConfig.default()),
                log=log if log is not None else CombatLog(),
            )
        self.log = self.executor.log
        self.settlement = settlement
        self.event_bus = event_bus or EventBus()
        self.history: List[RoundResult] = []
        self._state: Optional[BattleState] = None

    # --------------- Queries ---------------

    @property
    def status(self) -> BattleStatus:
        return self._state.status if self._state else BattleStatus.NOT_STARTED

    @property
    def round_number(self) -> int:
        return self._state.round if self._state else 0

    @property
    def player_hp(self) -> int:
        return self._state.player_stats.current_hp if self._state else 0

    @property
    def enemy_hp(self) -> int:
        return self._state.enemy_stats.current_hp if self._state else 0

    @property
    def selected_action(self) -> Optional[Action]:
        return self._state.selected_action if self._state else None

    @property
    def state(self) -> Optional[BattleState]:
        """A detached snapshot of the battle state (None before start)."""
        return self._state.copy() if self._state else None

    def get_status(self) -> BattleStatus:
        return self.status

    def get_round_number(self) -> int:
        return self.round_number

    def get_player_hp(self) -> int:
        return self.player_hp

    def get_enemy_hp(self) -> int:
        return self.enemy_hp

    # --------------- Transitions ---------------

    def start_battle(
        self,
        player_stats: StatBlock,
        enemy_stats: StatBlock,
        reward_coins: int,
        unlock_level: int,
        *,
        enemy_name: str = "Enemy",
        experience_reward: int = 0,
        enemy_attacks: Sequence[str] = (),
    ) -> None:
        if self._state is not None:
            raise InvalidTransitionError(
                f"start_battle is only valid before the battle starts (status: {self.status.value})"
            )
        if reward_coins < 0 or experience_reward < 0:
            raise ValueError("Rewards cannot be negative")
        self._state = BattleState(
            player_stats=player_stats.copy(),
            enemy_stats=enemy_stats.copy(),
            status=BattleStatus.IN_PROGRESS,
            reward_coins=int(reward_coins),
            unlock_level=int(unlock_level),
            enemy_name=enemy_name,
            experience_reward=int(experience_reward),
            enemy_attacks=tuple(enemy_attacks),
        )
        logger.info(
            "Battle started against %s (player HP %d, enemy HP %d)",
            enemy_name,
            self._state.player_stats.current_hp,
            self._state.enemy_stats.current_hp,
        )
        self.event_bus.emit(
            BattleStarted(
                enemy_name=enemy_name,
                player_hp=self._state.player_stats.current_hp,
                enemy_hp=self._state.enemy_stats.current_hp,
            )
        )

    def start_battle_against(self, player_stats: StatBlock, enemy: "EnemyDefinition") -> None:
        """Start a battle using an enemy definition's stats and rewards."""
        self.start_battle(
            player_stats,
            enemy.to_stat_block(),
            enemy.reward_coins,
            enemy.unlock_level,
            enemy_name=enemy.name,
            experience_reward=enemy.experience_reward,
            enemy_attacks=enemy.attacks,
        )

    def submit_action(self, action: Optional[Action]) -> None:
        state = self._require_in_progress("submit_action")
        if action is None:
            raise MissingActionError("An action must be selected")
        state.selected_action = action
        logger.debug("Action selected: %s", action.name)

    def resolve_round(self) -> RoundResult:
        """Play out one round with the selected action.

        On a terminal round the reward is settled (or the loss recorded) before
        RoundResolved and then BattleWon or BattleLost are published.
        """
        state = self._require_in_progress("resolve_round")
        if state.selected_action is None:
            raise MissingActionError("No action selected; choose an attack before resolving the round")

        working = state.copy()
        result = self.executor.execute_round(working, working.selected_action)
        self._state = working
        self.history.append(result)

        # Outcomes are settled before any subscriber sees the round.
        outcome = None
        if result.status is BattleStatus.VICTORY:
            outcome = self._on_victory(working)
        elif result.status is BattleStatus.DEFEAT:
            outcome = self._on_defeat(working)

        self.event_bus.emit(RoundResolved(result=result))
        if outcome is not None:
            self.event_bus.emit(outcome)
        return result

    # --------------- Internal helpers ---------------

    def _require_in_progress(self, operation: str) -> BattleState:
        if self._state is None or self._state.status is not BattleStatus.IN_PROGRESS:
            raise InvalidTransitionError(
                f"{operation} is only valid while the battle is in progress (status: {self.status.value})"
            )
        return self._state

    def _on_victory(self, state: BattleState) -> BattleWon:
        reward = BattleReward(
            coins=state.reward_coins,
            unlock_level=state.unlock_level,
            enemy_name=state.enemy_name,
            experience=state.experience_reward,
        )
        self.log.add(
            "victory",
            f"{state.player_name} wins and earns {reward.coins} coins.",
            round=state.round,
        )
        if self.settlement is not None:
            self.settlement.settle_victory(reward)
        return BattleWon(reward=reward, rounds=state.round)

    def _on_defeat(self, state: BattleState) -> BattleLost:
        self.log.add("defeat", f"{state.enemy_name} wins.", round=state.round)
        if self.settlement is not None:
            self.settlement.record_defeat(state.enemy_name)
        return BattleLost(enemy_name=state.enemy_name, rounds=state.round)
