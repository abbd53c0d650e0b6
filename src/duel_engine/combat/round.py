from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..errors import InvalidTransitionError, MissingActionError
from ..utils.random_provider import RandomProvider
from .actions import BASIC_ATTACK, Action, pick_enemy_action
from .damage import DamageCalculator, is_critical
from .log import CombatLog
from .luck import LuckResolver
from .state import BattleState, BattleStatus, Side
from .turn_order import TurnOrder, TurnOrderResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DamageEvent:
    """One landed attack within a round.

    Attributes:
        side: The attacking side.
        damage: Damage computed for the hit (>= 1).
        applied: HP actually removed (less than damage on an overkill).
        critical: Whether the critical multiplier applied.
        luck_bonus: Whether this was the side's luck bonus attack.
        target_hp_after: Defender HP once the hit settled.
        action_name: Narrated attack name.
    """

    side: Side
    damage: int
    applied: int
    critical: bool
    luck_bonus: bool
    target_hp_after: int
    action_name: str


@dataclass(frozen=True)
class RoundResult:
    """Everything a presentation layer needs to replay a round."""

    round: int
    order: TurnOrder
    events: Tuple[DamageEvent, ...]
    player_hp: int
    enemy_hp: int
    status: BattleStatus
    player_action: Action
    enemy_action: Action

    def events_for(self, side: Side) -> List[DamageEvent]:
        return [e for e in self.events if e.side is side]


class RoundExecutor:
    """Resolve one full round against a BattleState.

    Order of play:
      1. round counter +1, both luck flags cleared
      2. turn order from current speeds
      3. first attacker strikes; a kill ends the round immediately
      4. first attacker's luck bonus (at most once), kill check again
      5. second attacker repeats 3-4
    The state passed in is mutated in place; callers that need all-or-nothing
    semantics hand in a copy and commit it afterwards.
    """

    def __init__(
        self,
        rng: Optional[RandomProvider] = None,
        damage_calculator: Optional[DamageCalculator] = None,
        turn_order: Optional[TurnOrderResolver] = None,
        luck: Optional[LuckResolver] = None,
        log: Optional[CombatLog] = None,
    ) -> None:
        self.rng = rng or RandomProvider()
        self.damage_calculator = damage_calculator or DamageCalculator()
        self.turn_order = turn_order or TurnOrderResolver(self.rng)
        self.luck = luck or LuckResolver(self.rng, self.damage_calculator.config)
        self.log = log if log is not None else CombatLog()

    def execute_round(self, state: BattleState, selected_action: Optional[Action]) -> RoundResult:
        if selected_action is None:
            raise MissingActionError("No action selected for this round")
        if state.status is not BattleStatus.IN_PROGRESS:
            raise InvalidTransitionError(f"Cannot execute a round while battle is {state.status.value}")

        state.round += 1
        state.reset_luck()
        self.log.add("round", f"-- Round {state.round} --", round=state.round)

        order = self.turn_order.resolve_order(state.player_stats.speed, state.enemy_stats.speed)
        first, _ = order.sides
        self.log.add(
            "order",
            f"{state.name_for(first)} attacks first.",
            round=state.round,
            first=first.value,
        )

        enemy_action = pick_enemy_action(state.enemy_attacks, self.rng)
        actions = {Side.PLAYER: selected_action, Side.ENEMY: enemy_action}

        events: List[DamageEvent] = []
        for side in order.sides:
            if self._take_turn(state, side, actions[side], events):
                break

        logger.debug(
            "Round %d resolved: player_hp=%d enemy_hp=%d status=%s",
            state.round,
            state.player_stats.current_hp,
            state.enemy_stats.current_hp,
            state.status.value,
        )
        return RoundResult(
            round=state.round,
            order=order,
            events=tuple(events),
            player_hp=state.player_stats.current_hp,
            enemy_hp=state.enemy_stats.current_hp,
            status=state.status,
            player_action=selected_action,
            enemy_action=enemy_action,
        )

    def _take_turn(self, state: BattleState, side: Side, action: Action, events: List[DamageEvent]) -> bool:
        """Run one side's turn. Returns True when the turn ended the battle."""
        if not state.stats_for(side).alive:
            return False

        self._strike(state, side, action, False, events)
        if self._check_death(state, side):
            return True

        if not action.luck_eligible or state.luck_used(side):
            return False
        state.mark_luck_used(side)
        if not self.luck.try_luck(state.stats_for(side).luck):
            return False

        self.log.add(
            "luck",
            f"Luck! {state.name_for(side)} attacks again.",
            round=state.round,
            side=side.value,
        )
        self._strike(state, side, BASIC_ATTACK, True, events)
        return self._check_death(state, side)

    def _strike(
        self,
        state: BattleState,
        side: Side,
        action: Action,
        luck_bonus: bool,
        events: List[DamageEvent],
    ) -> None:
        attacker = state.stats_for(side)
        defender = state.stats_for(side.opponent)

        critical = is_critical(attacker.crit_chance, self.rng)
        damage = self.damage_calculator.compute_damage(attacker, defender, critical)
        before = defender.current_hp
        applied = defender.take_damage(damage)

        crit_note = " Critical hit!" if critical else ""
        self.log.add(
            "attack",
            f"{state.name_for(side)} uses {action.name}: {state.name_for(side.opponent)} takes {damage} damage "
            f"(HP {before}->{defender.current_hp}).{crit_note}",
            round=state.round,
            side=side.value,
            damage=damage,
            critical=critical,
            luck_bonus=luck_bonus,
        )
        events.append(
            DamageEvent(
                side=side,
                damage=damage,
                applied=applied,
                critical=critical,
                luck_bonus=luck_bonus,
                target_hp_after=defender.current_hp,
                action_name=action.name,
            )
        )

    def _check_death(self, state: BattleState, attacker: Side) -> bool:
        target = attacker.opponent
        if state.stats_for(target).alive:
            return False
        state.status = BattleStatus.VICTORY if attacker is Side.PLAYER else BattleStatus.DEFEAT
        self.log.add(
            "defeat",
            f"{state.name_for(target)} was defeated by {state.name_for(attacker)}.",
            round=state.round,
            defender=target.value,
        )
        return True
