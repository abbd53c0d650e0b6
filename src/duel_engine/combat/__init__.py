"""
Combat package for the duel engine.

Contains:
- Stat blocks and the damage formula with critical hits and a strict floor of 1 damage.
- Speed-based turn order with a coin-flip tie-break.
- Luck bonus attacks, at most one per side per round.
- Round execution and the battle state machine.
- Combat logging to narrate attacks and defeats.
"""

from .actions import BASIC_ATTACK, Action
from .controller import BattleController
from .damage import DamageBreakdown, DamageCalculator, is_critical
from .log import CombatEvent, CombatLog
from .luck import LuckResolver
from .round import DamageEvent, RoundExecutor, RoundResult
from .state import BattleState, BattleStatus, Side
from .stats import StatBlock, player_stats_from_totals
from .turn_order import TurnOrder, TurnOrderResolver

__all__ = [
    "Action",
    "BASIC_ATTACK",
    "BattleController",
    "BattleState",
    "BattleStatus",
    "CombatEvent",
    "CombatLog",
    "DamageBreakdown",
    "DamageCalculator",
    "DamageEvent",
    "LuckResolver",
    "RoundExecutor",
    "RoundResult",
    "Side",
    "StatBlock",
    "TurnOrder",
    "TurnOrderResolver",
    "is_critical",
    "player_stats_from_totals",
]
