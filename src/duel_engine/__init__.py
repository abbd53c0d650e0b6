"""
Duel engine core package.

Headless, synchronous combat resolution for a player-vs-enemy duel:
- Stat blocks, damage, turn order and luck rules
- Round execution and the battle state machine
- Enemy catalog loading and reward settlement into player progression

UI layers should drive BattleController and replay each RoundResult at their own pace.
"""
from .combat import (
    BASIC_ATTACK,
    Action,
    BattleController,
    BattleStatus,
    RoundResult,
    Side,
    StatBlock,
)
from .config import BattleConfig
from .enemies import EnemyDefinition, EnemyRoster
from .errors import (
    ConfigError,
    DuelError,
    InvalidTransitionError,
    MissingActionError,
    NotFound,
)
from .events import BattleLost, BattleStarted, BattleWon, EventBus, RoundResolved
from .progression import BattleReward, Progression, RewardSettlement

__all__ = [
    "Action",
    "BASIC_ATTACK",
    "BattleConfig",
    "BattleController",
    "BattleLost",
    "BattleReward",
    "BattleStarted",
    "BattleStatus",
    "BattleWon",
    "ConfigError",
    "DuelError",
    "EnemyDefinition",
    "EnemyRoster",
    "EventBus",
    "InvalidTransitionError",
    "MissingActionError",
    "NotFound",
    "Progression",
    "RewardSettlement",
    "RoundResolved",
    "RoundResult",
    "Side",
    "StatBlock",
]
