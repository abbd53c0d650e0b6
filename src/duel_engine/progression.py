from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Set

logger = logging.getLogger(__name__)

# First gated enemy tier; a new profile starts with it open since beating an
# ungated enemy unlocks nothing.
STARTING_UNLOCKED_LEVEL = 1


@dataclass(frozen=True)
class BattleReward:
    """What a won battle hands to progression."""

    coins: int
    unlock_level: int = 0
    enemy_name: str = ""
    experience: int = 0


class RewardSettlement(Protocol):
    """Collaborator that turns battle outcomes into persistent progress.

    settle_victory is called exactly once per won battle; record_defeat exactly
    once per lost battle. Nothing is handed over on defeat besides the tally.
    """

    def settle_victory(self, reward: BattleReward) -> None:  # pragma: no cover - protocol
        ...

    def record_defeat(self, enemy_name: str) -> None:  # pragma: no cover - protocol
        ...


@dataclass
class Progression:
    """In-memory player progress: coins, unlocked enemy tiers, hero level and fight tallies.

    Saving and loading are left to the persistence layer; this model only
    applies outcomes.
    """

    coins: int = 0
    hero_level: int = 1
    hero_experience: int = 0
    experience_per_level: int = 100
    unlocked_levels: Set[int] = field(default_factory=lambda: {STARTING_UNLOCKED_LEVEL})
    defeated_enemies: List[str] = field(default_factory=list)
    total_clashes: int = 0
    total_won_fights: int = 0
    total_lost_fights: int = 0

    def __post_init__(self) -> None:
        if self.coins < 0:
            raise ValueError("Initial coins cannot be negative")
        if self.hero_level < 1:
            raise ValueError("hero_level must be >= 1")
        if self.experience_per_level < 1:
            raise ValueError("experience_per_level must be >= 1")

    def add_coins(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Amount to add cannot be negative")
        self.coins += amount
        logger.debug("Added %d coins (total: %d)", amount, self.coins)

    def unlock_level(self, level: int) -> None:
        if level <= 0 or level in self.unlocked_levels:
            return
        self.unlocked_levels.add(level)
        logger.info("Enemy level %d unlocked.", level)

    def is_level_unlocked(self, level: int) -> bool:
        # Level 0 is always available.
        return level == 0 or level in self.unlocked_levels

    def mark_enemy_defeated(self, enemy_name: str) -> None:
        if enemy_name and enemy_name not in self.defeated_enemies:
            self.defeated_enemies.append(enemy_name)
            logger.debug("Enemy '%s' marked as defeated.", enemy_name)

    def is_enemy_defeated(self, enemy_name: str) -> bool:
        return bool(enemy_name) and enemy_name in self.defeated_enemies

    def experience_for_next_level(self) -> int:
        return self.hero_level * self.experience_per_level

    def add_experience(self, amount: int) -> int:
        """Add hero experience, levelling up while enough has accrued.

        Returns:
            Number of levels gained.
        """
        if amount < 0:
            raise ValueError("Experience cannot be negative")
        self.hero_experience += amount
        gained = 0
        while self.hero_experience >= self.experience_for_next_level():
            self.hero_experience -= self.experience_for_next_level()
            self.hero_level += 1
            gained += 1
            logger.info("Hero reached level %d!", self.hero_level)
        return gained

    def settle_victory(self, reward: BattleReward) -> None:
        self.add_coins(reward.coins)
        self.mark_enemy_defeated(reward.enemy_name)
        if reward.experience > 0:
            self.add_experience(reward.experience)
        self.total_clashes += 1
        self.total_won_fights += 1
        self.unlock_level(reward.unlock_level)

    def record_defeat(self, enemy_name: str) -> None:
        self.total_clashes += 1
        self.total_lost_fights += 1
        logger.debug("Recorded defeat against '%s'", enemy_name)
