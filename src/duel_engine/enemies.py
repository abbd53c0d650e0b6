from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from .combat.stats import StatBlock
from .errors import ConfigError, NotFound
from .progression import Progression

logger = logging.getLogger(__name__)

_STAT_KEYS = ("attack", "defense", "speed", "crit_chance", "crit_damage", "luck", "dexterity")


@dataclass(frozen=True)
class EnemyDefinition:
    """Static description of an opponent as authored in the enemy catalog."""

    name: str
    hp: int = 100
    attack: int = 10
    defense: int = 5
    speed: int = 10
    crit_chance: int = 0
    crit_damage: int = 0
    luck: int = 0
    dexterity: int = 0
    reward_coins: int = 50
    experience_reward: int = 10
    required_level: int = 0
    level: int = 1
    attacks: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def unlock_level(self) -> int:
        """Tier unlocked by beating this enemy; 0 for always-available enemies."""
        return self.required_level + 1 if self.required_level > 0 else 0

    def to_stat_block(self) -> StatBlock:
        return StatBlock.full(self.hp, **{k: getattr(self, k) for k in _STAT_KEYS})

    def is_available(self, progression: Progression) -> bool:
        return self.required_level == 0 or progression.is_level_unlocked(self.required_level)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "EnemyDefinition":
        if not isinstance(raw, dict):
            raise ConfigError(f"Enemy entry must be a mapping, got {type(raw).__name__}")
        name = raw.get("name")
        if not name:
            raise ConfigError("Enemy entry is missing a name")
        data = dict(raw)
        data["attacks"] = tuple(str(a) for a in (data.get("attacks") or ()))
        try:
            enemy = cls(**data)
        except TypeError as exc:
            raise ConfigError(f"Invalid enemy entry '{name}': {exc}") from exc
        if enemy.hp <= 0:
            raise ConfigError(f"Enemy '{name}' must have hp >= 1")
        return enemy


class EnemyRoster:
    """Catalog of enemies keyed by name, in authoring order."""

    def __init__(self, enemies: Iterable[EnemyDefinition] = ()) -> None:
        self._enemies: List[EnemyDefinition] = []
        self._by_name: Dict[str, EnemyDefinition] = {}
        for enemy in enemies:
            if enemy.name in self._by_name:
                raise ConfigError(f"Duplicate enemy name: {enemy.name}")
            self._enemies.append(enemy)
            self._by_name[enemy.name] = enemy

    def __len__(self) -> int:
        return len(self._enemies)

    def __iter__(self):
        return iter(self._enemies)

    def get(self, name: str) -> EnemyDefinition:
        try:
            return self._by_name[name]
        except KeyError:
            raise NotFound(f"Unknown enemy: {name}") from None

    def by_index(self, index: int) -> Optional[EnemyDefinition]:
        if 0 <= index < len(self._enemies):
            return self._enemies[index]
        return None

    def up_to_level(self, level: int) -> List[EnemyDefinition]:
        return [e for e in self._enemies if e.required_level <= level]

    def available(self, progression: Progression) -> List[EnemyDefinition]:
        return [e for e in self._enemies if e.is_available(progression)]

    @classmethod
    def from_yaml_text(cls, text: str) -> "EnemyRoster":
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid enemy catalog YAML: {exc}") from exc
        entries = raw.get("enemies", []) if isinstance(raw, dict) else raw
        if not isinstance(entries, list):
            raise ConfigError("Enemy catalog must be a list or a mapping with an 'enemies' list")
        return cls(EnemyDefinition.from_dict(e) for e in entries)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "EnemyRoster":
        """Load enemies from YAML.

        If path is None, loads the packaged default roster.
        """
        if path is None:
            text = resources.files("duel_engine.data").joinpath("enemies.yaml").read_text(encoding="utf-8")
            logger.debug("Loaded embedded enemy roster")
        else:
            text = Path(path).read_text(encoding="utf-8")
            logger.debug("Loaded enemy roster from path: %s", path)
        roster = cls.from_yaml_text(text)
        logger.info("Enemy roster ready with %d enemies", len(roster))
        return roster
