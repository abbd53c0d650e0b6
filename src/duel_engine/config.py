from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DUEL_CONFIG"


@dataclass(frozen=True)
class BattleConfig:
    """
    Tunable combat constants with defaults matching the packaged
    default_config.yaml.

    You can override any subset by providing a YAML mapping with keys:
      - luck_base_chance: float (default 35)
      - crit_damage_divisor: float (default 10.0)
      - crit_bonus: float (default 0.1)
      - min_damage: int (default 1)
      - base_player_hp: int (default 100)
      - experience_per_level: int (default 100)
    """

    luck_base_chance: float = 35.0
    crit_damage_divisor: float = 10.0
    crit_bonus: float = 0.1
    min_damage: int = 1
    base_player_hp: int = 100
    experience_per_level: int = 100

    def __post_init__(self) -> None:
        if self.crit_damage_divisor <= 0:
            raise ConfigError("crit_damage_divisor must be positive")
        if self.min_damage < 1:
            raise ConfigError("min_damage must be >= 1 so battles always terminate")
        if self.base_player_hp < 1:
            raise ConfigError("base_player_hp must be >= 1")
        if self.experience_per_level < 1:
            raise ConfigError("experience_per_level must be >= 1")

    @staticmethod
    def default() -> "BattleConfig":
        return BattleConfig()

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BattleConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown battle config keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as exc:
            raise ConfigError(str(exc)) from exc

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "BattleConfig":
        """Load the packaged defaults and overlay an optional override file.

        If user_path is None, the DUEL_CONFIG environment variable is consulted.
        A missing override file is not an error; the defaults are used.
        """
        try:
            text = resources.files("duel_engine.data").joinpath("default_config.yaml").read_text(encoding="utf-8")
            default_data = yaml.safe_load(text) or {}
        except FileNotFoundError:
            logger.warning("Default battle config not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(cls())

        if user_path is None and os.getenv(CONFIG_ENV_VAR):
            user_path = Path(os.environ[CONFIG_ENV_VAR])

        user_data: Dict[str, Any] = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded battle config overrides from %s", user_path)
            else:
                logger.debug("Battle config override %s does not exist; using defaults", user_path)

        return cls.from_dict({**default_data, **user_data})
