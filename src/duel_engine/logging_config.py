import logging
import os

LOG_LEVEL_ENV_VAR = "DUEL_LOG_LEVEL"
COMBAT_LOG_LEVEL_ENV_VAR = "DUEL_COMBAT_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def _level_from_env(var: str, default: int) -> int:
    name = os.getenv(var)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(default_level: int = logging.INFO) -> None:
    """Configure the root logger for duel runs.

    DUEL_LOG_LEVEL overrides the root level. DUEL_COMBAT_LOG_LEVEL tunes the
    ``duel_engine.combat`` loggers on their own, e.g. DEBUG to see every
    damage breakdown while the rest stays at INFO.
    """
    logging.basicConfig(level=_level_from_env(LOG_LEVEL_ENV_VAR, default_level), format=LOG_FORMAT)
    combat_level = _level_from_env(COMBAT_LOG_LEVEL_ENV_VAR, logging.NOTSET)
    if combat_level != logging.NOTSET:
        logging.getLogger("duel_engine.combat").setLevel(combat_level)
