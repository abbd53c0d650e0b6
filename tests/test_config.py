import logging

import pytest

from duel_engine.config import BattleConfig
from duel_engine.errors import ConfigError
from duel_engine.logging_config import configure_logging


def test_load_defaults_matches_dataclass_defaults(monkeypatch):
    monkeypatch.delenv("DUEL_CONFIG", raising=False)
    assert BattleConfig.load() == BattleConfig.default()


def test_user_override_merges_onto_defaults(tmp_path):
    path = tmp_path / "battle.yaml"
    path.write_text("luck_base_chance: 20\nbase_player_hp: 150\n", encoding="utf-8")
    cfg = BattleConfig.load(user_path=path)
    assert cfg.luck_base_chance == 20
    assert cfg.base_player_hp == 150
    assert cfg.crit_bonus == pytest.approx(0.1)


def test_missing_override_falls_back_to_defaults(tmp_path):
    assert BattleConfig.load(user_path=tmp_path / "nope.yaml") == BattleConfig.default()


def test_env_var_points_at_override(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("min_damage: 2\n", encoding="utf-8")
    monkeypatch.setenv("DUEL_CONFIG", str(path))
    assert BattleConfig.load().min_damage == 2


@pytest.mark.parametrize(
    "text",
    [
        "luck_bonus: 5\n",
        "- 1\n- 2\n",
        "min_damage: 0\n",
        "crit_damage_divisor: 0\n",
        "luck_base_chance: [oops\n",
    ],
)
def test_invalid_overrides_raise(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        BattleConfig.load(user_path=path)


def test_configure_logging_honours_env(monkeypatch):
    monkeypatch.delenv("DUEL_COMBAT_LOG_LEVEL", raising=False)
    calls = {}
    monkeypatch.setenv("DUEL_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging()
    assert calls["level"] == logging.DEBUG


def test_combat_loggers_get_their_own_level(monkeypatch):
    combat = logging.getLogger("duel_engine.combat")
    previous = combat.level
    monkeypatch.setenv("DUEL_COMBAT_LOG_LEVEL", "warning")
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: None)
    try:
        configure_logging()
        assert combat.level == logging.WARNING
    finally:
        combat.setLevel(previous)
