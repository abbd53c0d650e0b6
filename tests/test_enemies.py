import pytest

from duel_engine.enemies import EnemyDefinition, EnemyRoster
from duel_engine.errors import ConfigError, NotFound
from duel_engine.progression import BattleReward, Progression


def test_default_roster_loads_from_package():
    roster = EnemyRoster.load()
    assert len(roster) >= 3
    first = roster.by_index(0)
    assert first is not None
    assert first.required_level == 0
    assert first.attacks
    assert roster.by_index(999) is None


def test_roster_from_yaml_file(tmp_path):
    path = tmp_path / "enemies.yaml"
    path.write_text(
        """
enemies:
  - name: Slime
    hp: 12
    attack: 3
    defense: 1
    speed: 2
    reward_coins: 5
  - name: Wolf
    hp: 30
    attack: 8
    speed: 12
    luck: 4
    reward_coins: 25
    required_level: 1
    attacks: [Bite, Howl]
""",
        encoding="utf-8",
    )
    roster = EnemyRoster.load(path)
    assert [e.name for e in roster] == ["Slime", "Wolf"]

    wolf = roster.get("Wolf")
    assert wolf.attacks == ("Bite", "Howl")
    stats = wolf.to_stat_block()
    assert stats.max_hp == 30
    assert stats.current_hp == 30
    assert stats.speed == 12
    assert stats.luck == 4
    # Unspecified fields use definition defaults
    assert stats.defense == 5


def test_unknown_enemy_raises_not_found():
    roster = EnemyRoster([EnemyDefinition(name="Slime")])
    with pytest.raises(NotFound):
        roster.get("Dragon")


@pytest.mark.parametrize(
    "text",
    [
        "enemies: {name: Slime}",
        "enemies:\n  - hp: 10\n",
        "enemies:\n  - name: Slime\n    mana: 3\n",
        "enemies:\n  - name: Slime\n    hp: 0\n",
        "enemies: [unclosed",
    ],
)
def test_malformed_catalog_raises_config_error(text):
    with pytest.raises(ConfigError):
        EnemyRoster.from_yaml_text(text)


def test_duplicate_names_rejected():
    with pytest.raises(ConfigError):
        EnemyRoster([EnemyDefinition(name="Slime"), EnemyDefinition(name="Slime")])


@pytest.mark.parametrize("required, unlock", [(0, 0), (1, 2), (4, 5)])
def test_unlock_level_follows_required_level(required, unlock):
    assert EnemyDefinition(name="X", required_level=required).unlock_level == unlock


def test_availability_tracks_progression():
    starter = EnemyDefinition(name="Rat", required_level=0)
    bandit = EnemyDefinition(name="Bandit", required_level=1)
    knight = EnemyDefinition(name="Knight", required_level=2)
    roster = EnemyRoster([starter, bandit, knight])
    progression = Progression(unlocked_levels=set())

    assert roster.available(progression) == [starter]
    progression.unlock_level(2)
    assert roster.available(progression) == [starter, knight]
    assert roster.available(Progression()) == [starter, bandit]
    assert roster.up_to_level(1) == [starter, bandit]


def test_packaged_roster_can_be_cleared_in_order():
    roster = EnemyRoster.load()
    progression = Progression()
    beaten = []
    while len(beaten) < len(roster):
        fresh = [e for e in roster.available(progression) if e.name not in beaten]
        assert fresh, f"stuck after beating {beaten}"
        enemy = fresh[0]
        progression.settle_victory(
            BattleReward(coins=enemy.reward_coins, unlock_level=enemy.unlock_level, enemy_name=enemy.name)
        )
        beaten.append(enemy.name)
    assert beaten == [e.name for e in roster]
