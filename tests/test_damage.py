import pytest

from duel_engine.combat.damage import DamageCalculator, is_critical
from duel_engine.combat.stats import StatBlock
from duel_engine.config import BattleConfig
from duel_engine.utils.random_provider import RandomProvider


def test_plain_hit_subtracts_defense():
    calc = DamageCalculator()
    attacker = StatBlock.full(100, attack=20)
    defender = StatBlock.full(10, defense=5)
    # 20 - 5 = 15
    assert calc.compute_damage(attacker, defender, False) == 15


def test_dexterity_counts_half_twice():
    calc = DamageCalculator()
    attacker = StatBlock.full(100, attack=10, dexterity=6)
    defender = StatBlock.full(100, defense=4)
    # (10 + 3) * 1.0 - 4 + 3 = 12
    assert calc.compute_damage(attacker, defender, False) == 12


def test_critical_multiplier_uses_crit_damage():
    calc = DamageCalculator()
    attacker = StatBlock.full(100, attack=10, crit_chance=100, crit_damage=10)
    defender = StatBlock.full(100, defense=0)
    bd = calc.compute_damage_with_breakdown(attacker, defender, True)
    # 1.0 + 10/10 + 0.1 = 2.1 -> round(10 * 2.1) = 21
    assert bd.multiplier == pytest.approx(2.1)
    assert bd.critical is True
    assert bd.final == 21


def test_critical_with_zero_crit_damage_still_gets_bonus():
    calc = DamageCalculator()
    attacker = StatBlock.full(100, attack=7)
    defender = StatBlock.full(100)
    # 7 * 1.1 = 7.7 -> 8
    assert calc.compute_damage(attacker, defender, True) == 8
    assert calc.compute_damage(attacker, defender, False) == 7


def test_non_critical_ignores_crit_damage():
    calc = DamageCalculator()
    attacker = StatBlock.full(100, attack=10, crit_damage=50)
    defender = StatBlock.full(100)
    assert calc.compute_damage(attacker, defender, False) == 10


@pytest.mark.parametrize(
    "attack, dexterity, defense, critical",
    [
        (0, 0, 0, False),
        (1, 0, 999, False),
        (0, 0, 50, True),
        (5, 2, 40, True),
    ],
)
def test_min_damage_floor_is_one(attack, dexterity, defense, critical):
    calc = DamageCalculator()
    attacker = StatBlock.full(10, attack=attack, dexterity=dexterity)
    defender = StatBlock.full(10, defense=defense)
    assert calc.compute_damage(attacker, defender, critical) == 1


def test_configured_constants_change_multiplier():
    calc = DamageCalculator(BattleConfig(crit_damage_divisor=5.0, crit_bonus=0.0))
    attacker = StatBlock.full(100, attack=10, crit_damage=5)
    defender = StatBlock.full(100)
    # 1.0 + 5/5 + 0.0 = 2.0
    assert calc.compute_damage(attacker, defender, True) == 20


def test_is_critical_zero_never_hundred_always():
    rng = RandomProvider(seed=99)
    assert not any(is_critical(0, rng) for _ in range(2000))
    assert all(is_critical(100, rng) for _ in range(2000))


def test_is_critical_rate_tracks_chance():
    rng = RandomProvider(seed=7)
    trials = 20000
    hits = sum(is_critical(25, rng) for _ in range(trials))
    assert abs(hits / trials - 0.25) < 0.02
