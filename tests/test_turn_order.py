from duel_engine.combat.state import Side
from duel_engine.combat.turn_order import TurnOrder, TurnOrderResolver
from duel_engine.utils.random_provider import RandomProvider


def test_faster_side_goes_first():
    resolver = TurnOrderResolver(RandomProvider(seed=1))
    for _ in range(100):
        assert resolver.resolve_order(10, 5) is TurnOrder.PLAYER_FIRST
        assert resolver.resolve_order(5, 10) is TurnOrder.ENEMY_FIRST


def test_tie_is_a_fair_coin_flip():
    resolver = TurnOrderResolver(RandomProvider(seed=2024))
    trials = 10000
    player_first = sum(resolver.resolve_order(7, 7) is TurnOrder.PLAYER_FIRST for _ in range(trials))
    assert 0.45 < player_first / trials < 0.55


def test_tie_is_rederived_each_call():
    resolver = TurnOrderResolver(RandomProvider(seed=5))
    outcomes = {resolver.resolve_order(3, 3) for _ in range(50)}
    assert outcomes == {TurnOrder.PLAYER_FIRST, TurnOrder.ENEMY_FIRST}


def test_order_sides():
    assert TurnOrder.PLAYER_FIRST.sides == (Side.PLAYER, Side.ENEMY)
    assert TurnOrder.ENEMY_FIRST.sides == (Side.ENEMY, Side.PLAYER)
    assert Side.PLAYER.opponent is Side.ENEMY
