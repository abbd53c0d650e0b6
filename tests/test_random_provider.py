import pytest

from duel_engine.utils.random_provider import RandomProvider


def test_same_seed_replays_the_same_draws():
    a, b = RandomProvider(42), RandomProvider(42)
    draws_a = [(a.roll_d100(), a.roll_percent(), a.coin_flip(), a.pick("xyz")) for _ in range(20)]
    draws_b = [(b.roll_d100(), b.roll_percent(), b.coin_flip(), b.pick("xyz")) for _ in range(20)]
    assert draws_a == draws_b


def test_reseed_restarts_the_stream():
    rng = RandomProvider(5)
    first = [rng.roll_d100() for _ in range(10)]
    rng.reseed(5)
    assert [rng.roll_d100() for _ in range(10)] == first
    assert rng.seed == 5


def test_roll_ranges():
    rng = RandomProvider(0)
    for _ in range(1000):
        assert 0 <= rng.roll_d100() < 100
        assert 0.0 <= rng.roll_percent() < 100.0


def test_pick_from_empty_raises():
    with pytest.raises(ValueError):
        RandomProvider(0).pick([])
