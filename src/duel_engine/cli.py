import argparse
import logging
from pathlib import Path

from .combat import BASIC_ATTACK, BattleController, player_stats_from_totals
from .config import BattleConfig
from .enemies import EnemyRoster
from .logging_config import configure_logging
from .progression import Progression
from .utils.random_provider import RandomProvider

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="duel",
        description="Simulate a headless duel against an enemy from the roster.",
    )
    parser.add_argument("--enemy", default=None, help="Enemy name (defaults to the first roster entry).")
    parser.add_argument("--roster", type=Path, default=None, help="Path to an enemy roster YAML file.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a battle config YAML override.")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible battle.")
    parser.add_argument("--attack", type=int, default=15, help="Player attack from equipment.")
    parser.add_argument("--defense", type=int, default=5, help="Player defense from equipment.")
    parser.add_argument("--speed", type=int, default=10, help="Player speed from equipment.")
    parser.add_argument("--max-rounds", type=int, default=500, help="Stop after N rounds.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(default_level=logging.DEBUG if args.debug else logging.INFO)

    config = BattleConfig.load(user_path=args.config)
    roster = EnemyRoster.load(args.roster)
    enemy = roster.get(args.enemy) if args.enemy else roster.by_index(0)
    if enemy is None:
        logger.error("Roster is empty; nothing to fight.")
        return 2

    progression = Progression(experience_per_level=config.experience_per_level)
    player = player_stats_from_totals(
        {"attack": args.attack, "defense": args.defense, "speed": args.speed},
        base_hp=config.base_player_hp,
    )
    controller = BattleController(rng=RandomProvider(args.seed), config=config, settlement=progression)
    controller.start_battle_against(player, enemy)
    print(f"Facing {enemy.name} (level {enemy.level}).")
    controller.submit_action(BASIC_ATTACK)

    while not controller.status.is_terminal and controller.round_number < args.max_rounds:
        controller.resolve_round()

    for message in controller.log.messages():
        print(message)
    print(f"Result: {controller.status.value} after {controller.round_number} rounds; coins={progression.coins}")
    return 0 if controller.status.is_terminal else 1
