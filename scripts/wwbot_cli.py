#!/usr/bin/env python3
"""Command-line interface for wwbot."""

import argparse
import asyncio
import sys
from pathlib import Path

import yaml

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wwbot.chat import ChatUser, ConsoleMember, LocalChannel, LocalGuild, RandomMember
from wwbot.core.exceptions import ConfigurationError
from wwbot.core.utils import format_duration, seed_everything
from wwbot.evaluation import GameMetrics, summarize
from wwbot.game import Game, GameConfig
from wwbot.logging import GameLogger

DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "werewolf.yaml"
DEFAULT_PLAYERS = 7
BOT_NAMES = [
    "Ada", "Basil", "Cora", "Dmitri", "Elsa", "Felix", "Greta", "Hugo", "Iris", "Jonas",
    "Kira", "Lev", "Mila", "Nico", "Olga", "Pavel", "Quinn", "Rosa", "Sven", "Tess",
]


def load_settings(config_path, overrides=None):
    """Load game configuration and logging settings from YAML.

    Args:
        config_path: YAML file (missing file means defaults)
        overrides: Dict of game config overrides

    Returns:
        Tuple of (GameConfig, logging_settings)
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return GameConfig.from_dict(overrides or {}), {}

    config = GameConfig.from_yaml(config_path, overrides)
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    logging_settings = raw.get("logging") or {}
    if not isinstance(logging_settings, dict):
        raise ConfigurationError(f"The logging section of {config_path} must be a mapping")
    return config, logging_settings


def build_table(num_players, seed=None, human=None, echo=False):
    """Create a local guild with bot members and an optional human seat.

    Returns:
        Tuple of (channel, users)
    """
    if num_players > len(BOT_NAMES):
        raise ConfigurationError(f"At most {len(BOT_NAMES)} local players are available")

    guild = LocalGuild("local")
    users = []
    for i in range(num_players):
        if human and i == 0:
            user = ChatUser(id="human", name=human)
            guild.add_member(ConsoleMember(user, guild))
        else:
            user = ChatUser(id=f"bot{i}", name=BOT_NAMES[i])
            member_seed = None if seed is None else seed + i
            guild.add_member(RandomMember(user, guild, seed=member_seed))
        users.append(user)

    return LocalChannel(guild, "werewolf", echo=echo), users


async def run_game(config, num_players, logger=None, human=None, echo=False):
    """Set up a local table, fill the lobby and play one game."""
    channel, users = build_table(num_players, seed=config.seed, human=human, echo=echo)
    game = Game(channel, config=config, logger=logger)
    for user in users:
        game.join(user)
    return await game.play()


def cmd_play(args):
    """Play a single game."""
    overrides = {"seed": args.seed} if args.seed is not None else {}
    try:
        config, logging_settings = load_settings(args.config, overrides)
    except ConfigurationError as e:
        print(f"Error loading config: {e}")
        return 1

    if config.seed is not None:
        seed_everything(config.seed)

    output_dir = Path(args.log_dir or logging_settings.get("output_dir") or "logs")
    logger = GameLogger(output_dir=output_dir, log_private=logging_settings.get("log_private", True))

    print(f"\nPlaying Werewolf with {args.players} players")
    print("=" * 70)

    try:
        result = asyncio.run(run_game(config, args.players, logger, human=args.human, echo=True))
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
        return 130

    print("\n" + "=" * 70)
    print("GAME OVER")
    print("=" * 70)
    print(f"Winner: {result.winner or 'Tie/Timeout'}")
    print(f"Reason: {result.win_reason}")
    print(f"Rounds: {result.num_rounds}")
    print(f"Duration: {format_duration(result.duration_seconds)}")
    summary = logger.summary()
    print(f"Records: {summary['records']} ({summary['private_records']} private)")
    for event, count in sorted(summary["events"].items()):
        print(f"  • {event:<18} {count}")
    if summary["eliminated"]:
        print(f"Eliminated, in order: {', '.join(summary['eliminated'])}")
    print(f"\nLog saved to: {logger.log_file}")

    if args.export:
        written = logger.export(args.export, include_private=args.include_private)
        print(f"Exported {written} records to {args.export}")
    return 0


def cmd_simulate(args):
    """Play many bot-only games and print a summary table."""
    overrides = {"seed": args.seed} if args.seed is not None else {}
    try:
        base_config, _ = load_settings(args.config, overrides)
    except ConfigurationError as e:
        print(f"Error loading config: {e}")
        return 1

    metrics = GameMetrics()
    results = []
    for i in range(args.games):
        config = GameConfig.from_dict(base_config.to_dict())
        if config.seed is not None:
            config.seed += i
        try:
            result = asyncio.run(run_game(config, args.players))
        except ConfigurationError as e:
            print(f"Error: {e}")
            return 1
        metrics.update(result)
        results.append(result)

    print(f"\nSimulated {metrics.games_played} games with {args.players} players")
    print("=" * 70)
    for team, rate in metrics.to_dict()["win_rates"].items():
        print(f"  • {team:<12} win rate: {rate:.1%}")
    print(f"  • draws: {metrics.draws}")
    print(f"  • average length: {metrics.average_game_length:.2f} rounds\n")
    print(summarize(results).to_string(index=False))
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="wwbot - Werewolf over chat",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    parser_play = subparsers.add_parser("play", help="Play a single game")
    parser_play.add_argument("--players", type=int, default=DEFAULT_PLAYERS,
                             help=f"Number of players (default: {DEFAULT_PLAYERS})")
    parser_play.add_argument("--seed", type=int, help="Random seed")
    parser_play.add_argument("--config", default=str(DEFAULT_CONFIG),
                             help="YAML configuration file")
    parser_play.add_argument("--log-dir", help="Output directory for logs")
    parser_play.add_argument("--human", metavar="NAME",
                             help="Take a seat yourself and answer on stdin")
    parser_play.add_argument("--export", metavar="FILE",
                             help="Also write the game log as a single JSON document")
    parser_play.add_argument("--include-private", action="store_true",
                             help="Keep roles and night actions in the export")
    parser_play.set_defaults(func=cmd_play)

    parser_sim = subparsers.add_parser("simulate", help="Play many bot-only games")
    parser_sim.add_argument("--games", type=int, default=20, help="Number of games (default: 20)")
    parser_sim.add_argument("--players", type=int, default=DEFAULT_PLAYERS,
                            help=f"Number of players (default: {DEFAULT_PLAYERS})")
    parser_sim.add_argument("--seed", type=int, help="Base random seed")
    parser_sim.add_argument("--config", default=str(DEFAULT_CONFIG),
                            help="YAML configuration file")
    parser_sim.set_defaults(func=cmd_simulate)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
