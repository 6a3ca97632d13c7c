"""Voxel Dungeon CLI entry point.

Generates a dungeon layout from flags and environment variables and prints a
summary banner or the full layout as JSON. Accepts an optional .env file.

Run `python run.py --help` for details.
"""

import argparse
import json
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from voxel_dungeon import __version__
from voxel_dungeon.dungeon import ConfigError, DungeonConfig, DungeonError, DungeonOrchestrator
from voxel_dungeon.logging_utils import get_logger, set_level

log = get_logger("voxel_dungeon.cli")


def _color_enabled(stream=None) -> bool:
    stream = stream or sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _add_config_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--grid-size", dest="grid_size", type=int, default=None, help="Lattice edge length in cells")
    p.add_argument("--cell-size", dest="cell_size", type=float, default=None, help="World units per cell")
    p.add_argument("--min-rooms", dest="min_rooms", type=int, default=None, help="Lower bound of room target")
    p.add_argument("--max-rooms", dest="max_rooms", type=int, default=None, help="Upper bound of room target")
    p.add_argument("--enemy-chance", dest="enemy_spawn_chance", type=float, default=None, help="Per-room enemy probability")
    p.add_argument(
        "--treasure-chance", dest="treasure_spawn_chance", type=float, default=None, help="Per-room treasure probability"
    )
    p.add_argument(
        "--no-barriers",
        dest="enable_room_barriers",
        action="store_const",
        const=False,
        default=None,
        help="Skip room boundary barriers",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible layouts")


def parse_args(argv: list[str]) -> argparse.Namespace:
    epilog = dedent(
        """
        Environment variables (overridden by flags):
          DUNGEON_GRID_SIZE, DUNGEON_CELL_SIZE, DUNGEON_MIN_ROOMS, DUNGEON_MAX_ROOMS,
          DUNGEON_ENEMY_SPAWN_CHANCE, DUNGEON_TREASURE_SPAWN_CHANCE,
          DUNGEON_ENABLE_ROOM_BARRIERS, DUNGEON_SEED
          VOXEL_DUNGEON_LOG_LEVEL   debug|info|warn|error (default: info)
          VOXEL_DUNGEON_LOG_JSON    1 to emit JSON log lines

        Examples:
          # Generate with defaults and print a summary
          python run.py generate

          # Reproducible 7x7x7 dungeon dumped as JSON
          python run.py generate --grid-size 7 --seed 42 --json

          # Validate the effective configuration from a .env file
          python run.py --env-file .env check-config
        """
    )
    parser = argparse.ArgumentParser(
        prog="voxel-dungeon",
        description="Procedural 3D dungeon layout generator",
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Path to a .env file to load before processing flags")
    parser.add_argument("--log-level", dest="log_level", choices=["debug", "info", "warn", "error"], default=None)
    parser.add_argument("--version", action="version", version=f"Voxel Dungeon {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    gen = subparsers.add_parser(
        "generate",
        help="Generate a dungeon layout",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the full generation pipeline once",
    )
    _add_config_flags(gen)
    gen.add_argument("--json", action="store_true", help="Print the full layout as JSON")
    gen.set_defaults(command="generate")

    chk = subparsers.add_parser(
        "check-config",
        help="Validate and print the effective configuration",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _add_config_flags(chk)
    chk.set_defaults(command="check-config")

    if len(argv) == 0:
        argv = ["generate"]
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> DungeonConfig:
    overrides = {
        name: getattr(args, name, None)
        for name in (
            "grid_size",
            "cell_size",
            "min_rooms",
            "max_rooms",
            "enemy_spawn_chance",
            "treasure_spawn_chance",
            "enable_room_barriers",
            "seed",
        )
    }
    return DungeonConfig.from_env(**overrides)


def _print_summary(orch: DungeonOrchestrator, color: bool) -> None:
    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}Voxel Dungeon{Style.RESET_ALL}" if color else "Voxel Dungeon"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    m = orch.metrics
    spawn = ", ".join(f"{c:.3f}" for c in orch.get_first_room_position())
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Seed:'):12} {value(orch.seed)}",
        f"  {label('Grid:'):12} {value(f'{orch.grid.size}^3 @ {orch.grid.cell_size}')}",
        f"  {label('Rooms:'):12} {value(f'{orch.room_count}/{orch.target_room_count}')}",
        f"  {label('Corridors:'):12} {value(len(orch.corridor_cells))}",
        f"  {label('Enemies:'):12} {value(m.get('enemies', 0))}",
        f"  {label('Treasure:'):12} {value(m.get('treasures', 0))}",
        f"  {label('Spawn:'):12} {value(spawn)}",
        divider,
    ]
    print("\n".join(lines))


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()
    if args.log_level:
        set_level(args.log_level)
    elif getattr(args, "json", False):
        # keep stdout parseable
        set_level("warn")

    try:
        cfg = build_config(args).validate()
    except ConfigError as exc:
        print(f"[ERROR] Invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.command == "check-config":
        print(json.dumps(cfg.to_dict(), indent=2))
        return 0

    orch = DungeonOrchestrator(cfg)
    try:
        layout = orch.generate()
    except DungeonError as exc:
        print(f"[ERROR] Generation failed: {exc}", file=sys.stderr)
        return 1

    if getattr(args, "json", False):
        print(json.dumps(layout.to_dict(), indent=2))
    else:
        color = _color_enabled()
        if color:
            _color_init()
        _print_summary(orch, color)
    log.debug(event="cli_done", command=args.command, seed=orch.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
