"""
folder-shuffle CLI - entry point

Parses flags, layers them over the TOML configuration, sets up logging and
hands over to the session runner.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from folder_shuffle.core import config
from folder_shuffle.core.exceptions import ConfigError


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="folder-shuffle",
        description="Shuffle-play every video/music file in a folder tree.",
        epilog=(
            "While playing, type a command and press Enter:\n"
            "  n  next song\n"
            "  p  previous song\n"
            "  t  pause or resume\n"
            "  r  remove song (deletes the file and skips to the next one)"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-p", "--path",
        help="Music folder (default: [music] library_path from config)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Increase verbosity (debug log lines on stderr)",
    )
    parser.add_argument(
        "-r", "--retry",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Retry every few seconds until the music folder is available",
    )
    parser.add_argument(
        "--loop",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Loop the queue (--no-loop exits after the last track)",
    )
    parser.add_argument(
        "--notify",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Desktop notification on every track change",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Shuffle seed for a reproducible play order",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.toml",
    )

    return parser


def apply_args(cfg: config.Config, args: argparse.Namespace) -> config.Config:
    """Override configuration values with the flags that were given."""
    if args.path:
        cfg.music.library_path = str(Path(args.path).expanduser())
    if args.verbose:
        cfg.logging.level = "DEBUG"
        cfg.logging.console_output = True
    if args.retry is not None:
        cfg.startup.wait_for_path = args.retry
    if args.loop is not None:
        cfg.player.loop = args.loop
    if args.notify is not None:
        cfg.notifications.enabled = args.notify
    if args.seed is not None:
        cfg.player.seed = args.seed
    return cfg


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the folder-shuffle command."""
    args = build_parser().parse_args(argv)

    try:
        cfg = apply_args(config.load_config(args.config), args)
        cfg.validate()

        # Deferred so --help works without the logging/engine stack
        from folder_shuffle.main import run, setup_output

        setup_output(cfg)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(run(cfg))


if __name__ == "__main__":
    main()
