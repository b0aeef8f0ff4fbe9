"""``mrologix logging`` subcommands: persisted level and log file location."""

import logging

from mrologix.logging import get_logger, reset_logger
from mrologix.logging.logging import get_configured_level, _resolve_log_file
from mrologix.logging.config import save_log_level


def register_subcommands(subparsers):
    set_level_parser = subparsers.add_parser("set-level", help="Set the logging level")
    set_level_parser.add_argument(
        "level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level to use",
    )

    subparsers.add_parser("show-path", help="Show the log file location")
    subparsers.add_parser("show-level", help="Show the configured logging level")


def dispatch(args):
    """Execute the logging command associated with ``args.subcommand``."""

    if args.subcommand == "set-level":
        level_name = args.level.upper()
        save_log_level(level_name)
        reset_logger()
        get_logger(level=getattr(logging, level_name))
    elif args.subcommand == "show-path":
        print(_resolve_log_file().resolve())
    elif args.subcommand == "show-level":
        print(get_configured_level())
    else:
        get_logger(__file__).error("No handler for subcommand: %s", args.subcommand)
