# mrologix/cli/main.py
import argparse
from mrologix.cli import api, db, logging as logging_cli, user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mrologix", description="MRO Logix CLI toolkit")
    subparsers = parser.add_subparsers(dest="command", required=True)

    db_parser = subparsers.add_parser("db", help="Database operations")
    db_subparsers = db_parser.add_subparsers(dest="subcommand", required=True)
    db.register_subcommands(db_subparsers)

    api_parser = subparsers.add_parser("api", help="api control")
    api_subparsers = api_parser.add_subparsers(dest="subcommand", required=True)
    api.register_subcommands(api_subparsers)

    logging_parser = subparsers.add_parser("logging", help="Logging utilities")
    logging_subparsers = logging_parser.add_subparsers(dest="subcommand", required=True)
    logging_cli.register_subcommands(logging_subparsers)

    user_parser = subparsers.add_parser("user", help="User accounts")
    user_subparsers = user_parser.add_subparsers(dest="subcommand", required=True)
    user.register_subcommands(user_subparsers)

    return parser


_DISPATCH = {
    "db": db.dispatch,
    "api": api.dispatch,
    "logging": logging_cli.dispatch,
    "user": user.dispatch,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    _DISPATCH[args.command](args)
