"""
Main CLI entry point for RenewalReminders.
"""

import argparse
import sys

from . import __version__
from .settings import get_log_level
from .utils.logging_utils import configure_logging
from renewalreminders.config import COMMANDS


def get_all_commands():
    """
    Get all registered commands.

    Returns:
        dict: Dictionary mapping command names to command classes
    """
    return COMMANDS.copy()


def setup_parsers(subparsers):
    """
    Set up command parsers for all registered commands.

    Args:
        subparsers: Subparsers object from the main parser
    """
    for command_name, command_class in sorted(get_all_commands().items()):
        command = command_class()
        command.setup_parser(subparsers)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="renewalreminders",
        description="RenewalReminders - subscription renewal reminders",
        epilog="Use 'renewalreminders <command> --help' for more information about a command."
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f"RenewalReminders CLI v{__version__}"
    )

    parser.add_argument(
        '--db',
        help="Path to the SQLite database (default: $RENEWALREMINDERS_DB_PATH or ~/.renewalreminders/reminders.db)"
    )

    parser.add_argument(
        '--log-level',
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: $RENEWALREMINDERS_LOG_LEVEL or WARNING)"
    )

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        help="Command to run"
    )

    setup_parsers(subparsers)
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_log_level())

    # If no command is specified, show help
    if args.command is None:
        parser.print_help()
        return 0

    command_class = COMMANDS.get(args.command)
    if command_class is None:
        print(f"Error: Unknown command '{args.command}'")
        return 1

    command = command_class()
    return command.execute(args)


if __name__ == "__main__":
    sys.exit(main())
