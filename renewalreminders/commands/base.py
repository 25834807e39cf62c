"""
Command base class for RenewalReminders.
Defines the interface that all commands should implement.
"""

from abc import ABC, abstractmethod

from ..database.manager import DatabaseManager


class Command(ABC):
    """
    Abstract base class for all CLI commands.
    All command implementations should inherit from this class.
    """

    # The name of the command used in the CLI
    name = None

    # A short description of what the command does
    description = None

    @classmethod
    @abstractmethod
    def register_arguments(cls, parser):
        """
        Register command-specific arguments.

        Args:
            parser (argparse.ArgumentParser): The argument parser to add arguments to
        """

    @abstractmethod
    def execute(self, args):
        """
        Execute the command with the provided arguments.

        Args:
            args (argparse.Namespace): Parsed command-line arguments

        Returns:
            int: Exit code (0 for success, non-zero for errors)
        """

    def setup_parser(self, subparsers):
        """
        Set up the command's argument parser.

        Args:
            subparsers: Subparsers object from the main parser

        Returns:
            argparse.ArgumentParser: The command's parser
        """
        parser = subparsers.add_parser(
            self.name,
            description=self.description,
            help=self.description
        )

        # Let the command subclass register its specific arguments
        self.register_arguments(parser)

        return parser

    def get_db_manager(self, args):
        """Open the database selected by the global --db option (or the configured default)."""
        return DatabaseManager(getattr(args, "db", None))
