from renewalreminders.commands.base import Command
from renewalreminders.registry import register_command
from renewalreminders.utils.status_utils import (
    VALID_STATUSES, describe_status_change, print_status_help,
)


@register_command
class UpdateStatusCommand(Command):
    """Command for updating a subscription's status."""

    name = "update-status"
    description = "Activate or cancel an existing subscription"

    @classmethod
    def register_arguments(cls, parser):
        """Set up argument parser for update-status command."""
        parser.add_argument(
            "subscription_id",
            type=int,
            nargs="?",
            help="ID of the subscription to update"
        )

        parser.add_argument(
            "--status",
            choices=VALID_STATUSES,
            help="New status for the subscription"
        )

        parser.add_argument(
            "--help-status",
            action="store_true",
            help="Show information about valid subscription statuses"
        )

        return parser

    def execute(self, args):
        """Execute update-status command."""
        try:
            if args.help_status:
                print_status_help()
                return 0

            if args.subscription_id is None:
                raise ValueError("A subscription ID is required.")

            if not args.status:
                raise ValueError("No update specified. Please provide --status.")

            db_manager = self.get_db_manager(args)
            try:
                subscription = db_manager.get_subscription_by_id(args.subscription_id)
                if not subscription:
                    raise ValueError(f"Subscription with ID {args.subscription_id} not found.")

                if subscription.status == args.status:
                    print("No changes were made to the subscription.")
                    return 0

                old_status = subscription.status
                db_manager.update_subscription_status(subscription.id, args.status)
            finally:
                db_manager.close()

            print(f"Successfully updated subscription: {subscription.name} (ID: {subscription.id})")
            for line in describe_status_change(old_status, args.status):
                print(line)
            return 0

        except ValueError as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            print(f"An unexpected error occurred: {e}")
            return 1
