"""
NotificationsCommand: browse and maintain the recorded reminder feed.
"""

from colorama import Fore, Style, init
from tabulate import tabulate

from renewalreminders.commands.base import Command
from renewalreminders.models.reminder import URGENT_WINDOWS
from renewalreminders.registry import register_command
from renewalreminders.settings import get_timezone_name
from renewalreminders.utils.date_utils import today

init()


@register_command
class NotificationsCommand(Command):
    """Command to list, mark read and clean up notifications."""

    name = "notifications"
    description = "List recorded reminders, mark them read or clean up old ones"

    @classmethod
    def register_arguments(cls, parser):
        parser.add_argument(
            "--owner",
            help="Owner whose notifications to show (required except with --cleanup)"
        )

        filter_group = parser.add_mutually_exclusive_group()
        filter_group.add_argument(
            "--unread",
            action="store_true",
            help="Only show unread notifications"
        )
        filter_group.add_argument(
            "--urgent",
            action="store_true",
            help="Only show unread overdue, due-today and final notices"
        )

        parser.add_argument(
            "--limit",
            type=int,
            default=50,
            help="Maximum number of notifications to show (default: 50)"
        )

        action_group = parser.add_mutually_exclusive_group()
        action_group.add_argument(
            "--mark-read",
            type=int,
            metavar="ID",
            help="Mark one notification as read"
        )
        action_group.add_argument(
            "--mark-all-read",
            action="store_true",
            help="Mark all of the owner's notifications as read"
        )
        action_group.add_argument(
            "--cleanup",
            action="store_true",
            help="Delete read notifications older than 7 days and unread ones older than 30 days"
        )

    def execute(self, args):
        try:
            if not args.cleanup and not args.owner:
                raise ValueError("--owner is required")

            db_manager = self.get_db_manager(args)
            try:
                if args.cleanup:
                    deleted = db_manager.cleanup_old_notifications(today(get_timezone_name()))
                    print(f"Deleted {deleted} old notification(s).")
                    return 0

                if args.mark_read is not None:
                    if not db_manager.mark_notification_read(args.mark_read, owner_id=args.owner):
                        raise ValueError(f"Notification with ID {args.mark_read} not found.")
                    print(f"Notification {args.mark_read} marked as read.")
                    return 0

                if args.mark_all_read:
                    count = db_manager.mark_all_read(args.owner)
                    print(f"Marked {count} notification(s) as read.")
                    return 0

                notifications = db_manager.get_notifications(
                    owner_id=args.owner,
                    unread_only=args.unread,
                    urgent_only=args.urgent,
                    limit=args.limit,
                )
                unread_count = db_manager.get_unread_count(args.owner)
            finally:
                db_manager.close()

            if not notifications:
                print("No notifications found.")
                return 0

            rows = []
            for notification in notifications:
                title = notification["title"]
                if notification["window_type"] in URGENT_WINDOWS and not notification["is_read"]:
                    title = f"{Fore.RED}{title}{Style.RESET_ALL}"
                rows.append([
                    notification["id"],
                    notification["sent_on"],
                    title,
                    notification["message"],
                    "" if notification["is_read"] else "*",
                ])

            print(tabulate(rows, headers=["ID", "Date", "Title", "Message", "New"],
                           tablefmt="simple"))
            print(f"\n{unread_count} unread")
            return 0

        except ValueError as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            print(f"An unexpected error occurred: {e}")
            return 1
