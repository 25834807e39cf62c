"""
RemindCommand: run one reminder evaluation pass and record what is due.
"""

import logging

from colorama import Fore, Style, init
from tabulate import tabulate

from renewalreminders.commands.base import Command
from renewalreminders.engine.batch import BatchError, evaluate_batch
from renewalreminders.errors import ReminderError
from renewalreminders.registry import register_command
from renewalreminders.settings import get_timezone_name
from renewalreminders.utils.date_utils import parse_date, today

# Initialize colorama for cross-platform color support
init()

logger = logging.getLogger(__name__)


def run_reminder_pass(db_manager, day, owner_id=None, dry_run=False):
    """
    Evaluate active subscriptions for a day and record the surviving reminders.

    Args:
        db_manager (DatabaseManager): Store used for lookups and as the notification sink
        day (datetime.date): The evaluation day
        owner_id (str, optional): Restrict the pass to one owner
        dry_run (bool, optional): Evaluate without recording anything

    Returns:
        tuple: (BatchResult, list of recorded ReminderEvent)
    """
    day = parse_date(day)
    subscriptions = db_manager.get_active_subscriptions(owner_id=owner_id)

    result = evaluate_batch(
        subscriptions,
        tier_lookup=db_manager.get_owner_plan_tier,
        preferences_lookup=db_manager.get_owner_preferences,
        history_lookup=db_manager.get_notification_history,
        today=day,
    )

    recorded = []
    if dry_run:
        return result, recorded

    for event in list(result.events):
        try:
            inserted = db_manager.record_notification(event, day)
        except ReminderError as e:
            logger.warning("Could not record %s for subscription %s: %s",
                           event.window, event.subscription_id, e)
            result.events.remove(event)
            result.errors.append(BatchError(event.subscription_id, e))
            continue

        if inserted:
            recorded.append(event)
        else:
            # Lost a race with another pass; the other pass owns the send.
            result.suppressed.append(event)

    logger.info("Recorded %d reminders for %s", len(recorded), day)
    return result, recorded


@register_command
class RemindCommand(Command):
    """Command that generates today's renewal reminders."""

    name = "remind"
    description = "Generate renewal reminders due today (safe to run repeatedly)"

    COLORS = {
        'overdue': Fore.RED,
        'due_today': Fore.RED,
        'final_notice': Fore.YELLOW,
        'renewal_reminder': Fore.WHITE,
        'thirty_day_notice': Fore.CYAN,
        'ERROR': Fore.RED + Style.BRIGHT,
        'HEADER': Fore.CYAN + Style.BRIGHT,
        'RESET': Style.RESET_ALL,
    }

    @classmethod
    def register_arguments(cls, parser):
        parser.add_argument(
            "--date",
            help="Evaluate as of this day (YYYY-MM-DD, default: today in $RENEWALREMINDERS_TZ)"
        )

        parser.add_argument(
            "--owner",
            help="Only evaluate subscriptions of this owner"
        )

        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show the reminders that would be sent without recording them"
        )

    def _colored(self, window, text):
        return f"{self.COLORS.get(window, '')}{text}{self.COLORS['RESET']}"

    def execute(self, args):
        try:
            day = parse_date(args.date) if args.date else today(get_timezone_name())

            db_manager = self.get_db_manager(args)
            try:
                result, recorded = run_reminder_pass(
                    db_manager, day, owner_id=args.owner, dry_run=args.dry_run
                )
            finally:
                db_manager.close()

            shown = result.events if args.dry_run else recorded
            heading = "Reminders that would be sent" if args.dry_run else "Reminders sent"
            print(f"{self.COLORS['HEADER']}{heading} for {day.isoformat()}{self.COLORS['RESET']}")

            if shown:
                rows = [
                    [event.subscription_id, event.owner_id,
                     self._colored(event.window, event.window), event.day_offset, event.body]
                    for event in shown
                ]
                print(tabulate(rows, headers=["Sub ID", "Owner", "Type", "Days", "Message"],
                               tablefmt="simple"))
            else:
                print("No reminders due.")

            print(f"\nEvaluated: {result.evaluated}  "
                  f"{'To send' if args.dry_run else 'Sent'}: {len(shown)}  "
                  f"Already sent: {len(result.suppressed)}  Errors: {len(result.errors)}")

            if result.errors:
                print(f"\n{self.COLORS['ERROR']}Errors:{self.COLORS['RESET']}")
                for error in result.errors:
                    print(f"  - subscription {error.subscription_id}: {error.kind}: {error.message}")
                return 2

            return 0

        except (ValueError, ReminderError) as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            print(f"An unexpected error occurred: {e}")
            return 1
