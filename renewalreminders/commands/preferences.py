"""
Show or change an owner's reminder preferences.
"""

from tabulate import tabulate

from renewalreminders.commands.base import Command
from renewalreminders.engine.policy import is_window_allowed
from renewalreminders.errors import ReminderError
from renewalreminders.models.reminder import (
    WINDOW_FINAL_NOTICE, WINDOW_RENEWAL_REMINDER, WINDOW_THIRTY_DAY,
)
from renewalreminders.registry import register_command
from renewalreminders.utils.validators import ValidationRegistry

TOGGLE_CHOICES = {"on": True, "off": False}

# (argument dest, preference attribute, label, window)
TOGGLES = [
    ("thirty_day", "reminder_30_days", "30 days before", WINDOW_THIRTY_DAY),
    ("seven_day", "reminder_7_days", "2-7 days before", WINDOW_RENEWAL_REMINDER),
    ("one_day", "reminder_1_day", "1 day before", WINDOW_FINAL_NOTICE),
]


@register_command
class PreferencesCommand(Command):
    """Command to view and update reminder opt-ins."""

    name = "preferences"
    description = "Show or change which renewal reminders an owner receives"

    @classmethod
    def register_arguments(cls, parser):
        parser.add_argument(
            "--owner",
            required=True,
            help="Identifier of the owner"
        )

        parser.add_argument(
            "--thirty-day",
            choices=TOGGLE_CHOICES,
            help="Reminder 30 days before renewal (pro and business plans)"
        )

        parser.add_argument(
            "--seven-day",
            choices=TOGGLE_CHOICES,
            help="Daily reminders from 7 days until 2 days before renewal"
        )

        parser.add_argument(
            "--one-day",
            choices=TOGGLE_CHOICES,
            help="Final notice 1 day before renewal (pro and business plans)"
        )

    def execute(self, args):
        try:
            owner_id = ValidationRegistry.validate_owner(args.owner)

            db_manager = self.get_db_manager(args)
            try:
                preferences = db_manager.get_or_create_owner_preferences(owner_id)
                tier = db_manager.get_owner_plan_tier(owner_id)

                changes = []
                for dest, attribute, label, _ in TOGGLES:
                    value = getattr(args, dest)
                    if value is None:
                        continue
                    new_value = TOGGLE_CHOICES[value]
                    if getattr(preferences, attribute) != new_value:
                        setattr(preferences, attribute, new_value)
                        changes.append(f"{label}: {value}")

                if changes:
                    db_manager.save_owner_preferences(owner_id, preferences)
            finally:
                db_manager.close()

            for change in changes:
                print(f"- {change}")

            rows = []
            for _, attribute, label, window in TOGGLES:
                allowed = is_window_allowed(tier, window)
                enabled = getattr(preferences, attribute)
                effective = "yes" if allowed and enabled else "no"
                rows.append([label, "on" if enabled else "off",
                             "yes" if allowed else f"no ({tier} plan)", effective])
            rows.append(["Renewal day", "always", "yes", "yes"])
            rows.append(["Overdue", "always", "yes", "yes"])

            print(f"\nReminder preferences for {owner_id} ({tier} plan):")
            print(tabulate(rows, headers=["Reminder", "Preference", "Plan allows", "Sent"],
                           tablefmt="simple"))
            return 0

        except (ValueError, ReminderError) as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            print(f"An unexpected error occurred: {e}")
            return 1
