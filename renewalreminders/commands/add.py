"""
AddCommand implementation for RenewalReminders.
Handles adding new subscriptions from the command line.
"""

from .base import Command
from ..engine.policy import can_add_subscription, subscription_limit
from ..errors import ReminderError
from ..models.subscription import Subscription
from ..settings import get_timezone_name
from ..utils.date_utils import calculate_next_renewal, parse_date, today, validate_date_format
from ..utils.status_utils import VALID_STATUSES, get_status_error_message, print_status_help
from ..utils.validators import ValidationRegistry

from renewalreminders.registry import register_command


@register_command
class AddCommand(Command):
    """Command to add a new subscription."""

    name = 'add'
    description = 'Add a new subscription'

    @classmethod
    def register_arguments(cls, parser):
        """Register command-specific arguments."""
        parser.add_argument(
            '--owner',
            required=True,
            help='Identifier of the user who owns the subscription'
        )

        parser.add_argument(
            '--name',
            required=True,
            help='Name of the subscription'
        )

        parser.add_argument(
            '--cost',
            required=True,
            type=str,
            help='Cost per billing cycle (must be a positive number)'
        )

        parser.add_argument(
            '--billing-cycle',
            choices=Subscription.VALID_BILLING_CYCLES,
            default='monthly',
            help='Billing cycle (default: monthly)'
        )

        parser.add_argument(
            '--currency',
            default='USD',
            help=f'Currency code ({", ".join(ValidationRegistry.VALID_CURRENCIES)})'
        )

        parser.add_argument(
            '--renewal-date',
            help='Next renewal date (YYYY-MM-DD) - one billing cycle after --start-date if not provided'
        )

        parser.add_argument(
            '--start-date',
            help='Start date (YYYY-MM-DD) used to calculate the renewal date (default: today)'
        )

        parser.add_argument(
            '--notes',
            default=None,
            help='Additional notes about the subscription (free text)'
        )

        parser.add_argument(
            "--status",
            choices=VALID_STATUSES,
            default="active",
            help="Current status of subscription (default: active)"
        )

        parser.add_argument(
            "--help-status",
            action="store_true",
            help="Show information about valid subscription statuses"
        )

    def _validate_cost(self, cost_str):
        """
        Validate that cost is a positive number.

        Raises:
            ValueError: If cost is invalid
        """
        try:
            cost = float(cost_str)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid cost: '{cost_str}'. Cost must be a positive number.")
        if cost <= 0:
            raise ValueError(f"Invalid cost: '{cost_str}'. Cost must be a positive number.")
        return cost

    def _resolve_renewal_date(self, renewal_date, start_date, billing_cycle):
        """
        Work out the renewal date from the arguments.

        Returns:
            str: Renewal date in ISO format

        Raises:
            ValueError: If a date is malformed
        """
        if renewal_date:
            if not validate_date_format(renewal_date):
                raise ValueError(
                    f"Invalid renewal date format: '{renewal_date}'. Use YYYY-MM-DD format."
                )
            return renewal_date

        if start_date:
            if not validate_date_format(start_date):
                raise ValueError(
                    f"Invalid start date format: '{start_date}'. Use YYYY-MM-DD format."
                )
            start = parse_date(start_date)
        else:
            start = today(get_timezone_name())

        return calculate_next_renewal(start, billing_cycle).isoformat()

    def _validate_notes(self, notes):
        if notes is None:
            return None
        notes = notes.strip()
        return notes or None

    def execute(self, args):
        """
        Execute the add command.

        Returns:
            int: Exit code (0 for success, 1 for errors)
        """
        try:
            if args.help_status:
                print_status_help()
                return 0

            if args.status not in VALID_STATUSES:
                print(get_status_error_message(args.status))
                return 1

            owner_id = ValidationRegistry.validate_owner(args.owner)
            cost = self._validate_cost(args.cost)
            currency = ValidationRegistry.validate_currency(args.currency)
            renewal_date = self._resolve_renewal_date(
                args.renewal_date, args.start_date, args.billing_cycle
            )

            subscription = Subscription(
                owner_id=owner_id,
                name=args.name,
                cost=cost,
                billing_cycle=args.billing_cycle,
                renewal_date=renewal_date,
                currency=currency,
                status=args.status,
                notes=self._validate_notes(args.notes),
            )

            db_manager = self.get_db_manager(args)
            try:
                tier = db_manager.get_owner_plan_tier(owner_id)
                current_count = db_manager.count_subscriptions(owner_id)
                if not can_add_subscription(tier, current_count):
                    raise ValueError(
                        f"The {tier} plan is limited to {subscription_limit(tier)} subscriptions. "
                        f"Upgrade with 'set-plan' to add more."
                    )

                subscription_id = db_manager.add_subscription(subscription)

                print(f"\nSubscription '{subscription.name}' added successfully (ID: {subscription_id}).")
                print("Details:")
                print(f"  Owner: {owner_id} ({tier} plan)")
                print(f"  Cost: {cost:.2f} {currency} ({subscription.billing_cycle})")
                print(f"  Renewal Date: {subscription.renewal_date}")
                print(f"  Days until renewal: "
                      f"{subscription.days_until_renewal(today(get_timezone_name()))}")

                if subscription.billing_cycle == 'monthly':
                    print(f"  Annual cost: {subscription.annual_cost:.2f} {currency}")

                if subscription.notes:
                    print(f"  Notes: {subscription.notes}")

                return 0
            finally:
                db_manager.close()

        except (ValueError, ReminderError) as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            print(f"An unexpected error occurred: {e}")
            return 1
