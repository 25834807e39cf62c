"""
Set an owner's plan tier.
"""

from renewalreminders.commands.base import Command
from renewalreminders.registry import register_command
from renewalreminders.utils.validators import ValidationRegistry


@register_command
class SetPlanCommand(Command):
    """Command to change which plan an owner is on."""

    name = "set-plan"
    description = "Set the plan tier (free, pro, business) of a subscription owner"

    @classmethod
    def register_arguments(cls, parser):
        parser.add_argument(
            "--owner",
            help="Identifier of the owner"
        )

        parser.add_argument(
            "--plan",
            choices=ValidationRegistry.VALID_PLAN_TIERS,
            help="New plan tier"
        )

        parser.add_argument(
            "--help-plans",
            action="store_true",
            help="Show the plans with their reminder windows and subscription limits"
        )

    def execute(self, args):
        try:
            if args.help_plans:
                ValidationRegistry.print_valid_plan_tiers()
                return 0

            owner_id = ValidationRegistry.validate_owner(args.owner)

            db_manager = self.get_db_manager(args)
            try:
                old_plan = db_manager.get_owner_plan_tier(owner_id)
                if not args.plan:
                    print(f"Owner {owner_id} is on the {old_plan} plan.")
                    return 0

                tier = ValidationRegistry.validate_plan_tier(args.plan)
                db_manager.set_owner_plan_tier(owner_id, tier)
            finally:
                db_manager.close()

            print(f"Plan for {owner_id}: {old_plan} -> {tier}")
            return 0

        except ValueError as e:
            print(f"Error: {e}")
            return 1
        except Exception as e:
            print(f"An unexpected error occurred: {e}")
            return 1
