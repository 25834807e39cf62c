from ..engine.composer import CURRENCY_SYMBOLS
from ..engine.policy import PLAN_TIERS, allowed_windows, subscription_limit


class ValidationRegistry:
    """Central registry for allowed values and validation functions."""

    VALID_CURRENCIES = sorted(CURRENCY_SYMBOLS)

    VALID_PLAN_TIERS = PLAN_TIERS

    @classmethod
    def validate_currency(cls, currency):
        """Validate a currency code.

        Args:
            currency (str): Currency code, any case

        Returns:
            str: The normalized (upper-case) currency code

        Raises:
            ValueError: If the currency is not supported, with helpful error message
        """
        if not currency:
            return "USD"

        code = currency.strip().upper()
        if code not in cls.VALID_CURRENCIES:
            allowed = ", ".join(cls.VALID_CURRENCIES)
            raise ValueError(f"'{currency}' is not a supported currency. Allowed: {allowed}")
        return code

    @classmethod
    def validate_plan_tier(cls, tier):
        """Validate a plan tier.

        Raises:
            ValueError: If the tier is not valid
        """
        if tier not in cls.VALID_PLAN_TIERS:
            allowed = ", ".join(cls.VALID_PLAN_TIERS)
            raise ValueError(f"'{tier}' is not a valid plan. Allowed: {allowed}")
        return tier

    @classmethod
    def validate_owner(cls, owner_id):
        if owner_id is None or not str(owner_id).strip():
            raise ValueError("Owner cannot be empty")
        return str(owner_id).strip()

    @classmethod
    def print_valid_plan_tiers(cls):
        """Print the plan tiers with their reminder windows and limits."""
        print("Valid plans:")
        for tier in cls.VALID_PLAN_TIERS:
            limit = subscription_limit(tier)
            limit_str = "unlimited" if limit is None else f"up to {limit}"
            print(f"  - {tier:<9} {limit_str} subscriptions; reminders: {', '.join(allowed_windows(tier))}")
