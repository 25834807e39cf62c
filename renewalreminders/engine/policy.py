"""
Plan policy table: which reminder windows each plan tier may ever receive.
"""

from ..errors import InvalidPlanTier
from ..models.reminder import (
    ALL_WINDOWS, WINDOW_DUE_TODAY, WINDOW_OVERDUE, WINDOW_RENEWAL_REMINDER,
)

PLAN_FREE = "free"
PLAN_PRO = "pro"
PLAN_BUSINESS = "business"

PLAN_TIERS = [PLAN_FREE, PLAN_PRO, PLAN_BUSINESS]
DEFAULT_PLAN_TIER = PLAN_FREE

PLAN_WINDOW_POLICY = {
    PLAN_FREE: frozenset([WINDOW_RENEWAL_REMINDER, WINDOW_DUE_TODAY, WINDOW_OVERDUE]),
    PLAN_PRO: frozenset(ALL_WINDOWS),
    PLAN_BUSINESS: frozenset(ALL_WINDOWS),
}

# None means unlimited
PLAN_SUBSCRIPTION_LIMITS = {
    PLAN_FREE: 5,
    PLAN_PRO: None,
    PLAN_BUSINESS: None,
}


def _check_tier(tier):
    if tier not in PLAN_WINDOW_POLICY:
        raise InvalidPlanTier(tier)


def is_window_allowed(tier, window):
    """
    Whether a plan tier may ever receive reminders for a window.

    Args:
        tier (str): 'free', 'pro' or 'business'
        window (str): A window identifier from models.reminder

    Returns:
        bool: True if the tier gate is open

    Raises:
        InvalidPlanTier: If the tier is unknown
    """
    _check_tier(tier)
    return window in PLAN_WINDOW_POLICY[tier]


def allowed_windows(tier):
    _check_tier(tier)
    return [window for window in ALL_WINDOWS if window in PLAN_WINDOW_POLICY[tier]]


def subscription_limit(tier):
    """Maximum number of subscriptions for a tier, or None if unlimited."""
    _check_tier(tier)
    return PLAN_SUBSCRIPTION_LIMITS[tier]


def can_add_subscription(tier, current_count):
    limit = subscription_limit(tier)
    return limit is None or current_count < limit
