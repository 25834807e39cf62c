"""
Reminder rule engine.

Decides, for one subscription on one day, which reminder (if any) is due.
The offset ranges handled below are disjoint, so at most one window fires
per subscription per day:

    offset < 0      overdue            every tier, no preference
    offset == 0     due_today          every tier, no preference
    offset == 1     final_notice       tier gate + 1-day preference
    2 <= offset <= 7  renewal_reminder   7-day preference (every day of the range)
    offset == 30    thirty_day_notice  tier gate + 30-day preference
"""

import logging

from ..errors import InvalidPlanTier, InvalidSubscriptionData
from ..models.preferences import ReminderPreferences
from ..models.reminder import (
    ReminderEvent, WINDOW_DUE_TODAY, WINDOW_FINAL_NOTICE, WINDOW_OVERDUE,
    WINDOW_RENEWAL_REMINDER, WINDOW_THIRTY_DAY,
)
from ..utils.date_utils import day_offset as compute_day_offset
from .composer import compose
from .policy import PLAN_TIERS, is_window_allowed

logger = logging.getLogger(__name__)

SEVEN_DAY_RANGE = range(2, 8)
THIRTY_DAY_OFFSET = 30


def select_window(offset, plan_tier, preferences):
    """
    Pick the reminder window for a day offset, or None.

    Args:
        offset (int): Renewal date minus today, in days
        plan_tier (str): Owner's plan tier
        preferences (ReminderPreferences): Owner's toggles

    Returns:
        str or None: The window identifier that fires
    """
    if offset < 0:
        return WINDOW_OVERDUE

    if offset == 0:
        return WINDOW_DUE_TODAY

    if offset == 1:
        if is_window_allowed(plan_tier, WINDOW_FINAL_NOTICE) and preferences.reminder_1_day:
            return WINDOW_FINAL_NOTICE
        return None

    if offset in SEVEN_DAY_RANGE:
        if preferences.reminder_7_days:
            return WINDOW_RENEWAL_REMINDER
        return None

    if offset == THIRTY_DAY_OFFSET:
        if is_window_allowed(plan_tier, WINDOW_THIRTY_DAY) and preferences.reminder_30_days:
            return WINDOW_THIRTY_DAY
        return None

    return None


def evaluate(subscription, plan_tier, preferences, today):
    """
    Compute the reminder candidates for a subscription on a given day.

    Args:
        subscription (Subscription): The subscription to evaluate
        plan_tier (str): The owner's plan tier
        preferences (ReminderPreferences or None): The owner's toggles; None
            falls back to ReminderPreferences.defaults()
        today (datetime.date): The evaluation day

    Returns:
        list: Zero or one ReminderEvent

    Raises:
        InvalidSubscriptionData: If the renewal date is missing or unparsable
        InvalidPlanTier: If the plan tier is unknown
    """
    if not subscription.is_active:
        logger.debug("Skipping %s subscription %s", subscription.status, subscription.id)
        return []

    if plan_tier not in PLAN_TIERS:
        raise InvalidPlanTier(plan_tier)

    if subscription.renewal_date in (None, ""):
        raise InvalidSubscriptionData(subscription.id, "missing renewal date")

    try:
        offset = compute_day_offset(subscription.renewal_date, today)
    except (ValueError, TypeError) as e:
        raise InvalidSubscriptionData(subscription.id, f"invalid renewal date: {e}") from e

    if preferences is None:
        preferences = ReminderPreferences.defaults(owner_id=subscription.owner_id)

    window = select_window(offset, plan_tier, preferences)
    if window is None:
        logger.debug("No reminder for subscription %s (offset %d, plan %s)",
                     subscription.id, offset, plan_tier)
        return []

    event = ReminderEvent(
        subscription_id=subscription.id,
        owner_id=subscription.owner_id,
        window=window,
        day_offset=offset,
        service_name=subscription.name,
        cost=subscription.cost,
        currency=subscription.currency,
    )
    message = compose(event)
    event.title = message['title']
    event.body = message['body']

    logger.debug("Subscription %s: %s (offset %d)", subscription.id, window, offset)
    return [event]
