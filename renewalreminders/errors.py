"""
Exception types raised by the reminder engine.
"""


class ReminderError(Exception):
    """Base class for recoverable, per-item reminder failures."""


class InvalidSubscriptionData(ReminderError):
    """A subscription record cannot be evaluated (e.g. unparsable renewal date)."""

    def __init__(self, subscription_id, reason):
        self.subscription_id = subscription_id
        self.reason = reason
        super().__init__(f"Subscription {subscription_id}: {reason}")


class InvalidPlanTier(ReminderError):
    """Raised when a plan tier is not in the policy table."""

    def __init__(self, tier):
        self.tier = tier
        super().__init__(f"Unknown plan tier: {tier!r}")


class HistoryLookupFailure(ReminderError):
    """
    The notification history could not be read for a candidate.

    Callers must treat the candidate as suppressed and report the failure.
    """

    def __init__(self, subscription_id, window, cause=None):
        self.subscription_id = subscription_id
        self.window = window
        self.cause = cause
        message = f"History lookup failed for subscription {subscription_id} ({window})"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
