"""
Reminder windows and the reminder event value produced by the rule engine.
"""

# Window identifiers double as the notification type tag.
WINDOW_OVERDUE = "overdue"
WINDOW_DUE_TODAY = "due_today"
WINDOW_FINAL_NOTICE = "final_notice"        # 1 day before renewal
WINDOW_RENEWAL_REMINDER = "renewal_reminder"  # 2..7 days before renewal
WINDOW_THIRTY_DAY = "thirty_day_notice"     # 30 days before renewal

ALL_WINDOWS = [
    WINDOW_OVERDUE,
    WINDOW_DUE_TODAY,
    WINDOW_FINAL_NOTICE,
    WINDOW_RENEWAL_REMINDER,
    WINDOW_THIRTY_DAY,
]

# Windows shown as urgent in notification listings
URGENT_WINDOWS = [WINDOW_OVERDUE, WINDOW_DUE_TODAY, WINDOW_FINAL_NOTICE]


class ReminderEvent:
    """
    A candidate reminder for one subscription on one day.

    Not persisted by the engine; callers record the events that survive
    duplicate suppression.
    """

    def __init__(self, subscription_id, owner_id, window, day_offset,
                 service_name, cost, currency='USD', title=None, body=None):
        self.subscription_id = subscription_id
        self.owner_id = owner_id
        self.window = window
        self.day_offset = day_offset
        self.service_name = service_name
        self.cost = cost
        self.currency = currency
        self.title = title
        self.body = body

    def __repr__(self):
        return (f"ReminderEvent(subscription_id={self.subscription_id!r}, "
                f"window={self.window!r}, day_offset={self.day_offset})")

    def __eq__(self, other):
        if not isinstance(other, ReminderEvent):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def dedup_key(self):
        """Identity of the reminder, excluding the calendar day it is emitted on."""
        return (self.subscription_id, self.window, self.day_offset)

    @property
    def is_urgent(self):
        return self.window in URGENT_WINDOWS

    def to_dict(self):
        return {
            'subscription_id': self.subscription_id,
            'owner_id': self.owner_id,
            'window': self.window,
            'day_offset': self.day_offset,
            'service_name': self.service_name,
            'cost': self.cost,
            'currency': self.currency,
            'title': self.title,
            'body': self.body,
        }
