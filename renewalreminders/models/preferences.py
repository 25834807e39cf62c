"""
Per-owner reminder preferences.
"""


class ReminderPreferences:
    """
    Opt-in toggles for the user-gated reminder windows.

    Overdue and due-today alerts are not user-gated and have no toggle.
    """

    # Mirrors the default row the store creates on first use.
    DEFAULTS = {
        'reminder_30_days': False,
        'reminder_7_days': True,
        'reminder_1_day': False,
    }

    def __init__(self, reminder_30_days=False, reminder_7_days=True, reminder_1_day=False,
                 owner_id=None):
        self.owner_id = owner_id
        self.reminder_30_days = bool(reminder_30_days)
        self.reminder_7_days = bool(reminder_7_days)
        self.reminder_1_day = bool(reminder_1_day)

    def __repr__(self):
        return (f"ReminderPreferences(30d={self.reminder_30_days}, "
                f"7d={self.reminder_7_days}, 1d={self.reminder_1_day})")

    def __eq__(self, other):
        if not isinstance(other, ReminderPreferences):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @classmethod
    def defaults(cls, owner_id=None):
        return cls(owner_id=owner_id, **cls.DEFAULTS)

    def to_dict(self):
        return {
            'reminder_30_days': self.reminder_30_days,
            'reminder_7_days': self.reminder_7_days,
            'reminder_1_day': self.reminder_1_day,
        }

    @classmethod
    def from_dict(cls, data):
        """Build preferences from a stored row; missing toggles take their defaults."""
        values = dict(cls.DEFAULTS)
        for key in cls.DEFAULTS:
            if data.get(key) is not None:
                values[key] = bool(data[key])
        return cls(owner_id=data.get('owner_id'), **values)
