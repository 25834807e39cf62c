from .preferences import ReminderPreferences
from .reminder import ReminderEvent
from .subscription import Subscription
