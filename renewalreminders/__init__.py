"""
RenewalReminders - renewal notification and reminder scheduling for tracked subscriptions.
"""

__version__ = "0.3.0"
