# renewalreminders/config.py
"""Command registry for RenewalReminders."""

from renewalreminders.registry import COMMANDS
# Import all command modules to trigger decorator registration
from renewalreminders.commands import (  # noqa: F401
    AddCommand,
    NotificationsCommand,
    PreferencesCommand,
    RemindCommand,
    SetPlanCommand,
    UpdateStatusCommand,
)
