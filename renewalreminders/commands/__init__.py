"""
Command registry for RenewalReminders.
Handles command registration and discovery.
"""
from renewalreminders.commands.add import AddCommand
from renewalreminders.commands.notifications import NotificationsCommand
from renewalreminders.commands.preferences import PreferencesCommand
from renewalreminders.commands.remind import RemindCommand
from renewalreminders.commands.set_plan import SetPlanCommand
from renewalreminders.commands.update_status import UpdateStatusCommand
