"""Utilities for subscription status management."""

from ..models.subscription import Subscription

VALID_STATUSES = Subscription.VALID_STATUSES

# Descriptions for each status
STATUS_DESCRIPTIONS = {
    "active": "renewing; eligible for reminders",
    "cancelled": "no longer renewing; never reminded",
}


def get_status_error_message(invalid_status):
    """Generate a standardized error message for invalid status."""
    return f"Error: '{invalid_status}' is not a valid status. Allowed values: {', '.join(VALID_STATUSES)}."


def describe_status_change(old_status, new_status):
    """
    Describe what a status change means for reminders.

    Args:
        old_status (str): Status before the change
        new_status (str): Status after the change

    Returns:
        list: Lines suitable for printing
    """
    lines = [f"- Status: {old_status} -> {new_status}"]
    if new_status == "cancelled":
        lines.append("- No further reminders will be sent for this subscription.")
    elif old_status == "cancelled":
        lines.append("- Reminders resume from the next 'remind' run.")
    return lines


def print_status_help():
    """Print help information about valid statuses."""
    print("Valid statuses:")
    for status in VALID_STATUSES:
        print(f"  {status:<10} - {STATUS_DESCRIPTIONS[status]}")
