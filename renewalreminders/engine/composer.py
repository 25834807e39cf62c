"""
Message composer: renders a reminder event into a title and body.
"""

from ..models.reminder import (
    WINDOW_DUE_TODAY, WINDOW_FINAL_NOTICE, WINDOW_OVERDUE,
    WINDOW_RENEWAL_REMINDER, WINDOW_THIRTY_DAY,
)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CNY": "¥",
}

TEMPLATES = {
    WINDOW_OVERDUE: (
        "OVERDUE: {name}",
        "{name} payment is {days} overdue! ({amount})",
    ),
    WINDOW_DUE_TODAY: (
        "Renewal Today: {name}",
        "{name} renews TODAY for {amount}. Check your payment method.",
    ),
    WINDOW_FINAL_NOTICE: (
        "Final Notice: {name}",
        "{name} renews TOMORROW for {amount}. Last chance to cancel!",
    ),
    WINDOW_RENEWAL_REMINDER: (
        "Renewal Reminder: {name}",
        "{name} will renew in {days} for {amount}. Review if needed.",
    ),
    WINDOW_THIRTY_DAY: (
        "30-Day Renewal Notice: {name}",
        "{name} will renew in {days} for {amount}. Plan ahead!",
    ),
}


def format_amount(cost, currency='USD'):
    """Format a cost with its currency symbol and exactly two decimals."""
    code = (currency or 'USD').upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{code} {float(cost):.2f}"
    return f"{symbol}{float(cost):.2f}"


def format_days(count):
    count = abs(count)
    return f"{count} day" if count == 1 else f"{count} days"


def compose(candidate):
    """
    Render a candidate reminder.

    Args:
        candidate (ReminderEvent): The event to render

    Returns:
        dict: {'title': str, 'body': str}

    Raises:
        KeyError: If the candidate's window has no template
    """
    title_template, body_template = TEMPLATES[candidate.window]
    values = {
        'name': candidate.service_name,
        'amount': format_amount(candidate.cost, candidate.currency),
        'days': format_days(candidate.day_offset),
    }
    return {
        'title': title_template.format(**values),
        'body': body_template.format(**values),
    }
