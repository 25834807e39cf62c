"""
Duplicate suppressor.

A reminder is the same reminder when subscription id, window, day offset and
the calendar day it was emitted on all match. Message text is never compared.
"""

import logging

from ..errors import HistoryLookupFailure
from ..utils.date_utils import parse_date

logger = logging.getLogger(__name__)


def _field(entry, name):
    if isinstance(entry, dict):
        return entry.get(name)
    try:
        return entry[name]
    except (KeyError, IndexError, TypeError):
        return getattr(entry, name, None)


def matches(entry, candidate, today):
    """Whether a history entry records the same reminder as the candidate, on today."""
    sent_on = _field(entry, 'sent_on')
    try:
        sent_on = parse_date(sent_on)
    except ValueError:
        return False

    entry_offset = _field(entry, 'day_offset')
    try:
        entry_offset = int(entry_offset)
    except (TypeError, ValueError):
        return False

    return (
        str(_field(entry, 'subscription_id')) == str(candidate.subscription_id)
        and _field(entry, 'window') == candidate.window
        and entry_offset == candidate.day_offset
        and sent_on == today
    )


def should_emit(candidate, history_lookup, today):
    """
    Decide whether a candidate reminder still needs to be sent today.

    The evaluation day is passed in rather than read from the clock, so the
    history is matched against the same day the candidate was evaluated for.

    Args:
        candidate (ReminderEvent): The reminder to check
        history_lookup (callable): history_lookup(subscription_id, window, day)
            returning an iterable of entries with subscription_id, window,
            day_offset and sent_on
        today (datetime.date): The evaluation day

    Returns:
        bool: False if a matching entry exists, True otherwise

    Raises:
        HistoryLookupFailure: If the lookup raises; the candidate must then be
            treated as suppressed
    """
    today = parse_date(today)
    try:
        entries = list(history_lookup(candidate.subscription_id, candidate.window, today) or [])
    except Exception as e:
        raise HistoryLookupFailure(candidate.subscription_id, candidate.window, e) from e

    for entry in entries:
        if matches(entry, candidate, today):
            logger.info("Suppressing duplicate %s for subscription %s (offset %d)",
                        candidate.window, candidate.subscription_id, candidate.day_offset)
            return False
    return True
