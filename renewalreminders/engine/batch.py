"""
Batch evaluation across many subscriptions.

Failures are isolated per subscription: a malformed record or a failed history
lookup is reported in the result and the remaining subscriptions are still
evaluated. The batch never records anything; the caller persists the
surviving events.
"""

import logging

from ..errors import HistoryLookupFailure, InvalidSubscriptionData, ReminderError
from ..models.subscription import Subscription
from ..utils.date_utils import parse_date
from .rules import evaluate
from .suppressor import should_emit

logger = logging.getLogger(__name__)


class BatchError:
    """A per-subscription failure collected during a batch run."""

    def __init__(self, subscription_id, error):
        self.subscription_id = subscription_id
        self.error = error

    def __repr__(self):
        return f"BatchError(subscription_id={self.subscription_id!r}, error={self.error!r})"

    @property
    def kind(self):
        return type(self.error).__name__

    @property
    def message(self):
        return str(self.error)


class BatchResult:
    """Outcome of one evaluation pass."""

    def __init__(self):
        self.events = []
        self.suppressed = []
        self.errors = []
        self.evaluated = 0

    def __repr__(self):
        return (f"BatchResult(events={len(self.events)}, suppressed={len(self.suppressed)}, "
                f"errors={len(self.errors)})")

    @property
    def ok(self):
        return not self.errors


def _as_subscription(record):
    if isinstance(record, Subscription):
        return record
    try:
        return Subscription.from_dict(dict(record))
    except (ValueError, TypeError) as e:
        raise InvalidSubscriptionData(_record_id(record), str(e)) from e


def _record_id(record):
    if isinstance(record, Subscription):
        return record.id
    try:
        return record['id']
    except (KeyError, IndexError, TypeError):
        return None


def evaluate_batch(subscriptions, tier_lookup, preferences_lookup, history_lookup, today):
    """
    Evaluate every subscription and drop reminders already sent today.

    Args:
        subscriptions (iterable): Subscription objects or stored records
        tier_lookup (callable): tier_lookup(owner_id) -> plan tier
        preferences_lookup (callable): preferences_lookup(owner_id) ->
            ReminderPreferences or None
        history_lookup (callable): See suppressor.should_emit
        today (datetime.date): The evaluation day

    Returns:
        BatchResult: Surviving events, suppressed candidates and per-item errors
    """
    today = parse_date(today)
    result = BatchResult()
    tiers = {}
    preferences = {}

    for record in subscriptions:
        result.evaluated += 1
        try:
            subscription = _as_subscription(record)
            owner_id = subscription.owner_id
            if owner_id not in tiers:
                owner_tier = tier_lookup(owner_id)
                owner_preferences = preferences_lookup(owner_id)
                tiers[owner_id] = owner_tier
                preferences[owner_id] = owner_preferences

            candidates = evaluate(subscription, tiers[owner_id], preferences[owner_id], today)
        except ReminderError as e:
            logger.warning("Skipping subscription %s: %s", _record_id(record), e)
            result.errors.append(BatchError(_record_id(record), e))
            continue

        for candidate in candidates:
            try:
                emit = should_emit(candidate, history_lookup, today)
            except HistoryLookupFailure as e:
                logger.warning("Suppressing %s for subscription %s: %s",
                               candidate.window, candidate.subscription_id, e)
                result.suppressed.append(candidate)
                result.errors.append(BatchError(candidate.subscription_id, e))
                continue

            if emit:
                result.events.append(candidate)
            else:
                result.suppressed.append(candidate)

    logger.info("Evaluated %d subscriptions: %d to emit, %d suppressed, %d errors",
                result.evaluated, len(result.events), len(result.suppressed), len(result.errors))
    return result
