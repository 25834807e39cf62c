"""
tests/test_suppressor.py

Tests for duplicate suppression against notification history.
"""

import datetime

import pytest

from renewalreminders.engine.rules import evaluate
from renewalreminders.engine.suppressor import matches, should_emit
from renewalreminders.errors import HistoryLookupFailure
from renewalreminders.models.preferences import ReminderPreferences


@pytest.fixture
def final_notice(make_subscription, today):
    subscription = make_subscription(offset=1)
    prefs = ReminderPreferences(reminder_1_day=True)
    return evaluate(subscription, "pro", prefs, today)[0]


class TestShouldEmit:

    def test_emits_when_history_is_empty(self, final_notice, history, today):
        assert should_emit(final_notice, history.lookup, today) is True

    def test_scenario_d_existing_entry_suppresses(self, final_notice, history, today):
        history.record(final_notice, today)

        assert should_emit(final_notice, history.lookup, today) is False

    def test_entry_from_another_day_does_not_suppress(self, final_notice, today):
        yesterday = today - datetime.timedelta(days=1)
        entries = [{
            "subscription_id": final_notice.subscription_id,
            "window": final_notice.window,
            "day_offset": final_notice.day_offset,
            "sent_on": yesterday.isoformat(),
        }]

        assert should_emit(final_notice, lambda *_: entries, today) is True

    def test_different_day_offset_does_not_suppress(self, make_subscription, history, today):
        four_days = evaluate(make_subscription(offset=4, id=7), "free", None, today)[0]
        history.entries.append({
            "subscription_id": 7,
            "window": "renewal_reminder",
            "day_offset": 5,
            "sent_on": today.isoformat(),
        })

        assert should_emit(four_days, history.lookup, today) is True

    def test_message_text_is_not_compared(self, final_notice, today):
        entries = [{
            "subscription_id": final_notice.subscription_id,
            "window": final_notice.window,
            "day_offset": final_notice.day_offset,
            "sent_on": today.isoformat(),
            "message": "something completely different",
        }]

        assert should_emit(final_notice, lambda *_: entries, today) is False

    def test_lookup_receives_structured_key(self, final_notice, today):
        calls = []

        def lookup(subscription_id, window, day):
            calls.append((subscription_id, window, day))
            return []

        should_emit(final_notice, lookup, today)

        assert calls == [(final_notice.subscription_id, "final_notice", today)]

    def test_lookup_failure_raises_history_lookup_failure(self, final_notice, today):
        def broken_lookup(*_):
            raise ConnectionError("store unavailable")

        with pytest.raises(HistoryLookupFailure) as exc_info:
            should_emit(final_notice, broken_lookup, today)

        assert exc_info.value.subscription_id == final_notice.subscription_id
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_idempotent_after_recording(self, make_subscription, history, today):
        subscriptions = [make_subscription(offset=o) for o in (-2, 0, 3, 7)]

        first = [e for s in subscriptions for e in evaluate(s, "free", None, today)
                 if should_emit(e, history.lookup, today)]
        for event in first:
            history.record(event, today)
        second = [e for s in subscriptions for e in evaluate(s, "free", None, today)
                  if should_emit(e, history.lookup, today)]

        assert len(first) == 4
        assert second == []


class TestMatches:

    def test_string_ids_and_offsets_from_storage(self, final_notice, today):
        entry = {
            "subscription_id": str(final_notice.subscription_id),
            "window": "final_notice",
            "day_offset": "1",
            "sent_on": today.isoformat(),
        }
        assert matches(entry, final_notice, today)

    def test_unparsable_sent_on_never_matches(self, final_notice, today):
        entry = {
            "subscription_id": final_notice.subscription_id,
            "window": "final_notice",
            "day_offset": 1,
            "sent_on": "garbage",
        }
        assert not matches(entry, final_notice, today)
