"""
tests/test_composer.py

Tests for reminder message rendering.
"""

import pytest

from renewalreminders.engine.composer import compose, format_amount, format_days
from renewalreminders.models.reminder import ReminderEvent


def make_event(window, day_offset, cost=12.99, name="Adobe Creative Suite", currency="USD"):
    return ReminderEvent(
        subscription_id=1,
        owner_id="user-1",
        window=window,
        day_offset=day_offset,
        service_name=name,
        cost=cost,
        currency=currency,
    )


@pytest.mark.parametrize("window,offset", [
    ("overdue", -4),
    ("due_today", 0),
    ("final_notice", 1),
    ("renewal_reminder", 5),
    ("thirty_day_notice", 30),
])
def test_body_contains_cost_and_name(window, offset):
    message = compose(make_event(window, offset, cost=52.5))

    assert "$52.50" in message["body"]
    assert "Adobe Creative Suite" in message["body"]
    assert "Adobe Creative Suite" in message["title"]


def test_titles_per_window():
    assert compose(make_event("overdue", -1))["title"] == "OVERDUE: Adobe Creative Suite"
    assert compose(make_event("due_today", 0))["title"] == "Renewal Today: Adobe Creative Suite"
    assert compose(make_event("final_notice", 1))["title"] == "Final Notice: Adobe Creative Suite"
    assert compose(make_event("renewal_reminder", 3))["title"] == "Renewal Reminder: Adobe Creative Suite"
    assert compose(make_event("thirty_day_notice", 30))["title"] == "30-Day Renewal Notice: Adobe Creative Suite"


def test_overdue_body_pluralises():
    assert "1 day overdue" in compose(make_event("overdue", -1))["body"]
    assert "3 days overdue" in compose(make_event("overdue", -3))["body"]


def test_reminder_body_states_exact_days():
    body = compose(make_event("renewal_reminder", 6, cost=9.99, name="Spotify"))["body"]
    assert body == "Spotify will renew in 6 days for $9.99. Review if needed."


def test_name_is_verbatim():
    name = "Cloud {Storage} 100% & more"
    message = compose(make_event("due_today", 0, name=name))
    assert name in message["body"]


def test_unknown_window_raises():
    with pytest.raises(KeyError):
        compose(make_event("weekly_digest", 3))


class TestFormatting:

    @pytest.mark.parametrize("cost,currency,expected", [
        (12.99, "USD", "$12.99"),
        (10, "USD", "$10.00"),
        (0.5, "eur", "€0.50"),
        (1234.5, "GBP", "£1234.50"),
        (5, "SEK", "SEK 5.00"),
    ])
    def test_format_amount(self, cost, currency, expected):
        assert format_amount(cost, currency) == expected

    def test_format_days(self):
        assert format_days(1) == "1 day"
        assert format_days(-1) == "1 day"
        assert format_days(7) == "7 days"
