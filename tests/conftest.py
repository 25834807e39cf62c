# tests/conftest.py
import datetime
import itertools
import logging

import pytest

from renewalreminders.database.manager import DatabaseManager
from renewalreminders.models.subscription import Subscription


@pytest.fixture(autouse=True)
def isolated_db_path(tmp_path, monkeypatch):
    """Point the configured database at a temporary file for every test."""
    db_path = tmp_path / "reminders.db"
    monkeypatch.setenv("RENEWALREMINDERS_DB_PATH", str(db_path))
    return db_path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by the CLI so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("renewalreminders")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def today():
    """Fixed evaluation day for deterministic testing."""
    return datetime.date(2025, 3, 10)


@pytest.fixture
def make_subscription(today):
    """Factory for subscriptions renewing a given number of days after today."""
    ids = itertools.count(1)

    def _make(offset=7, cost=12.99, name="Netflix", owner_id="user-1",
              status="active", currency="USD", renewal_date=None, id=None):
        if renewal_date is None:
            renewal_date = (today + datetime.timedelta(days=offset)).isoformat()
        return Subscription(
            owner_id=owner_id,
            name=name,
            cost=cost,
            billing_cycle="monthly",
            renewal_date=renewal_date,
            currency=currency,
            status=status,
            id=next(ids) if id is None else id,
            validate_renewal_date=False,
        )

    return _make


class InMemoryHistory:
    """Notification history kept in a list, shaped like the database rows."""

    def __init__(self):
        self.entries = []
        self.lookups = 0

    def lookup(self, subscription_id, window, day):
        self.lookups += 1
        return [
            entry for entry in self.entries
            if entry["subscription_id"] == subscription_id
            and entry["window"] == window
            and entry["sent_on"] == day.isoformat()
        ]

    def record(self, event, day):
        self.entries.append({
            "subscription_id": event.subscription_id,
            "window": event.window,
            "day_offset": event.day_offset,
            "sent_on": day.isoformat(),
        })


@pytest.fixture
def history():
    return InMemoryHistory()


@pytest.fixture
def db(isolated_db_path):
    manager = DatabaseManager(isolated_db_path)
    yield manager
    manager.close()
