"""
Database manager for RenewalReminders.
Provides connection management and the store operations the reminder engine
reads from and the reminder job writes to.
"""

import datetime
import logging
import sqlite3

from .schema import initialize_db
from ..errors import InvalidSubscriptionData
from ..engine.policy import DEFAULT_PLAN_TIER, PLAN_TIERS
from ..models.preferences import ReminderPreferences
from ..models.reminder import URGENT_WINDOWS
from ..models.subscription import Subscription
from ..utils.date_utils import parse_date

logger = logging.getLogger(__name__)

# Retention for the notification feed
READ_RETENTION_DAYS = 7
UNREAD_RETENTION_DAYS = 30


def _now():
    return datetime.datetime.now().isoformat(timespec="seconds")


class DatabaseManager:
    """
    Manager class for database operations.
    Handles connection, transactions, and CRUD operations.
    """

    def __init__(self, db_path=None):
        """
        Initialize the database manager.

        Args:
            db_path (str or Path, optional): Database file. Defaults to the configured path.
        """
        self.db_path = initialize_db(db_path)
        self.conn = None
        self.cursor = None

    def connect(self):
        """Connect to the SQLite database."""
        if self.conn is None:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row  # Enable row access by column name
            self.cursor = self.conn.cursor()

            # Enable foreign key constraints
            self.cursor.execute("PRAGMA foreign_keys = ON")

        return self.conn, self.cursor

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
            self.cursor = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # Subscriptions

    def add_subscription(self, subscription):
        """
        Add a new subscription to the database.

        Args:
            subscription (Subscription): The subscription to store

        Returns:
            int: The new subscription ID
        """
        conn, cursor = self.connect()
        timestamp = _now()

        cursor.execute('''
        INSERT INTO subscriptions (owner_id, name, cost, billing_cycle, currency, renewal_date,
                                   status, notes, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ''', (
            subscription.owner_id,
            subscription.name,
            subscription.cost,
            subscription.billing_cycle,
            subscription.currency,
            subscription.renewal_date,
            subscription.status,
            subscription.notes,
            timestamp,
            timestamp,
        ))
        conn.commit()

        subscription.id = cursor.lastrowid
        logger.info("Added subscription %s for owner %s", subscription.id, subscription.owner_id)
        return subscription.id

    def get_subscription_by_id(self, subscription_id):
        """
        Retrieve a specific subscription by ID.

        Returns:
            Subscription or None: The subscription, or None if not found
        """
        conn, cursor = self.connect()

        cursor.execute("SELECT * FROM subscriptions WHERE id = ?", (subscription_id,))
        row = cursor.fetchone()

        if row:
            return Subscription.from_dict({key: row[key] for key in row.keys()})
        return None

    def get_subscriptions(self, owner_id=None, status=None):
        """
        Get raw subscription rows, optionally filtered by owner and status.

        Rows are returned as dictionaries so that malformed records can be
        reported individually by the caller.

        Returns:
            list: List of subscription dictionaries ordered by ID
        """
        conn, cursor = self.connect()

        query = "SELECT * FROM subscriptions"
        where_clauses = []
        params = []

        if owner_id is not None:
            where_clauses.append("owner_id = ?")
            params.append(str(owner_id))

        if status is not None:
            where_clauses.append("status = ?")
            params.append(status)

        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY id"

        cursor.execute(query, params)
        return [{key: row[key] for key in row.keys()} for row in cursor.fetchall()]

    def get_active_subscriptions(self, owner_id=None):
        """Get raw rows for active subscriptions, optionally for one owner."""
        return self.get_subscriptions(owner_id=owner_id, status="active")

    def count_subscriptions(self, owner_id):
        """Count an owner's subscriptions, cancelled ones included."""
        conn, cursor = self.connect()
        cursor.execute("SELECT COUNT(*) FROM subscriptions WHERE owner_id = ?", (str(owner_id),))
        return cursor.fetchone()[0]

    def update_subscription_status(self, subscription_id, new_status):
        """
        Update the status of a subscription.

        Returns:
            bool: True if a subscription was updated
        """
        if new_status not in Subscription.VALID_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(Subscription.VALID_STATUSES)}")

        conn, cursor = self.connect()
        cursor.execute(
            "UPDATE subscriptions SET status = ?, updated_at = ? WHERE id = ?",
            (new_status, _now(), subscription_id)
        )
        conn.commit()
        return cursor.rowcount > 0

    def delete_subscription(self, subscription_id):
        """
        Delete a subscription and its notifications.

        Returns:
            bool: True if a subscription was deleted
        """
        conn, cursor = self.connect()
        cursor.execute("DELETE FROM subscriptions WHERE id = ?", (subscription_id,))
        conn.commit()
        return cursor.rowcount > 0

    # Plans

    def get_owner_plan_tier(self, owner_id):
        """Get an owner's plan tier; owners without a plan row are on the free tier."""
        conn, cursor = self.connect()
        cursor.execute("SELECT plan_type FROM user_plans WHERE owner_id = ?", (str(owner_id),))
        row = cursor.fetchone()
        return row["plan_type"] if row else DEFAULT_PLAN_TIER

    def set_owner_plan_tier(self, owner_id, tier):
        """Set an owner's plan tier."""
        if tier not in PLAN_TIERS:
            raise ValueError(f"Plan must be one of: {', '.join(PLAN_TIERS)}")

        conn, cursor = self.connect()
        cursor.execute('''
        INSERT INTO user_plans (owner_id, plan_type, updated_at)
        VALUES (?, ?, ?)
        ON CONFLICT (owner_id) DO UPDATE SET plan_type = excluded.plan_type,
                                             updated_at = excluded.updated_at
        ''', (str(owner_id), tier, _now()))
        conn.commit()

    # Preferences

    def get_owner_preferences(self, owner_id):
        """
        Get an owner's reminder preferences.

        Returns:
            ReminderPreferences or None: None if the owner has no preference row
        """
        conn, cursor = self.connect()
        cursor.execute(
            "SELECT * FROM notification_preferences WHERE owner_id = ?", (str(owner_id),)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return ReminderPreferences.from_dict({key: row[key] for key in row.keys()})

    def get_or_create_owner_preferences(self, owner_id):
        """Get an owner's preferences, creating the default row on first use."""
        preferences = self.get_owner_preferences(owner_id)
        if preferences is None:
            preferences = ReminderPreferences.defaults(owner_id=str(owner_id))
            self.save_owner_preferences(owner_id, preferences)
        return preferences

    def save_owner_preferences(self, owner_id, preferences):
        """Insert or replace an owner's reminder preferences."""
        conn, cursor = self.connect()
        timestamp = _now()
        cursor.execute('''
        INSERT INTO notification_preferences (owner_id, reminder_30_days, reminder_7_days,
                                              reminder_1_day, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
        ON CONFLICT (owner_id) DO UPDATE SET reminder_30_days = excluded.reminder_30_days,
                                             reminder_7_days = excluded.reminder_7_days,
                                             reminder_1_day = excluded.reminder_1_day,
                                             updated_at = excluded.updated_at
        ''', (
            str(owner_id),
            int(preferences.reminder_30_days),
            int(preferences.reminder_7_days),
            int(preferences.reminder_1_day),
            timestamp,
            timestamp,
        ))
        conn.commit()

    # Notification history

    def get_notification_history(self, subscription_id, window, day):
        """
        Get notifications already recorded for a subscription and window on a day.

        Returns:
            list: Dictionaries with subscription_id, window, day_offset and sent_on
        """
        conn, cursor = self.connect()
        cursor.execute('''
        SELECT id, subscription_id, window_type, day_offset, sent_on
        FROM notifications
        WHERE subscription_id = ? AND window_type = ? AND sent_on = ?
        ''', (subscription_id, window, parse_date(day).isoformat()))

        return [
            {
                'id': row['id'],
                'subscription_id': row['subscription_id'],
                'window': row['window_type'],
                'day_offset': row['day_offset'],
                'sent_on': row['sent_on'],
            }
            for row in cursor.fetchall()
        ]

    def record_notification(self, event, day):
        """
        Record an emitted reminder.

        Args:
            event (ReminderEvent): The reminder that was emitted
            day (datetime.date): Calendar day of emission

        Returns:
            bool: False if the same reminder was already recorded for that day

        Raises:
            InvalidSubscriptionData: If the subscription no longer exists
        """
        conn, cursor = self.connect()
        try:
            cursor.execute('''
            INSERT INTO notifications (owner_id, subscription_id, window_type, day_offset,
                                       title, message, sent_on, is_read, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?)
            ''', (
                event.owner_id,
                event.subscription_id,
                event.window,
                event.day_offset,
                event.title,
                event.body,
                parse_date(day).isoformat(),
                _now(),
            ))
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE" not in str(e):
                raise InvalidSubscriptionData(
                    event.subscription_id, f"cannot record notification: {e}"
                ) from e
            logger.info("Notification %s for subscription %s already recorded on %s",
                        event.window, event.subscription_id, day)
            return False

        conn.commit()
        return True

    def get_notifications(self, owner_id=None, unread_only=False, urgent_only=False, limit=50):
        """
        Get recorded notifications, newest first.

        Returns:
            list: List of notification dictionaries
        """
        conn, cursor = self.connect()

        query = "SELECT * FROM notifications"
        where_clauses = []
        params = []

        if owner_id is not None:
            where_clauses.append("owner_id = ?")
            params.append(str(owner_id))

        if unread_only or urgent_only:
            where_clauses.append("is_read = 0")

        if urgent_only:
            placeholders = ",".join(["?" for _ in URGENT_WINDOWS])
            where_clauses.append(f"window_type IN ({placeholders})")
            params.extend(URGENT_WINDOWS)

        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY sent_on DESC, id DESC"

        if limit:
            query += " LIMIT ?"
            params.append(int(limit))

        cursor.execute(query, params)
        return [{key: row[key] for key in row.keys()} for row in cursor.fetchall()]

    def get_unread_count(self, owner_id):
        conn, cursor = self.connect()
        cursor.execute(
            "SELECT COUNT(*) FROM notifications WHERE owner_id = ? AND is_read = 0",
            (str(owner_id),)
        )
        return cursor.fetchone()[0]

    def mark_notification_read(self, notification_id, owner_id=None):
        """
        Mark one notification as read.

        Returns:
            bool: True if a notification was updated
        """
        conn, cursor = self.connect()
        query = "UPDATE notifications SET is_read = 1 WHERE id = ?"
        params = [notification_id]
        if owner_id is not None:
            query += " AND owner_id = ?"
            params.append(str(owner_id))

        cursor.execute(query, params)
        conn.commit()
        return cursor.rowcount > 0

    def mark_all_read(self, owner_id):
        """Mark every unread notification of an owner as read; returns the count."""
        conn, cursor = self.connect()
        cursor.execute(
            "UPDATE notifications SET is_read = 1 WHERE owner_id = ? AND is_read = 0",
            (str(owner_id),)
        )
        conn.commit()
        return cursor.rowcount

    def cleanup_old_notifications(self, today):
        """
        Delete read notifications older than a week and unread ones older than a month.

        Args:
            today (datetime.date): Reference day

        Returns:
            int: Number of notifications deleted
        """
        today = parse_date(today)
        read_cutoff = (today - datetime.timedelta(days=READ_RETENTION_DAYS)).isoformat()
        unread_cutoff = (today - datetime.timedelta(days=UNREAD_RETENTION_DAYS)).isoformat()

        conn, cursor = self.connect()
        cursor.execute(
            "DELETE FROM notifications WHERE is_read = 1 AND sent_on < ?", (read_cutoff,)
        )
        deleted = cursor.rowcount
        cursor.execute(
            "DELETE FROM notifications WHERE is_read = 0 AND sent_on < ?", (unread_cutoff,)
        )
        deleted += cursor.rowcount
        conn.commit()

        logger.info("Cleaned up %d old notifications", deleted)
        return deleted
