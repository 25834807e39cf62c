"""
Database schema definition for RenewalReminders.
Defines the SQLite tables and their structure.
"""

import sqlite3

from ..settings import get_db_path

# Schema version
SCHEMA_VERSION = 2


def initialize_db(db_path=None):
    """
    Initialize the SQLite database with the required schema.

    Args:
        db_path (str or Path, optional): Database file. Defaults to the configured path.

    Returns:
        Path or str: The database path that was initialized
    """
    if db_path is None:
        db_path = get_db_path()

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute("PRAGMA foreign_keys = ON")

    cursor.execute('''
    CREATE TABLE IF NOT EXISTS subscriptions (
        id INTEGER PRIMARY KEY,
        owner_id TEXT NOT NULL,
        name TEXT NOT NULL,
        cost REAL NOT NULL DEFAULT 0 CHECK (cost >= 0),
        billing_cycle TEXT NOT NULL DEFAULT 'monthly',
        currency TEXT NOT NULL DEFAULT 'USD',
        renewal_date TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'active',
        notes TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    ''')

    cursor.execute('''
    CREATE TABLE IF NOT EXISTS user_plans (
        owner_id TEXT PRIMARY KEY,
        plan_type TEXT NOT NULL DEFAULT 'free',
        updated_at TEXT NOT NULL
    )
    ''')

    cursor.execute('''
    CREATE TABLE IF NOT EXISTS notification_preferences (
        owner_id TEXT PRIMARY KEY,
        reminder_30_days INTEGER NOT NULL DEFAULT 0,
        reminder_7_days INTEGER NOT NULL DEFAULT 1,
        reminder_1_day INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    ''')

    # One row per emitted reminder; the unique key stops two racing
    # evaluation passes from recording the same reminder twice.
    cursor.execute('''
    CREATE TABLE IF NOT EXISTS notifications (
        id INTEGER PRIMARY KEY,
        owner_id TEXT NOT NULL,
        subscription_id INTEGER REFERENCES subscriptions(id) ON DELETE CASCADE,
        window_type TEXT NOT NULL,
        day_offset INTEGER NOT NULL,
        title TEXT NOT NULL,
        message TEXT NOT NULL,
        sent_on TEXT NOT NULL,
        is_read INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        UNIQUE (subscription_id, window_type, day_offset, sent_on)
    )
    ''')

    cursor.execute('''
    CREATE INDEX IF NOT EXISTS notifications_owner_idx
    ON notifications (owner_id, is_read)
    ''')

    cursor.execute('''
    CREATE TABLE IF NOT EXISTS metadata (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    ''')

    cursor.execute('''
    INSERT OR REPLACE INTO metadata (key, value)
    VALUES ('schema_version', ?)
    ''', (str(SCHEMA_VERSION),))

    conn.commit()
    conn.close()

    return db_path


if __name__ == "__main__":
    db_path = initialize_db()
    print(f"Database initialized at: {db_path}")
