"""
tests/test_cli.py

End-to-end tests for the command line interface.
"""

import pytest

from renewalreminders.cli import build_parser, get_all_commands, main


@pytest.fixture
def cli(isolated_db_path, capsys):
    """Run the CLI against the test database and return (exit code, stdout)."""
    def _run(*argv):
        code = main(["--db", str(isolated_db_path), *argv])
        return code, capsys.readouterr().out
    return _run


def add(cli, name="Netflix", owner="user-1", renewal_date="2025-03-17", cost="12.99", *extra):
    return cli("add", "--owner", owner, "--name", name, "--cost", cost,
               "--renewal-date", renewal_date, *extra)


def test_all_commands_registered():
    assert sorted(get_all_commands()) == [
        "add", "notifications", "preferences", "remind", "set-plan", "update-status",
    ]


def test_no_command_prints_help(cli):
    code, out = cli()
    assert code == 0
    assert "remind" in out


def test_version(capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--version"])
    assert "RenewalReminders CLI v" in capsys.readouterr().out


class TestAdd:

    def test_add_subscription(self, cli):
        code, out = add(cli)

        assert code == 0
        assert "Subscription 'Netflix' added successfully (ID: 1)" in out
        assert "Renewal Date: 2025-03-17" in out

    def test_renewal_date_from_start_date(self, cli):
        code, out = cli("add", "--owner", "u", "--name", "Adobe", "--cost", "54.99",
                        "--billing-cycle", "yearly", "--start-date", "2024-02-29")

        assert code == 0
        assert "Renewal Date: 2025-02-28" in out

    @pytest.mark.parametrize("argv,message", [
        (("--cost", "-5"), "Invalid cost"),
        (("--cost", "abc"), "Invalid cost"),
        (("--currency", "XYZ"), "not a supported currency"),
        (("--renewal-date", "17/03/2025"), "Invalid renewal date format"),
    ])
    def test_invalid_input(self, cli, argv, message):
        base = {"--cost": "5", "--currency": "USD", "--renewal-date": "2025-03-17"}
        base.update(dict(zip(argv[::2], argv[1::2])))
        flat = [item for pair in base.items() for item in pair]

        code, out = cli("add", "--owner", "u", "--name", "X", *flat)

        assert code == 1
        assert message in out

    def test_free_plan_limit(self, cli):
        for index in range(5):
            assert add(cli, name=f"Service {index}")[0] == 0

        code, out = add(cli, name="One too many")
        assert code == 1
        assert "free plan is limited to 5 subscriptions" in out

        assert cli("set-plan", "--owner", "user-1", "--plan", "pro")[0] == 0
        assert add(cli, name="One too many")[0] == 0


class TestRemind:

    def test_seven_day_reminder(self, cli):
        add(cli)

        code, out = cli("remind", "--date", "2025-03-10")

        assert code == 0
        assert "Netflix will renew in 7 days for $12.99. Review if needed." in out
        assert "Sent: 1" in out

    def test_repeat_run_sends_nothing(self, cli):
        add(cli)
        cli("remind", "--date", "2025-03-10")

        code, out = cli("remind", "--date", "2025-03-10")

        assert code == 0
        assert "No reminders due." in out
        assert "Already sent: 1" in out

    def test_dry_run(self, cli):
        add(cli, renewal_date="2025-03-07")

        code, out = cli("remind", "--date", "2025-03-10", "--dry-run")
        assert "Netflix payment is 3 days overdue! ($12.99)" in out
        assert "To send: 1" in out

        _, out = cli("notifications", "--owner", "user-1")
        assert "No notifications found." in out

    def test_cancelled_subscription_is_silent(self, cli):
        add(cli, renewal_date="2025-03-10")
        assert cli("update-status", "1", "--status", "cancelled")[0] == 0

        _, out = cli("remind", "--date", "2025-03-10")

        assert "No reminders due." in out

        _, out = cli("update-status", "1", "--status", "active")
        assert "Reminders resume" in out

    def test_invalid_date(self, cli):
        code, out = cli("remind", "--date", "someday")
        assert code == 1
        assert out.startswith("Error:")


class TestPreferencesAndPlans:

    def test_preferences_defaults(self, cli):
        code, out = cli("preferences", "--owner", "user-1")

        assert code == 0
        assert "user-1 (free plan)" in out
        assert "no (free plan)" in out

    def test_final_notice_needs_plan_and_opt_in(self, cli):
        add(cli, renewal_date="2025-03-11")

        _, out = cli("remind", "--date", "2025-03-10", "--dry-run")
        assert "No reminders due." in out

        cli("set-plan", "--owner", "user-1", "--plan", "business")
        code, out = cli("preferences", "--owner", "user-1", "--one-day", "on")
        assert code == 0
        assert "- 1 day before: on" in out

        _, out = cli("remind", "--date", "2025-03-10")
        assert "Netflix renews TOMORROW for $12.99. Last chance to cancel!" in out

    def test_show_current_plan(self, cli):
        _, out = cli("set-plan", "--owner", "user-1")
        assert "Owner user-1 is on the free plan." in out

        _, out = cli("set-plan", "--owner", "user-1", "--plan", "pro")
        assert "Plan for user-1: free -> pro" in out

    def test_help_plans(self, cli):
        code, out = cli("set-plan", "--help-plans")
        assert code == 0
        assert "unlimited" in out


class TestNotifications:

    def test_list_and_mark_read(self, cli):
        add(cli, renewal_date="2025-03-10")
        cli("remind", "--date", "2025-03-10")

        code, out = cli("notifications", "--owner", "user-1", "--urgent")
        assert code == 0
        assert "Renewal Today: Netflix" in out
        assert "1 unread" in out

        code, out = cli("notifications", "--owner", "user-1", "--mark-read", "1")
        assert code == 0

        _, out = cli("notifications", "--owner", "user-1", "--unread")
        assert "No notifications found." in out

    def test_owner_required(self, cli):
        code, out = cli("notifications")
        assert code == 1
        assert "--owner is required" in out

    def test_mark_unknown_notification(self, cli):
        code, out = cli("notifications", "--owner", "user-1", "--mark-read", "42")
        assert code == 1
        assert "not found" in out

    def test_cleanup(self, cli):
        code, out = cli("notifications", "--cleanup")
        assert code == 0
        assert "Deleted 0 old notification(s)." in out
