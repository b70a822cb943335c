# tests/test_reminder_sweeper.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from taskmanager.app import create_app
from taskmanager.context import get_context
from taskmanager.services.reminder_sweeper import ReminderSweeper

from .helpers import create_task

NOW = datetime(2030, 6, 1, 12, 0, 0)


def _iso(dt: datetime) -> str:
    return dt.isoformat() + "Z"


def test_sweep_reports_due_tasks_that_are_not_done(app, client, user, headers):
    due = create_task(client, headers, title="due", reminder_time=_iso(NOW - timedelta(minutes=5)))
    exactly_now = create_task(client, headers, title="now", reminder_time=_iso(NOW))
    create_task(client, headers, title="later", reminder_time=_iso(NOW + timedelta(minutes=5)))
    create_task(client, headers, title="finished", status="Done", reminder_time=_iso(NOW - timedelta(hours=1)))
    create_task(client, headers, title="no reminder")

    found = get_context(app).sweeper.sweep(now=NOW)

    assert [r.task_id for r in found] == [due["id"], exactly_now["id"]]
    assert {r.email for r in found} == {user["email"]}
    assert found[0].title == "due"


def test_sweep_repeats_until_task_is_done(app, client, headers):
    task = create_task(client, headers, reminder_time=_iso(NOW - timedelta(minutes=1)))
    sweeper = get_context(app).sweeper

    assert len(sweeper.sweep(now=NOW)) == 1
    assert len(sweeper.sweep(now=NOW + timedelta(minutes=1))) == 1

    client.put(f"/api/tasks/{task['id']}", json={"status": "Done"}, headers=headers)
    assert sweeper.sweep(now=NOW + timedelta(minutes=2)) == []


def test_sweep_logs_each_reminder(app, client, user, headers, caplog):
    create_task(client, headers, title="Pay rent", reminder_time=_iso(NOW - timedelta(minutes=1)))
    caplog.set_level(logging.INFO, logger="taskmanager.services.reminder_sweeper")

    get_context(app).sweeper.sweep(now=NOW)

    messages = [r.getMessage() for r in caplog.records]
    assert "Found 1 tasks with reminders due" in messages
    assert any("Pay rent" in m and user["email"] in m for m in messages)


def test_sweep_with_nothing_due_is_quiet(app, caplog):
    caplog.set_level(logging.INFO, logger="taskmanager.services.reminder_sweeper")
    assert get_context(app).sweeper.sweep(now=NOW) == []
    assert caplog.records == []


def test_failed_sweep_is_logged_not_raised(app, caplog):
    class BrokenStore:
        def find_due_reminders(self, now):
            raise RuntimeError("db down")

    sweeper = ReminderSweeper(app, BrokenStore())
    caplog.set_level(logging.ERROR, logger="taskmanager.services.reminder_sweeper")

    sweeper._run()

    assert "Reminder check failed" in [r.getMessage() for r in caplog.records]


def test_start_and_shutdown(app):
    sweeper = ReminderSweeper(app, get_context(app).tasks, interval_seconds=3600)
    assert not sweeper.running

    sweeper.start()
    try:
        assert sweeper.running
        job = sweeper.scheduler.get_job(ReminderSweeper.JOB_ID)
        assert job is not None
        assert job.trigger.interval == timedelta(hours=1)
    finally:
        sweeper.shutdown()
    assert not sweeper.running


def test_sweeper_disabled_in_testing(app):
    assert not get_context(app).sweeper.running


def test_sweep_setting_controls_startup(tmp_path):
    app = create_app(
        "taskmanager.config.TestingConfig",
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'sweeper.sqlite3'}",
        REMINDER_SWEEP_ENABLED=True,
        REMINDER_SWEEP_INTERVAL_SECONDS=3600,
    )
    context = get_context(app)
    with context:
        assert context.sweeper.running
    assert not context.sweeper.running
