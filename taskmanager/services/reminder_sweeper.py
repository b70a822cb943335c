"""Periodic scan for due task reminders.

Each sweep logs every task whose reminder time has passed and which is not
Done. Nothing is delivered and nothing is remembered between sweeps: a due
task is reported again on every run until it is marked Done or its reminder
time is moved.
"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from taskmanager.utils.datetime_utils import isoformat, to_utc_naive, utcnow


logger = logging.getLogger(__name__)


class ReminderSweeper:
    JOB_ID = "reminder-sweep"

    def __init__(self, app, tasks, interval_seconds=60):
        self.app = app
        self.tasks = tasks
        self.interval_seconds = interval_seconds
        self.scheduler = None

    def sweep(self, now=None):
        now = to_utc_naive(now) if now is not None else utcnow()
        with self.app.app_context():
            due = self.tasks.find_due_reminders(now)

        if due:
            logger.info("Found %d tasks with reminders due", len(due))
        for reminder in due:
            logger.info(
                "Reminder: task %s %r is due for user %s (reminder_time=%s)",
                reminder.task_id,
                reminder.title,
                reminder.email,
                isoformat(reminder.reminder_time),
            )
        return due

    def _run(self):
        try:
            self.sweep()
        except Exception:
            logger.exception("Reminder check failed")

    @property
    def running(self):
        return self.scheduler is not None and self.scheduler.running

    def start(self):
        if self.running:
            return
        self.scheduler = BackgroundScheduler(timezone="UTC")
        self.scheduler.add_job(
            self._run,
            IntervalTrigger(seconds=self.interval_seconds),
            id=self.JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info("Reminder sweeper started (every %ss)", self.interval_seconds)

    def shutdown(self):
        if not self.running:
            return
        self.scheduler.shutdown(wait=False)
        self.scheduler = None
        logger.info("Reminder sweeper stopped")
