import logging

from flask import current_app

from taskmanager.services.auth_service import AuthService
from taskmanager.services.reminder_sweeper import ReminderSweeper
from taskmanager.services.task_service import TaskService
from taskmanager.services.task_store import TaskStore
from taskmanager.services.user_store import UserStore
from taskmanager.utils.db import db
from taskmanager.utils.security import PasswordHasher


logger = logging.getLogger(__name__)

EXTENSION_KEY = "taskmanager"


class AppContext:
    """Everything a request handler needs, built once per app and closed at shutdown."""

    def __init__(self, app):
        self.app = app
        self.hasher = PasswordHasher(rounds=app.config["BCRYPT_LOG_ROUNDS"])
        self.users = UserStore()
        self.tasks = TaskStore()
        self.auth = AuthService(self.users, self.hasher)
        self.task_service = TaskService(self.tasks)
        self.sweeper = ReminderSweeper(
            app,
            self.tasks,
            interval_seconds=app.config["REMINDER_SWEEP_INTERVAL_SECONDS"],
        )
        self.closed = False

    def start(self):
        if self.app.config["REMINDER_SWEEP_ENABLED"]:
            self.sweeper.start()
        return self

    def close(self):
        if self.closed:
            return
        self.closed = True
        self.sweeper.shutdown()
        with self.app.app_context():
            db.engine.dispose()
        logger.info("Application resources released")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def install(app):
    context = AppContext(app)
    app.extensions[EXTENSION_KEY] = context
    return context


def get_context(app=None):
    app = app or current_app
    return app.extensions[EXTENSION_KEY]
