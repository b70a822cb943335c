from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, select, update

from taskmanager.models.task_model import STATUS_DONE, Task
from taskmanager.models.user_model import User
from taskmanager.utils.datetime_utils import utcnow
from taskmanager.utils.db import db


@dataclass(frozen=True)
class DueReminder:
    task_id: int
    title: str
    email: str
    reminder_time: datetime


class TaskStore:
    """Task rows, always addressed through the owning user's id."""

    def list_for_owner(self, owner_id, status=None):
        stmt = select(Task).where(Task.user_id == owner_id)
        if status is not None:
            stmt = stmt.where(Task.status == status)
        stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())
        return list(db.session.execute(stmt).scalars())

    def get_owned(self, owner_id, task_id):
        stmt = select(Task).where(Task.id == task_id, Task.user_id == owner_id)
        return db.session.execute(stmt).scalar_one_or_none()

    def create(self, owner_id, fields):
        task = Task(user_id=owner_id, **fields)
        db.session.add(task)
        db.session.commit()
        db.session.refresh(task)
        return task

    def update_owned(self, owner_id, task_id, updates):
        """Apply ``updates`` in one statement; returns the number of rows touched."""
        values = dict(updates, updated_at=utcnow())
        stmt = (
            update(Task)
            .where(Task.id == task_id, Task.user_id == owner_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = db.session.execute(stmt)
        db.session.commit()
        return result.rowcount

    def delete_owned(self, owner_id, task_id):
        stmt = (
            delete(Task)
            .where(Task.id == task_id, Task.user_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        result = db.session.execute(stmt)
        db.session.commit()
        return result.rowcount

    def find_due_reminders(self, now):
        stmt = (
            select(Task.id, Task.title, Task.reminder_time, User.email)
            .join(User, Task.user_id == User.id)
            .where(Task.reminder_time.is_not(None))
            .where(Task.reminder_time <= now)
            .where(Task.status != STATUS_DONE)
            .order_by(Task.reminder_time, Task.id)
        )
        return [
            DueReminder(task_id=row.id, title=row.title, email=row.email, reminder_time=row.reminder_time)
            for row in db.session.execute(stmt)
        ]
