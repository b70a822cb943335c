"""Owner-scoped task operations.

Every lookup filters on the caller's user id, so a task that belongs to
someone else is reported exactly like one that does not exist. Updates and
deletes check ownership and then write in a second statement; there is no
transaction around the pair and concurrent writers get last-write-wins.
"""

import logging

from taskmanager.schemas.base import load
from taskmanager.schemas.task_schemas import (
    TaskCreateSchema,
    TaskUpdateSchema,
    parse_status_filter,
)
from taskmanager.utils.errors import NotFoundError


logger = logging.getLogger(__name__)


MAX_TASK_ID = 2**63 - 1


def _task_not_found():
    return NotFoundError("Task not found", code="TASK_NOT_FOUND")


def _parse_task_id(raw):
    try:
        task_id = int(raw)
    except (TypeError, ValueError):
        raise _task_not_found()
    # Anything outside a signed 64-bit key can never name a stored row
    if not 1 <= task_id <= MAX_TASK_ID:
        raise _task_not_found()
    return task_id


class TaskService:
    def __init__(self, tasks):
        self.tasks = tasks

    def list_tasks(self, owner_id, status_filter=None):
        status = parse_status_filter(status_filter)
        return self.tasks.list_for_owner(owner_id, status=status)

    def get_task(self, owner_id, task_id):
        task = self.tasks.get_owned(owner_id, _parse_task_id(task_id))
        if task is None:
            raise _task_not_found()
        return task

    def create_task(self, owner_id, payload):
        form = load(TaskCreateSchema, payload)
        task = self.tasks.create(owner_id, form.to_fields())
        logger.info("Task %s created for user %s", task.id, owner_id)
        return task

    def update_task(self, owner_id, task_id, payload):
        # Committing expires loaded rows, so only the plain id is used after a write
        task_id = self.get_task(owner_id, task_id).id
        updates = load(TaskUpdateSchema, payload).to_updates()

        touched = self.tasks.update_owned(owner_id, task_id, updates)
        if touched == 0:
            logger.info("Task %s disappeared before update for user %s", task_id, owner_id)
        # Reload so the response reflects what is stored now
        return self.get_task(owner_id, task_id)

    def delete_task(self, owner_id, task_id):
        task_id = self.get_task(owner_id, task_id).id
        self.tasks.delete_owned(owner_id, task_id)
        logger.info("Task %s deleted for user %s", task_id, owner_id)
