from flask import Blueprint, request

from taskmanager.context import get_context
from taskmanager.utils.auth import current_identity, token_required
from taskmanager.utils.responses import success


tasks_bp = Blueprint("tasks", __name__)


def _payload():
    return request.get_json(silent=True)


@tasks_bp.get("")
@token_required
def list_tasks():
    user_id = current_identity().user_id
    tasks = get_context().task_service.list_tasks(user_id, request.args.get("status"))
    return success([t.to_dict() for t in tasks])


@tasks_bp.get("/<task_id>")
@token_required
def get_task(task_id):
    user_id = current_identity().user_id
    task = get_context().task_service.get_task(user_id, task_id)
    return success(task.to_dict())


@tasks_bp.post("")
@token_required
def create_task():
    user_id = current_identity().user_id
    task = get_context().task_service.create_task(user_id, _payload())
    return success(task.to_dict(), message="Task created successfully", status=201)


@tasks_bp.put("/<task_id>")
@token_required
def update_task(task_id):
    user_id = current_identity().user_id
    task = get_context().task_service.update_task(user_id, task_id, _payload())
    return success(task.to_dict(), message="Task updated successfully")


@tasks_bp.delete("/<task_id>")
@token_required
def delete_task(task_id):
    user_id = current_identity().user_id
    get_context().task_service.delete_task(user_id, task_id)
    return success(message="Task deleted successfully")
