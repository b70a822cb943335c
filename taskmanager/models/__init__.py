from taskmanager.models.task_model import TASK_STATUSES, Task
from taskmanager.models.user_model import User

__all__ = ["TASK_STATUSES", "Task", "User"]
