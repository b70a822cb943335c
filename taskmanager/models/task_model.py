from taskmanager.utils.datetime_utils import isoformat, utcnow
from taskmanager.utils.db import db


STATUS_TODO = "To Do"
STATUS_IN_PROGRESS = "In Progress"
STATUS_DONE = "Done"
TASK_STATUSES = (STATUS_TODO, STATUS_IN_PROGRESS, STATUS_DONE)


class Task(db.Model):
    __tablename__ = "tasks"
    __table_args__ = (
        db.CheckConstraint(
            "status IN ('To Do', 'In Progress', 'Done')", name="ck_tasks_status"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    status = db.Column(db.String(20), nullable=False, default=STATUS_TODO, index=True)
    deadline = db.Column(db.DateTime, nullable=True, index=True)
    # Reminder timestamp scanned by the sweeper
    reminder_time = db.Column(db.DateTime, nullable=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    owner = db.relationship("User", back_populates="tasks")

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "deadline": isoformat(self.deadline),
            "reminder_time": isoformat(self.reminder_time),
            "user_id": self.user_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Task {self.id} {self.title!r}>"
