import logging
import time
from datetime import datetime, timezone

import psutil
from flask import Blueprint, current_app, jsonify

from taskmanager.utils import db as database


logger = logging.getLogger(__name__)

system_bp = Blueprint("system", __name__)

_started_at = time.monotonic()


def format_uptime(seconds):
    seconds = int(seconds)
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m {seconds % 60}s"


def _megabytes(value):
    return f"{round(value / 1024 / 1024)}MB"


@system_bp.get("/health")
def health():
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        db_ok = database.ping()
        memory = psutil.Process().memory_info()
        return jsonify(
            status="healthy" if db_ok else "degraded",
            timestamp=timestamp,
            uptime=format_uptime(time.monotonic() - _started_at),
            database="connected" if db_ok else "disconnected",
            memory={"rss": _megabytes(memory.rss), "vms": _megabytes(memory.vms)},
            environment=current_app.config["ENV"],
        ), 200
    except Exception:
        logger.exception("Health check error")
        return jsonify(status="unhealthy", timestamp=timestamp, error="Health check failed"), 500


@system_bp.get("/")
def index():
    return jsonify(
        message="Task Manager API",
        version=current_app.config["API_VERSION"],
        environment=current_app.config["ENV"],
        timestamp=datetime.now(timezone.utc).isoformat(),
        endpoints={"auth": "/api/auth", "tasks": "/api/tasks", "health": "/health"},
        status="operational",
    ), 200
