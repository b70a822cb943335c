import logging
import sqlite3
import time

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from taskmanager.utils.errors import DatabaseUnavailableError


logger = logging.getLogger(__name__)

db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def engine_options(config):
    """Pool settings for server databases; SQLite keeps SQLAlchemy's defaults."""
    uri = config["SQLALCHEMY_DATABASE_URI"]
    if uri.startswith("sqlite"):
        return {"pool_pre_ping": True}
    return {
        "pool_size": config["DB_POOL_SIZE"],
        "max_overflow": 0,
        "pool_timeout": config["DB_POOL_TIMEOUT"],
        "pool_recycle": config["DB_POOL_RECYCLE"],
        "pool_pre_ping": True,
    }


def init_app(app):
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", engine_options(app.config))
    db.init_app(app)

    # Tables must be known to the metadata before create_all
    from taskmanager.models import task_model, user_model  # noqa: F401

    with app.app_context():
        wait_for_database(
            retries=app.config["DB_CONNECT_RETRIES"],
            delay=app.config["DB_CONNECT_DELAY"],
        )
        db.create_all()
        logger.info("Database tables initialized")


def wait_for_database(retries=5, delay=1.0):
    """Ping the database, retrying with exponential backoff.

    Must run inside an app context. Raises DatabaseUnavailableError once the
    retries are exhausted.
    """
    for attempt in range(1, retries + 1):
        try:
            with db.engine.connect() as conn:
                now = conn.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
            logger.info("Connected to database %s at %s", db.engine.url.render_as_string(hide_password=True), now)
            return
        except SQLAlchemyError as exc:
            logger.error("Database connection attempt %d failed: %s", attempt, exc)
            if attempt == retries:
                break
            logger.info("Retrying in %.1fs...", delay)
            time.sleep(delay)
            delay *= 2
    raise DatabaseUnavailableError(f"Failed to connect to database after {retries} attempts")


def ping():
    try:
        return db.session.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        db.session.rollback()
        return False
