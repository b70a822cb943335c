import atexit
import os

from taskmanager.app import create_app
from taskmanager.context import get_context


# Expose a module-level `app` for WSGI servers (gunicorn expects `app:app`).
# Startup fails here, before any request is served, if the JWT secret is
# missing or the database cannot be reached.
app = create_app()

# Stop the reminder sweeper and release pooled connections on interpreter exit.
atexit.register(get_context(app).close)


if __name__ == "__main__":
    # Local development only: run the built-in server.
    # The reloader would start a second sweeper in the child process.
    with get_context(app):
        app.run(
            host=app.config["HOST"],
            port=int(os.environ.get("PORT", app.config["PORT"])),
            debug=app.config["DEBUG"],
            use_reloader=False,
        )
