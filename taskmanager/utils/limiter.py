from flask import current_app, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from taskmanager.utils.errors import RateLimitError


AUTH_LIMIT_MESSAGE = "Too many authentication attempts, please try again later"


def global_limit():
    return current_app.config["GLOBAL_RATE_LIMIT"]


def auth_limit():
    return current_app.config["AUTH_RATE_LIMIT"]


# Counted per client address; limits are read from the running app's config
limiter = Limiter(key_func=get_remote_address, application_limits=[global_limit])


def init_app(app):
    limiter.init_app(app)


def limit_auth_routes(blueprint):
    """Apply the stricter auth limit on top of the app-wide one."""
    limiter.limit(auth_limit)(blueprint)
    return blueprint


def rate_limit_error():
    if request.blueprint == "auth":
        return RateLimitError(AUTH_LIMIT_MESSAGE)
    return RateLimitError()
