"""Bearer-token access control for protected routes.

``token_required`` checks the Authorization header itself so that a missing
header and a malformed one produce different errors, then hands the token to
Flask-JWT-Extended for signature, expiry, issuer and audience checks. The
resolved identity comes from the claims only; the user table is not read.
"""

import logging
from dataclasses import dataclass
from functools import wraps

from flask import g, request
from flask_jwt_extended import JWTManager, get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError
from jwt import InvalidTokenError as JWTInvalidTokenError

from taskmanager.utils.errors import (
    InvalidTokenError,
    InvalidTokenFormatError,
    MissingTokenError,
    TokenExpiredError,
)


logger = logging.getLogger(__name__)

jwt_manager = JWTManager()


@dataclass(frozen=True)
class Identity:
    user_id: int
    issued_at: int
    expires_at: int


def init_app(app):
    jwt_manager.init_app(app)


def _check_header():
    header = request.headers.get("Authorization")
    if not header or not header.strip():
        raise MissingTokenError()
    parts = header.split()
    if len(parts) != 2 or parts[0] != "Bearer":
        raise InvalidTokenFormatError()


def authenticate():
    """Verify the request's bearer token and return the caller's Identity."""
    _check_header()
    try:
        verify_jwt_in_request()
        claims = get_jwt()
        identity = Identity(
            user_id=int(claims["sub"]),
            issued_at=claims["iat"],
            expires_at=claims["exp"],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except (JWTInvalidTokenError, JWTExtendedException, KeyError, TypeError, ValueError) as exc:
        logger.debug("Rejected token: %s", exc)
        raise InvalidTokenError()
    g.identity = identity
    return identity


def token_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        authenticate()
        return fn(*args, **kwargs)

    return wrapper


def current_identity():
    return g.identity
