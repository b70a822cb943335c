from datetime import datetime, timezone

from flask import Blueprint, jsonify, request

from taskmanager.context import get_context
from taskmanager.utils.limiter import limit_auth_routes
from taskmanager.utils.responses import success


auth_bp = limit_auth_routes(Blueprint("auth", __name__))


@auth_bp.post("/register")
def register():
    identity = get_context().auth.register(request.get_json(silent=True))
    return success(identity, message="User registered successfully", status=201)


@auth_bp.post("/login")
def login():
    identity = get_context().auth.login(request.get_json(silent=True))
    return success(identity, message="Login successful")


@auth_bp.get("/health")
def health():
    return jsonify(
        success=True,
        message="Auth service is healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service="authentication",
    ), 200
