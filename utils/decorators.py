from __future__ import annotations
from functools import wraps
from flask import request, g, abort, current_app

from services.session_service import SessionService


def session_service() -> SessionService:
    """The SessionService wired into the running app by create_app()."""
    return current_app.extensions["session_service"]


def jwt_required():
    """
    Require a valid access token in the Authorization header.

    Missing header -> 401; a token that fails verification raises
    InvalidTokenError (403). The verified claims land in g.current_claims.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            auth = request.headers.get("Authorization", "")
            token = auth.split(" ", 1)[1].strip() if auth.startswith("Bearer ") else ""
            if not token:
                abort(401, description="Access token required")
            g.current_claims = session_service().verify_access_token(token)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
