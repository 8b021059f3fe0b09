"""
Authentication blueprint:
- POST /auth/login
- POST /auth/refresh
- POST /auth/logout
- POST /auth/logout-all
- GET  /auth/me

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived access tokens and longer-lived refresh tokens (JWTs signed with HS256)
- Keeps refresh tokens in the server-side session store, bound to the ip
  address and device id they were issued for, and rotates them on every refresh
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort, current_app

from models.schemas.auth import LoginSchema, RefreshSchema, LogoutSchema
from models.schemas.user import UserOutSchema
from utils.decorators import jwt_required, session_service

bp = Blueprint("auth", __name__, url_prefix="/auth")

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
user_out_schema = UserOutSchema()


def _token_response(pair) -> dict:
    return {
        "access_token": pair.access_token,
        "refresh_token": pair.refresh_token,
        "token_type": "bearer",
        "expires_in": int(current_app.config["JWT_ACCESS_EXPIRES"].total_seconds()),
    }


@bp.post("/login")
def login():
    """
    Login: return access_token and refresh_token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             username: { type: string }
             password: { type: string }
             ip_address: { type: string }
             device_id: { type: string }
    responses:
      200:
        description: OK (returns tokens and the user profile)
      401:
        description: Invalid username or password
      422:
        description: Validation error
    """
    data = login_schema.load(request.get_json(silent=True) or {})
    result = session_service().login(
        data["username"], data["password"], data["ip_address"], data["device_id"]
    )
    body = _token_response(result)
    body["user"] = user_out_schema.dump(result.user)
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Use a refresh token to obtain new access and refresh tokens (rotation)
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             refresh_token: { type: string }
             ip_address: { type: string }
             device_id: { type: string }
    responses:
      200:
        description: OK (returns a new token pair; the old refresh token is spent)
      403:
        description: Invalid, unknown, or revoked refresh token, or ip/device mismatch
    """
    data = refresh_schema.load(request.get_json(silent=True) or {})
    pair = session_service().refresh(data["refresh_token"], data["ip_address"], data["device_id"])
    return jsonify(_token_response(pair)), 200


@bp.post("/logout")
def logout():
    """
    logout: revokes the refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             refresh_token: { type: string }
    responses:
      200:
        description: Always succeeds; token_found tells whether anything was revoked
    """
    data = logout_schema.load(request.get_json(silent=True) or {})
    result = session_service().logout(data["refresh_token"])
    return jsonify({"message": "Logged out successfully", "token_found": result.found}), 200


@bp.post("/logout-all")
@jwt_required()
def logout_all():
    """
    Revoke every refresh token of the current user (log out everywhere)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    revoked = session_service().logout_everywhere(g.current_claims.user_id)
    return jsonify({"message": "Logged out from all devices", "revoked": revoked}), 200


@bp.get("/me")
@jwt_required()
def me():
    """
    Get current user info.
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      404:
        description: User no longer exists
    """
    user = session_service().directory.find_by_id(g.current_claims.user_id)
    if not user:
        abort(404, description="User not found")
    return jsonify({"data": user_out_schema.dump(user)}), 200
