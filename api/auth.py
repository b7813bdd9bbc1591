"""
Authentication blueprint:
- POST /users/register
- POST /users/login
- POST /users/refresh
- POST /users/logout

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived access tokens and longer-lived refresh tokens (JWTs signed with independent secrets)
- Stores refresh tokens in DB (RefreshToken model) so they can be rotated and revoked
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.user import (
    UserRegisterSchema,
    UserLoginSchema,
    RefreshTokenSchema,
    UserOutSchema,
)
from utils.decorators import auth_service

bp = Blueprint("auth", __name__)

register_schema = UserRegisterSchema()
login_schema = UserLoginSchema()
refresh_schema = RefreshTokenSchema()
user_out_schema = UserOutSchema()
login_user_schema = UserOutSchema(only=("id", "email", "full_name"))


@bp.post("/users/register")
def register():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [fullName, email, password]
          properties:
            fullName: { type: string, example: Test User }
            email: { type: string, example: t@example.com }
            password: { type: string, example: password123 }
            phone: { type: string, example: "9876543210" }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    data = register_schema.load(request.get_json(silent=True) or {})
    user = auth_service().register(
        full_name=data["full_name"],
        email=data["email"],
        password=data["password"],
        phone=data.get("phone"),
    )
    return jsonify({"success": True, "user": user_out_schema.dump(user)}), 201


@bp.post("/users/login")
def login():
    """
    Login: return accessToken and refreshToken
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         required: true
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      400:
        description: Validation error
      401:
        description: Invalid email or password
    """
    data = login_schema.load(request.get_json(silent=True) or {})
    result = auth_service().login(data["email"], data["password"])
    return jsonify(
        {
            "success": True,
            "message": "Login successful",
            "accessToken": result.tokens.access_token,
            "refreshToken": result.tokens.refresh_token,
            "user": login_user_schema.dump(result.user),
        }
    ), 200


@bp.post("/users/refresh")
def refresh():
    """
    Use refresh token to obtain new access and refresh tokens (rotation)
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         required: true
         schema:
           type: object
           properties:
             refreshToken: { type: string }
    responses:
      200:
        description: New token pair; the old refresh token stops working
      400:
        description: Missing refresh token
      401:
        description: Invalid or revoked refresh token
      403:
        description: Refresh session expired
    """
    data = refresh_schema.load(request.get_json(silent=True) or {})
    tokens = auth_service().refresh(data["refresh_token"])
    return jsonify(
        {
            "success": True,
            "accessToken": tokens.access_token,
            "refreshToken": tokens.refresh_token,
        }
    ), 200


@bp.post("/users/logout")
def logout():
    """
    Logout: revokes the refresh token
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         required: true
         schema:
           type: object
           properties:
             refreshToken: { type: string }
    responses:
      200:
        description: Logged out
      400:
        description: Missing refresh token
      401:
        description: Token already invalid or expired
    """
    data = refresh_schema.load(request.get_json(silent=True) or {})
    auth_service().logout(data["refresh_token"])
    return jsonify({"success": True, "message": "Logged out successfully"}), 200
