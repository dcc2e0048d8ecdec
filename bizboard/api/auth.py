from flask import Blueprint, request, jsonify, g, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity, get_jwt

from bizboard.errors import AppError
from bizboard.middleware.auth import auth_required
from bizboard.schemas.auth_schema import (
    LoginSchema,
    RegisterSchema,
    ChangePasswordSchema,
    UserResponseSchema,
    TenantResponseSchema,
)
from bizboard.services import auth_service

# Create Blueprint
bp = Blueprint('auth', __name__)

# Initialize schemas
login_schema = LoginSchema()
register_schema = RegisterSchema()
change_password_schema = ChangePasswordSchema()
user_schema = UserResponseSchema()
tenant_schema = TenantResponseSchema()


def _auth_payload(result):
    return {
        "token": result.token,
        "refreshToken": result.refresh_token,
        "user": user_schema.dump(result.user),
        "tenant": tenant_schema.dump(result.tenant),
    }


@bp.route('/login', methods=['POST'])
def login():
    """
    Login Endpoint

    Request Body:
        {
            "email": "admin@demo.com",
            "password": "password123",
            "subdomain": "demo"          (optional)
        }

    Responses:
      200 ✅ {"success": true, "data": {"token", "refreshToken", "user", "tenant"}}
      400 ❌ Validation error
      401 ❌ Invalid credentials (unknown email, wrong tenant or wrong password)
    """
    credentials = login_schema.load(request.get_json(silent=True) or {})

    tenant = g.get('tenant')
    result = auth_service.login_user(credentials, tenant.tenant_id if tenant else None)

    return jsonify({"success": True, "data": _auth_payload(result)}), 200


@bp.route('/register', methods=['POST'])
def register():
    """
    User Registration Endpoint

    Joins the tenant named by "subdomain", or creates it when it does not
    exist yet. The first user of a new tenant is its admin.

    Request Body:
        {
            "email": "owner@sparkle.com",
            "password": "secret123",
            "firstName": "Sam",
            "lastName": "Owner",
            "companyName": "Sparkle Cleaning",
            "subdomain": "sparkle",
            "businessType": "cleaning"
        }

    Returns:
        201: Registration successful with tokens
        400: Validation error
        409: Email already registered in this tenant
    """
    data = register_schema.load(request.get_json(silent=True) or {})

    result = auth_service.register_user(data)

    return jsonify({"success": True, "data": _auth_payload(result)}), 201


@bp.route('/logout', methods=['POST'])
def logout():
    # Tokens are stateless; the client drops its copy.
    return jsonify({"success": True, "message": "Logged out successfully"}), 200


@bp.route('/me', methods=['GET'])
@auth_required
def me():
    """Return the logged-in user and their tenant."""
    return jsonify({
        "success": True,
        "data": {
            "user": user_schema.dump(g.current_user),
            "tenant": tenant_schema.dump(g.tenant),
        }
    }), 200


@bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    """
    Refresh Token Endpoint
    - Requires a valid refresh token
    - Returns a new access token
    """
    user = auth_service.get_user_by_id(get_jwt_identity(), get_jwt().get('tenant_id'))

    if not user:
        raise AppError("User not found or inactive", 401)

    new_access_token = auth_service.create_user_access_token(user)

    return jsonify({"success": True, "data": {"token": new_access_token}}), 200


@bp.route('/change-password', methods=['POST'])
@auth_required
def change_password():
    data = change_password_schema.load(request.get_json(silent=True) or {})
    user = g.current_user

    if not auth_service.verify_password(data['current_password'], user.password_hash):
        current_app.logger.warning("Change password: wrong current password for user_id=%s", user.user_id)
        raise AppError("Invalid credentials", 401)

    auth_service.update_user_password(user.user_id, user.tenant_id, data['new_password'])

    return jsonify({"success": True, "message": "Password updated"}), 200
