"""
Authentication / authorization decorators.

    @bp.route('/stats')
    @auth_required
    def stats():
        g.current_user, g.tenant are set here

flask_jwt_extended verifies the bearer token (missing, invalid and expired
tokens are answered by the loaders in bizboard.errors); this module then
loads the user/tenant pair the token points at.
"""
from functools import wraps

from flask import current_app, g
from flask_jwt_extended import verify_jwt_in_request, get_jwt, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from bizboard.errors import AppError
from bizboard.extensions import db
from bizboard.models.tenant import Tenant
from bizboard.models.user import User


def load_authenticated_user():
    """Load the active user named by the verified token into g."""
    user_id = get_jwt_identity()
    tenant_id = get_jwt().get('tenant_id')

    row = (
        db.session.query(User, Tenant)
        .join(Tenant, User.tenant_id == Tenant.tenant_id)
        .filter(User.user_id == user_id)
        .filter(User.tenant_id == tenant_id)
        .filter(User.is_active.is_(True))
        .first()
    )

    if row is None:
        current_app.logger.warning("Auth: user_id=%s not found or inactive", user_id)
        raise AppError("User not found or inactive", 401)

    user, tenant = row

    # Token issued for one tenant must not be used against another
    current_tenant = g.get('tenant')
    if current_tenant is not None and current_tenant.tenant_id != user.tenant_id:
        current_app.logger.warning(
            "Auth: token tenant_id=%s used against tenant_id=%s",
            user.tenant_id, current_tenant.tenant_id
        )
        raise AppError("Token tenant mismatch", 403)

    g.current_user = user
    if current_tenant is None:
        g.tenant = tenant
    return user


def auth_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        load_authenticated_user()
        return fn(*args, **kwargs)
    return wrapper


def optional_auth(fn):
    """Set g.current_user when a valid token is sent; carry on without one otherwise."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.current_user = None
        try:
            if verify_jwt_in_request(optional=True):
                load_authenticated_user()
        except (JWTExtendedException, PyJWTError, AppError) as exc:
            current_app.logger.debug("Optional auth ignored bad token: %s", exc)
            g.current_user = None
        return fn(*args, **kwargs)
    return wrapper


def require_role(*roles):
    """Role-based authorization; stack below @auth_required."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = g.get('current_user')
            if user is None:
                raise AppError("Authentication required", 401)
            if user.role not in roles:
                raise AppError(f"Access denied. Required role: {' or '.join(roles)}", 403)
            return fn(*args, **kwargs)
        return wrapper
    return decorator


require_admin = require_role('admin')
require_manager_or_admin = require_role('admin', 'manager')
