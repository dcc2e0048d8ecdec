from flask import Blueprint, jsonify, g, request, current_app

from bizboard.errors import AppError
from bizboard.extensions import db
from bizboard.middleware.auth import auth_required, optional_auth, require_admin, require_manager_or_admin
from bizboard.models.business_template import BusinessTemplate
from bizboard.models.user import User
from bizboard.schemas.auth_schema import TenantResponseSchema, UserResponseSchema

# Routes here run behind tenant resolution: g.tenant is already loaded.
bp = Blueprint('tenant', __name__)

tenant_schema = TenantResponseSchema()
users_schema = UserResponseSchema(many=True)


@bp.route('', methods=['GET'])
@optional_auth
def get_current_tenant():
    """
    Tenant info for the login screen and the tenant switcher.

    Anonymous callers get the public fields; members of the tenant also get
    its settings.
    """
    data = tenant_schema.dump(g.tenant)
    if g.current_user is None:
        data.pop('settings', None)
    return jsonify({"success": True, "data": data}), 200


@bp.route('/template', methods=['GET'])
def get_business_template():
    """Default dashboard layout for the tenant's business type."""
    template = (
        BusinessTemplate.query
        .filter_by(business_type=g.tenant.business_type)
        .order_by(BusinessTemplate.is_default.desc(), BusinessTemplate.created_at.asc())
        .first()
    )

    if template is None:
        raise AppError("No template for business type", 404)

    return jsonify({"success": True, "data": template.to_dict()}), 200


@bp.route('/users', methods=['GET'])
@auth_required
@require_manager_or_admin
def list_tenant_users():
    users = (
        User.query
        .filter_by(tenant_id=g.tenant.tenant_id)
        .order_by(User.created_at.asc())
        .all()
    )
    return jsonify({"success": True, "data": users_schema.dump(users)}), 200


@bp.route('/settings', methods=['PATCH'])
@auth_required
@require_admin
def update_tenant_settings():
    """Shallow-merge the JSON body into the tenant's settings."""
    changes = request.get_json(silent=True)
    if not isinstance(changes, dict):
        raise AppError("Settings must be a JSON object", 400)

    tenant = g.tenant
    settings = dict(tenant.settings or {})
    settings.update(changes)

    try:
        # Reassign so the JSON column is marked dirty
        tenant.settings = settings
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "Tenant settings updated: tenant_id=%s keys=%s",
        tenant.tenant_id, sorted(changes)
    )

    return jsonify({"success": True, "data": tenant_schema.dump(tenant)}), 200
