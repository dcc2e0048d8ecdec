from marshmallow import Schema, fields, validate, EXCLUDE

from bizboard.models.tenant import normalize_subdomain

BUSINESS_TYPES = ('cleaning', 'landscaping', 'hvac', 'plumbing', 'electrical', 'other')


class Subdomain(fields.Str):
    """String field that loads as a lowercase subdomain."""

    def _deserialize(self, value, attr, data, **kwargs):
        return normalize_subdomain(super()._deserialize(value, attr, data, **kwargs))


class LoginSchema(Schema):
    """
    Login Request Validation Schema

    subdomain is optional; when given, the login is scoped to that tenant.

    Example:
        schema = LoginSchema()
        credentials = schema.load(request.get_json())
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, error_messages={
        "required": "Email is required",
        "invalid": "Invalid email format"
    })
    password = fields.Str(required=True, validate=validate.Length(min=6))
    subdomain = Subdomain(load_default=None)


class RegisterSchema(Schema):
    """
    Registration Request Validation Schema

    Accepts the camelCase body the dashboard sends and loads it into
    snake_case keys:

        {"email", "password", "firstName", "lastName",
         "companyName", "subdomain", "businessType"}
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, error_messages={
        "required": "Email is required",
        "invalid": "Invalid email format"
    })
    password = fields.Str(required=True, validate=validate.Length(min=6))
    first_name = fields.Str(required=True, data_key='firstName', validate=validate.Length(min=1, max=100))
    last_name = fields.Str(required=True, data_key='lastName', validate=validate.Length(min=1, max=100))
    company_name = fields.Str(required=True, data_key='companyName', validate=validate.Length(min=1, max=255))
    subdomain = Subdomain(required=True, validate=[
        validate.Length(min=2, max=50),
        validate.Regexp(r'^[a-z0-9]+$', error="Subdomain must only contain alphanumeric characters"),
    ])
    business_type = fields.Str(required=True, data_key='businessType', validate=validate.OneOf(BUSINESS_TYPES))


class ChangePasswordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    current_password = fields.Str(required=True, data_key='currentPassword')
    new_password = fields.Str(required=True, data_key='newPassword', validate=validate.Length(min=6))


class UserResponseSchema(Schema):
    """
    User Response Schema

    Defines what user data is returned to frontend.
    Never return password_hash or sensitive data!
    """
    id = fields.Str(attribute='user_id')
    tenant_id = fields.Str(data_key='tenantId')
    email = fields.Email()
    first_name = fields.Str(data_key='firstName', allow_none=True)
    last_name = fields.Str(data_key='lastName', allow_none=True)
    role = fields.Str()
    is_active = fields.Bool(data_key='isActive')
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')


class TenantResponseSchema(Schema):
    id = fields.Str(attribute='tenant_id')
    name = fields.Str()
    subdomain = fields.Str()
    business_type = fields.Str(data_key='businessType')
    settings = fields.Dict()
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')
