"""
Auth Service

Credential checks, tenant self-registration and token issuing. Routes call
these functions and only deal with request parsing and response shaping.

Every failure is raised as AppError so the central error handler can turn it
into the standard {"success": false, "error": ...} envelope.
"""
import logging
from typing import Optional, Dict, Any, NamedTuple

from flask_jwt_extended import create_access_token, create_refresh_token
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from bizboard.errors import AppError
from bizboard.extensions import db
from bizboard.models.tenant import Tenant
from bizboard.models.user import User

logger = logging.getLogger(__name__)

# Same message for every login failure so callers cannot probe which
# emails exist in which tenant.
INVALID_CREDENTIALS = "Invalid credentials"
USER_EXISTS = "User already exists in this tenant"
SUBDOMAIN_TAKEN = "Subdomain already taken"


class AuthResult(NamedTuple):
    token: str
    refresh_token: str
    user: User
    tenant: Tenant


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def create_user_access_token(user: User) -> str:
    """The access token carries the tenant so every request can be scoped without another lookup."""
    return create_access_token(
        identity=user.user_id,
        additional_claims={
            "tenant_id": user.tenant_id,
            "email": user.email,
            "role": user.role,
        }
    )


def generate_tokens(user: User) -> Dict[str, str]:
    """Issue an access token and a refresh token for the user."""
    access_token = create_user_access_token(user)
    refresh_token = create_refresh_token(
        identity=user.user_id,
        additional_claims={"tenant_id": user.tenant_id}
    )
    return {"access_token": access_token, "refresh_token": refresh_token}


def login_user(credentials: Dict[str, Any], tenant_id: Optional[str] = None) -> AuthResult:
    """
    Authenticate an active user by email and password.

    Args:
        credentials: {"email", "password", "subdomain"?}
        tenant_id: Tenant resolved from the request, if any

    Raises:
        AppError(401): Unknown email, tenant mismatch or wrong password
    """
    query = (
        db.session.query(User, Tenant)
        .join(Tenant, User.tenant_id == Tenant.tenant_id)
        .filter(User.email == credentials['email'])
        .filter(User.is_active.is_(True))
    )

    if tenant_id:
        query = query.filter(User.tenant_id == tenant_id)

    subdomain = credentials.get('subdomain')
    if subdomain:
        query = query.filter(Tenant.subdomain == subdomain)

    # Oldest account first when the same email exists in several tenants
    row = query.order_by(User.created_at.asc()).first()

    if row is None:
        logger.warning("Login failed: no active user for email=%s", credentials['email'])
        raise AppError(INVALID_CREDENTIALS, 401)

    user, tenant = row

    if not verify_password(credentials['password'], user.password_hash):
        logger.warning("Login failed: bad password for user_id=%s", user.user_id)
        raise AppError(INVALID_CREDENTIALS, 401)

    tokens = generate_tokens(user)
    logger.info("Login: user_id=%s tenant_id=%s", user.user_id, tenant.tenant_id)

    return AuthResult(tokens['access_token'], tokens['refresh_token'], user, tenant)


def _find_tenant(subdomain: str) -> Optional[Tenant]:
    return Tenant.query.filter_by(subdomain=subdomain).first()


def _find_user(tenant_id: str, email: str) -> Optional[User]:
    return User.query.filter_by(email=email, tenant_id=tenant_id).first()


def _conflict_message(exc: IntegrityError) -> str:
    # SQLite names the column, PostgreSQL the unique index
    message = str(exc.orig)
    if 'tenants.subdomain' in message or 'ix_tenants_subdomain' in message:
        return SUBDOMAIN_TAKEN
    return USER_EXISTS


def register_user(data: Dict[str, Any]) -> AuthResult:
    """
    Register a user, creating the tenant first when the subdomain is new.

    Runs as a single transaction:
        1. Look up tenant by subdomain
        2. Create it if missing (the registering user becomes its admin)
        3. Reject an email already registered in that tenant
        4. Create the user

    A concurrent duplicate registration is stopped by the unique
    constraints on tenants.subdomain and users(tenant_id, email); the
    losing transaction is rolled back as a whole.

    Raises:
        AppError(409): Email already registered in the tenant, or the
            subdomain was claimed by a concurrent registration
    """
    try:
        tenant = _find_tenant(data['subdomain'])
        is_new_tenant = False

        if tenant is None:
            tenant = Tenant(
                name=data['company_name'],
                subdomain=data['subdomain'],
                business_type=data['business_type'],
                settings={},
            )
            db.session.add(tenant)
            db.session.flush()  # Generates tenant_id without committing
            is_new_tenant = True

        if _find_user(tenant.tenant_id, data['email']):
            raise AppError(USER_EXISTS, 409)

        user = User(
            tenant_id=tenant.tenant_id,
            email=data['email'],
            password_hash=hash_password(data['password']),
            first_name=data['first_name'],
            last_name=data['last_name'],
            role='admin' if is_new_tenant else 'user',
            is_active=True,
        )
        db.session.add(user)
        db.session.commit()

    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("Registration conflict for subdomain=%s: %s", data.get('subdomain'), exc.orig)
        raise AppError(_conflict_message(exc), 409) from exc
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Registered user_id=%s in tenant_id=%s (new tenant: %s)",
        user.user_id, tenant.tenant_id, is_new_tenant
    )

    tokens = generate_tokens(user)
    return AuthResult(tokens['access_token'], tokens['refresh_token'], user, tenant)


def get_user_by_id(user_id: str, tenant_id: str) -> Optional[User]:
    """Active user in the given tenant, or None."""
    return User.query.filter_by(user_id=user_id, tenant_id=tenant_id, is_active=True).first()


def update_user_password(user_id: str, tenant_id: str, new_password: str) -> None:
    updated = (
        User.query
        .filter_by(user_id=user_id, tenant_id=tenant_id)
        .update({User.password_hash: hash_password(new_password)}, synchronize_session='fetch')
    )

    if updated == 0:
        db.session.rollback()
        raise AppError("User not found", 404)

    db.session.commit()
    logger.info("Password updated for user_id=%s", user_id)
