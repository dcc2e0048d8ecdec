"""
Shared pytest fixtures.

Every test gets a fresh app bound to an in-memory SQLite database (foreign
keys switched on by bizboard.extensions) and a stub Redis client.
"""
import pytest

from bizboard import create_app
from bizboard.config import Config
from bizboard.extensions import db
from bizboard.models import Tenant, User
from bizboard.services.auth_service import create_user_access_token, hash_password

DEFAULT_PASSWORD = 'password123'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SECRET_KEY = 'testing-secret-key'
    JWT_SECRET_KEY = 'testing-jwt-secret-key-at-least-32-bytes-long'
    REDIS_URL = 'redis://localhost:6399/15'
    LOG_LEVEL = 'DEBUG'


class StubRedis:
    def __init__(self, error=None):
        self.error = error
        self.pings = 0

    def ping(self):
        self.pings += 1
        if self.error:
            raise self.error
        return True


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    app.extensions['redis'] = StubRedis()

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_tenant(app):
    def _make_tenant(subdomain='demo', name=None, business_type='cleaning', settings=None):
        tenant = Tenant(
            name=name or f"{subdomain.title()} Co",
            subdomain=subdomain,
            business_type=business_type,
            settings=settings if settings is not None else {"currency": "USD"},
        )
        db.session.add(tenant)
        db.session.commit()
        return tenant
    return _make_tenant


@pytest.fixture
def make_user(app):
    def _make_user(tenant, email='admin@demo.com', password=DEFAULT_PASSWORD, role='admin', **fields):
        user = User(
            tenant_id=tenant.tenant_id,
            email=email,
            password_hash=hash_password(password),
            role=role,
            first_name=fields.pop('first_name', 'Test'),
            last_name=fields.pop('last_name', 'User'),
            **fields
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        return {'Authorization': f'Bearer {create_user_access_token(user)}'}
    return _auth_headers


@pytest.fixture
def demo_tenant(make_tenant):
    return make_tenant('demo', name='Demo Cleaning Company')


@pytest.fixture
def demo_admin(make_user, demo_tenant):
    return make_user(demo_tenant, 'admin@demo.com', role='admin')
