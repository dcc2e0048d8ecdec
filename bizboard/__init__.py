from flask import Flask
from flask_cors import CORS
from bizboard.config import Config
from bizboard.errors import register_error_handlers, register_jwt_handlers
from bizboard.extensions import db, jwt, migrate


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    CORS(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', '*')}})

    # Import models so metadata (and Alembic autogenerate) sees every table
    from bizboard import models  # noqa: F401

    # Tenant resolution runs before every request
    from bizboard.middleware.tenant import init_tenant_resolution
    init_tenant_resolution(app)

    # Register blueprints
    from bizboard.api import health
    app.register_blueprint(health.bp, url_prefix='/api/health')
    from bizboard.api import auth
    app.register_blueprint(auth.bp, url_prefix='/api/auth')
    from bizboard.api import dashboard
    app.register_blueprint(dashboard.bp, url_prefix='/api/dashboard')
    from bizboard.api import tenant
    app.register_blueprint(tenant.bp, url_prefix='/api/tenant')

    register_error_handlers(app)
    register_jwt_handlers(jwt)

    from bizboard.cli import register_commands
    register_commands(app)

    return app
