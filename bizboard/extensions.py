import sqlite3

import redis
from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine

"""
Flask Extensions - Initialized here, configured in bizboard/__init__.py

Kept in a separate module so models, routes and the app factory can all
import them without circular imports.
"""
# Database ORM
# Usage: from bizboard.extensions import db
db = SQLAlchemy()

# JWT Authentication - signs and verifies bearer tokens
# Usage: from bizboard.extensions import jwt
jwt = JWTManager()

# Alembic migrations through Flask-Migrate
migrate = Migrate()


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is switched on per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def get_redis_client():
    """
    Return the Redis client bound to the current app, creating it lazily.

    Nothing connects at import time; the first health check does.
    """
    client = current_app.extensions.get('redis')
    if client is None:
        client = redis.from_url(
            current_app.config['REDIS_URL'],
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        current_app.extensions['redis'] = client
    return client
