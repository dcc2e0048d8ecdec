#!/usr/bin/env python
"""
Apply database migrations before the API starts.

Exits non-zero when the database is unreachable or an upgrade fails so the
deploy stops before serving traffic.
"""
import os
import sys
import traceback

print("=" * 60)
print("DATABASE MIGRATIONS")
print("=" * 60)

db_url = os.getenv('DATABASE_URL')
if not db_url:
    print("ERROR: DATABASE_URL environment variable is not set!")
    sys.exit(1)

print(f"  Database: {db_url.rsplit('/', 1)[-1]}")
print(f"  Host: {db_url.split('@')[1].split('/')[0] if '@' in db_url else 'unknown'}")

try:
    from flask_migrate import upgrade
    from sqlalchemy import text

    from bizboard import create_app
    from bizboard.extensions import db

    app = create_app()

    with app.app_context():
        with db.engine.connect() as connection:
            connection.execute(text('SELECT 1'))
        print("✓ Database connection successful")

        upgrade()
        print("✓ Migrations completed successfully")
except Exception as exc:
    print(f"✗ Migration failed: {exc}")
    traceback.print_exc()
    sys.exit(1)
