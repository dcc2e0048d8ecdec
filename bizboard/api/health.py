import sys
import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify, current_app
from sqlalchemy import text

from bizboard.extensions import db, get_redis_client

try:
    import resource
except ImportError:  # Windows
    resource = None

bp = Blueprint('health', __name__)

_started_at = time.monotonic()


def _timestamp():
    return datetime.now(timezone.utc).isoformat()


def _uptime():
    return round(time.monotonic() - _started_at, 3)


def check_database():
    try:
        db.session.execute(text('SELECT 1'))
        return {"status": "healthy"}
    except Exception as exc:
        db.session.rollback()
        current_app.logger.error("Health: database check failed: %s", exc)
        return {"status": "unhealthy", "error": str(exc)}


def check_redis():
    try:
        get_redis_client().ping()
        return {"status": "healthy"}
    except Exception as exc:
        current_app.logger.error("Health: redis check failed: %s", exc)
        return {"status": "unhealthy", "error": str(exc)}


def memory_usage():
    """Informational only; carries no status."""
    if resource is None:
        return {}
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    if sys.platform != 'darwin':
        max_rss *= 1024
    return {"maxRss": max_rss}


@bp.route('', methods=['GET'])
def health():
    return jsonify({
        "success": True,
        "data": {
            "status": "healthy",
            "timestamp": _timestamp(),
            "uptime": _uptime(),
            "version": current_app.config['APP_VERSION'],
        }
    }), 200


@bp.route('/detailed', methods=['GET'])
def health_detailed():
    """
    Dependency health for operators.

    200 only when both the database and Redis answer; otherwise 503 with
    the failing check's error message.
    """
    checks = {
        "database": check_database(),
        "redis": check_redis(),
        "memory": memory_usage(),
    }

    all_healthy = all(
        check.get("status", "healthy") == "healthy"
        for check in checks.values()
    )

    return jsonify({
        "success": all_healthy,
        "data": {
            "status": "healthy" if all_healthy else "unhealthy",
            "timestamp": _timestamp(),
            "uptime": _uptime(),
            "checks": checks,
        }
    }), 200 if all_healthy else 503
