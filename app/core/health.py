"""Health checks: liveness (process up) and readiness (dependencies reachable)."""
from typing import Any, Dict

from app import db
from app.db import MySQLConnectionProvider


def check_live() -> Dict[str, Any]:
    """Liveness: app process is running."""
    return {"status": "ok", "check": "live"}


def check_ready(provider: MySQLConnectionProvider) -> Dict[str, Any]:
    """Readiness: DB is reachable right now (pinged on every call)."""
    db_ok = db.ping(provider)
    return {
        "status": "ok" if db_ok else "degraded",
        "check": "ready",
        "database": "up" if db_ok else "down",
    }
