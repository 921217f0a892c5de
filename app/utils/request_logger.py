"""
Structured request logging: path, method, client_ip, status_code, latency_ms, request_id.
"""
import json
import logging
import time
from pathlib import Path
from typing import Optional

import config


def _log_path() -> Optional[Path]:
    if not (config.LOG_FILE or "").strip():
        return None
    p = Path(config.LOG_FILE)
    if not p.is_absolute():
        p = config.BASE_DIR / p
    return p


def setup_request_logger() -> logging.Logger:
    """Configure and return a logger for request logs (file when LOG_FILE is set, else stream)."""
    log_path = _log_path()
    logger = logging.getLogger("social_media.requests")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    if not logger.handlers:
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
        else:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger


REQUEST_LOGGER = setup_request_logger()


def build_log_payload(request, status_code: int, latency_ms: float) -> dict:
    state = getattr(request, "state", None)
    request_id = getattr(state, "request_id", None) if state else None
    payload = {
        "path": request.url.path,
        "method": request.method,
        "client_ip": request.client.host if request.client else "",
        "status_code": status_code,
        "latency_ms": round(latency_ms, 2),
        "timestamp": time.time(),
    }
    if request_id:
        payload["request_id"] = request_id
    return payload


def log_request(request, status_code: int, latency_ms: float) -> None:
    """Emit one structured JSON log line. Logging problems never fail the request."""
    try:
        REQUEST_LOGGER.info(json.dumps(build_log_payload(request, status_code, latency_ms)))
    except (TypeError, ValueError, OSError) as e:
        logging.getLogger(__name__).debug("Request log skipped: %s", e)
