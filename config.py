"""
Global config facade: delegates to app.core.settings for backward compatibility.
Prefer importing get_settings() or Settings from app.core in new code.
"""
from pathlib import Path

from app.core.settings import get_settings

_s = get_settings()

# Paths
BASE_DIR: Path = _s.base_dir

# Server
HOST: str = _s.host
PORT: int = _s.port
RELOAD: bool = _s.reload

# Ops
LOG_LEVEL: str = _s.log_level
LOG_FILE: str = _s.log_file

# MySQL
MYSQL_HOST: str = _s.mysql_host
MYSQL_PORT: int = _s.mysql_port
MYSQL_USER: str = _s.mysql_user
MYSQL_PASSWORD: str = _s.mysql_password
MYSQL_DATABASE: str = _s.mysql_database

# CORS
CORS_ALLOW_ORIGINS: list = _s.cors_allow_origins
