"""
MySQL connection provider and schema bootstrap. Creates account and message tables if not exists.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

import pymysql
import pymysql.cursors
from pymysql.constants import CLIENT

from app.core.settings import Settings

logger = logging.getLogger(__name__)

CREATE_ACCOUNT_TABLE = """
CREATE TABLE IF NOT EXISTS account (
  account_id INT AUTO_INCREMENT PRIMARY KEY,
  username VARCHAR(255) COLLATE utf8mb4_bin NOT NULL UNIQUE,
  password VARCHAR(255) COLLATE utf8mb4_bin NOT NULL
) DEFAULT CHARSET=utf8mb4;
"""

CREATE_MESSAGE_TABLE = """
CREATE TABLE IF NOT EXISTS message (
  message_id INT AUTO_INCREMENT PRIMARY KEY,
  posted_by INT NOT NULL,
  message_text VARCHAR(255) NOT NULL,
  time_posted_epoch BIGINT NOT NULL,
  FOREIGN KEY (posted_by) REFERENCES account(account_id),
  INDEX idx_posted_by (posted_by)
) DEFAULT CHARSET=utf8mb4;
"""


class MySQLConnectionProvider:
    """Opens one pymysql connection per `connection()` block. Commits on success, rolls back on error, always closes."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: str,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database

    @classmethod
    def from_settings(cls, settings: Settings) -> "MySQLConnectionProvider":
        return cls(
            host=settings.mysql_host,
            port=settings.mysql_port,
            user=settings.mysql_user,
            password=settings.mysql_password,
            database=settings.mysql_database,
        )

    def _connect(self, with_database: bool = True):
        kwargs = dict(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            charset="utf8mb4",
            cursorclass=pymysql.cursors.DictCursor,
            # rowcount of UPDATE counts matched rows, not only changed ones
            client_flag=CLIENT.FOUND_ROWS,
        )
        if with_database:
            kwargs["database"] = self.database
        return pymysql.connect(**kwargs)

    @contextmanager
    def connection(self) -> Iterator[pymysql.connections.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def ensure_database_exists(self) -> None:
        """Create the database if it does not exist (connect without database first)."""
        # Escape backticks in identifier for safe SQL
        db_name = self.database.replace("`", "``")
        conn = self._connect(with_database=False)
        try:
            with conn.cursor() as cur:
                cur.execute("CREATE DATABASE IF NOT EXISTS `%s`" % db_name)
            conn.commit()
        finally:
            conn.close()


def init_db(provider: MySQLConnectionProvider) -> bool:
    """Create database if not exists, then create account and message tables if not exists. Returns True on success."""
    try:
        provider.ensure_database_exists()
        with provider.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(CREATE_ACCOUNT_TABLE)
                cur.execute(CREATE_MESSAGE_TABLE)
        return True
    except pymysql.MySQLError as e:
        logger.warning("MySQL init_db failed: %s. Set MYSQL_* in .env and ensure MySQL is running.", e)
        return False


def ping(provider: MySQLConnectionProvider) -> bool:
    """Return True if `SELECT 1` succeeds on a fresh connection."""
    try:
        with provider.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
        return True
    except pymysql.MySQLError as e:
        logger.debug("Database ping failed: %s", e)
        return False
