"""MySQL implementation of AccountRepository. Connections come from the injected provider."""
import logging
from typing import Optional

import pymysql

from app.core.errors import StorageFailure
from app.db import MySQLConnectionProvider
from app.models import Account

logger = logging.getLogger(__name__)

_COLUMNS = "account_id, username, password"


class MySQLAccountRepository:
    """Account persistence in MySQL. One parameterized statement per call."""

    def __init__(self, provider: MySQLConnectionProvider) -> None:
        self._provider = provider

    def create(self, username: str, password: str) -> Account:
        try:
            with self._provider.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "INSERT INTO account (username, password) VALUES (%s, %s)",
                        (username, password),
                    )
                    account_id = cur.lastrowid
        except pymysql.MySQLError as e:
            logger.error("Failed to create account %r: %s", username, e)
            raise StorageFailure("Could not create account") from e
        return Account(account_id=account_id, username=username, password=password)

    def find_by_username(self, username: str) -> Optional[Account]:
        return self._fetch_one(
            f"SELECT {_COLUMNS} FROM account WHERE username = %s",
            (username,),
        )

    def find_by_id(self, account_id: int) -> Optional[Account]:
        return self._fetch_one(
            f"SELECT {_COLUMNS} FROM account WHERE account_id = %s",
            (account_id,),
        )

    def find_by_credentials(self, username: str, password: str) -> Optional[Account]:
        return self._fetch_one(
            f"SELECT {_COLUMNS} FROM account WHERE username = %s AND password = %s",
            (username, password),
        )

    def _fetch_one(self, sql: str, params: tuple) -> Optional[Account]:
        try:
            with self._provider.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone()
        except pymysql.MySQLError as e:
            logger.error("Account lookup failed: %s", e)
            raise StorageFailure("Could not read account") from e
        return Account(**row) if row else None
