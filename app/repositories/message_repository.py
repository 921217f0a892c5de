"""MySQL implementation of MessageRepository. Connections come from the injected provider."""
import logging
from typing import List, Optional

import pymysql

from app.core.errors import StorageFailure
from app.db import MySQLConnectionProvider
from app.models import Message

logger = logging.getLogger(__name__)

_COLUMNS = "message_id, posted_by, message_text, time_posted_epoch"


class MySQLMessageRepository:
    """Message persistence in MySQL. One parameterized statement per call."""

    def __init__(self, provider: MySQLConnectionProvider) -> None:
        self._provider = provider

    def create(self, posted_by: int, message_text: str, time_posted_epoch: int) -> Message:
        message_id = self._execute(
            "INSERT INTO message (posted_by, message_text, time_posted_epoch) VALUES (%s, %s, %s)",
            (posted_by, message_text, time_posted_epoch),
            result="lastrowid",
        )
        return Message(
            message_id=message_id,
            posted_by=posted_by,
            message_text=message_text,
            time_posted_epoch=time_posted_epoch,
        )

    def find_all(self) -> List[Message]:
        rows = self._fetch_all(f"SELECT {_COLUMNS} FROM message", ())
        return [Message(**r) for r in rows]

    def find_by_id(self, message_id: int) -> Optional[Message]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM message WHERE message_id = %s",
            (message_id,),
        )
        return Message(**rows[0]) if rows else None

    def delete_by_id(self, message_id: int) -> int:
        return self._execute(
            "DELETE FROM message WHERE message_id = %s",
            (message_id,),
        )

    def update_text_by_id(self, message_id: int, message_text: str) -> int:
        return self._execute(
            "UPDATE message SET message_text = %s WHERE message_id = %s",
            (message_text, message_id),
        )

    def find_by_account(self, account_id: int) -> List[Message]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM message WHERE posted_by = %s",
            (account_id,),
        )
        return [Message(**r) for r in rows]

    def _execute(self, sql: str, params: tuple, result: str = "rowcount") -> int:
        """Run a write statement; return cursor.rowcount or cursor.lastrowid."""
        try:
            with self._provider.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    return getattr(cur, result)
        except pymysql.MySQLError as e:
            logger.error("Message write failed: %s", e)
            raise StorageFailure("Could not write message") from e

    def _fetch_all(self, sql: str, params: tuple) -> List[dict]:
        try:
            with self._provider.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    return list(cur.fetchall())
        except pymysql.MySQLError as e:
            logger.error("Message read failed: %s", e)
            raise StorageFailure("Could not read messages") from e
