"""
Pytest fixtures: app, client, in-memory repositories for unit/integration tests.
"""
from contextlib import contextmanager
from typing import List, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on path and .env is loaded
import config  # noqa: F401

from app.core.errors import StorageFailure
from app.deps import get_account_repository, get_connection_provider, get_message_repository
from app.main import app
from app.models import Account, Message
from app.repositories.protocols import AccountRepository, MessageRepository


class InMemoryAccountRepository(AccountRepository):
    """In-memory account store for tests. Unique, case-sensitive usernames and passwords like the utf8mb4_bin columns."""

    def __init__(self) -> None:
        self._accounts: dict = {}  # account_id -> Account
        self._next_id = 1

    def create(self, username: str, password: str) -> Account:
        if self.find_by_username(username) is not None:
            raise StorageFailure("Duplicate username")
        account = Account(account_id=self._next_id, username=username, password=password)
        self._accounts[account.account_id] = account
        self._next_id += 1
        return account

    def find_by_username(self, username: str) -> Optional[Account]:
        for a in self._accounts.values():
            if a.username == username:
                return a
        return None

    def find_by_id(self, account_id: int) -> Optional[Account]:
        return self._accounts.get(account_id)

    def find_by_credentials(self, username: str, password: str) -> Optional[Account]:
        for a in self._accounts.values():
            if a.username == username and a.password == password:
                return a
        return None

    def count(self) -> int:
        return len(self._accounts)


class InMemoryMessageRepository(MessageRepository):
    """In-memory message store for tests. update_text_by_id returns matched rows, like a FOUND_ROWS connection."""

    def __init__(self) -> None:
        self._messages: dict = {}  # message_id -> Message
        self._next_id = 1

    def create(self, posted_by: int, message_text: str, time_posted_epoch: int) -> Message:
        message = Message(
            message_id=self._next_id,
            posted_by=posted_by,
            message_text=message_text,
            time_posted_epoch=time_posted_epoch,
        )
        self._messages[message.message_id] = message
        self._next_id += 1
        return message

    def find_all(self) -> List[Message]:
        return list(self._messages.values())

    def find_by_id(self, message_id: int) -> Optional[Message]:
        return self._messages.get(message_id)

    def delete_by_id(self, message_id: int) -> int:
        return 1 if self._messages.pop(message_id, None) is not None else 0

    def update_text_by_id(self, message_id: int, message_text: str) -> int:
        message = self._messages.get(message_id)
        if message is None:
            return 0
        self._messages[message_id] = message.model_copy(update={"message_text": message_text})
        return 1

    def find_by_account(self, account_id: int) -> List[Message]:
        return [m for m in self._messages.values() if m.posted_by == account_id]


def make_provider(cursor: MagicMock) -> MagicMock:
    """Connection provider double whose connection() yields a connection returning `cursor`."""
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor

    @contextmanager
    def _connection():
        yield conn

    provider = MagicMock()
    provider.connection.side_effect = _connection
    return provider


@pytest.fixture
def cursor():
    """Cursor double; set fetchone/fetchall/rowcount/lastrowid per test."""
    return MagicMock()


@pytest.fixture
def provider(cursor):
    return make_provider(cursor)


@pytest.fixture
def account_repo():
    return InMemoryAccountRepository()


@pytest.fixture
def message_repo():
    return InMemoryMessageRepository()


@pytest.fixture
def client(account_repo, message_repo):
    """TestClient with repositories overridden to in-memory stores. Lifespan (MySQL bootstrap) is not run."""
    app.dependency_overrides[get_account_repository] = lambda: account_repo
    app.dependency_overrides[get_message_repository] = lambda: message_repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_account_repository, None)
        app.dependency_overrides.pop(get_message_repository, None)


@pytest.fixture
def healthy_db_client():
    """TestClient whose readiness probe sees a reachable database."""
    app.dependency_overrides[get_connection_provider] = lambda: make_provider(MagicMock())
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_connection_provider, None)
