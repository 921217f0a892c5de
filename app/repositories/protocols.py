"""Repository protocols (interfaces) for testability and clear boundaries."""
from typing import List, Optional, Protocol

from app.models import Account, Message


class AccountRepository(Protocol):
    """Account persistence: create, get by username/id/credentials."""

    def create(self, username: str, password: str) -> Account:
        """Insert account; return it with the generated id. Raises StorageFailure on duplicate username or DB error."""
        ...

    def find_by_username(self, username: str) -> Optional[Account]:
        ...

    def find_by_id(self, account_id: int) -> Optional[Account]:
        ...

    def find_by_credentials(self, username: str, password: str) -> Optional[Account]:
        """Exact username and password match, or None."""
        ...


class MessageRepository(Protocol):
    """Message persistence: create, list, get, update text, delete."""

    def create(self, posted_by: int, message_text: str, time_posted_epoch: int) -> Message:
        """Insert message; return it with the generated id. Raises StorageFailure on DB error."""
        ...

    def find_all(self) -> List[Message]:
        ...

    def find_by_id(self, message_id: int) -> Optional[Message]:
        ...

    def delete_by_id(self, message_id: int) -> int:
        """Return number of rows removed (0 or 1)."""
        ...

    def update_text_by_id(self, message_id: int, message_text: str) -> int:
        """Replace message_text only. Return number of rows affected (0 or 1)."""
        ...

    def find_by_account(self, account_id: int) -> List[Message]:
        ...
