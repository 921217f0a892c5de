"""Repository layer: data access abstractions and implementations."""

from app.repositories.protocols import AccountRepository, MessageRepository
from app.repositories.account_repository import MySQLAccountRepository
from app.repositories.message_repository import MySQLMessageRepository

__all__ = [
    "AccountRepository",
    "MessageRepository",
    "MySQLAccountRepository",
    "MySQLMessageRepository",
]
