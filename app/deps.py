"""FastAPI dependency injection: settings, connection provider, repositories, services."""
from typing import Annotated

from fastapi import Depends

from app.core.settings import Settings, get_settings
from app.db import MySQLConnectionProvider
from app.repositories import MySQLAccountRepository, MySQLMessageRepository
from app.repositories.protocols import AccountRepository, MessageRepository
from app.services.account_service import AccountService
from app.services.message_service import MessageService


def get_settings_dep() -> Settings:
    return get_settings()


def get_connection_provider(
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> MySQLConnectionProvider:
    return MySQLConnectionProvider.from_settings(settings)


def get_account_repository(
    provider: Annotated[MySQLConnectionProvider, Depends(get_connection_provider)],
) -> AccountRepository:
    return MySQLAccountRepository(provider)


def get_message_repository(
    provider: Annotated[MySQLConnectionProvider, Depends(get_connection_provider)],
) -> MessageRepository:
    return MySQLMessageRepository(provider)


def get_account_service(
    account_repo: Annotated[AccountRepository, Depends(get_account_repository)],
) -> AccountService:
    return AccountService(account_repo)


def get_message_service(
    message_repo: Annotated[MessageRepository, Depends(get_message_repository)],
    account_repo: Annotated[AccountRepository, Depends(get_account_repository)],
) -> MessageService:
    return MessageService(message_repo, account_repo)
