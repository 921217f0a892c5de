"""
Registration and login rules on top of AccountRepository.
"""
import logging

from app.core.errors import AuthFailure, ValidationFailure
from app.models import Account, AccountCredentials
from app.repositories.protocols import AccountRepository

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 4


class AccountService:
    """Validates registrations and matches login credentials."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def register(self, candidate: AccountCredentials) -> Account:
        """
        Create an account. Rules, first failure wins: username not blank,
        password at least PASSWORD_MIN_LENGTH chars, username not taken.
        Raises ValidationFailure, or StorageFailure if the insert is rejected.
        """
        if not candidate.username.strip():
            logger.info("Registration rejected: blank username")
            raise ValidationFailure("Username must not be blank")
        if len(candidate.password) < PASSWORD_MIN_LENGTH:
            logger.info("Registration rejected for %r: password too short", candidate.username)
            raise ValidationFailure(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if self._account_repo.find_by_username(candidate.username) is not None:
            logger.info("Registration rejected: username %r already registered", candidate.username)
            raise ValidationFailure("Username already registered")
        return self._account_repo.create(candidate.username, candidate.password)

    def login(self, credentials: AccountCredentials) -> Account:
        account = self._account_repo.find_by_credentials(credentials.username, credentials.password)
        if account is None:
            raise AuthFailure("Invalid username or password")
        return account
