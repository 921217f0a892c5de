"""
Message posting, lookup, update and delete.
Uses MessageRepository for persistence and AccountRepository to check that the author exists.
"""
import logging
from typing import List

from app.core.errors import NotFound, ValidationFailure
from app.models import Message, MessageCreate
from app.repositories.protocols import AccountRepository, MessageRepository

logger = logging.getLogger(__name__)

MESSAGE_TEXT_MAX_LENGTH = 255


def _check_text(message_text: str) -> None:
    if not message_text.strip():
        raise ValidationFailure("Message text must not be blank")
    if len(message_text) > MESSAGE_TEXT_MAX_LENGTH:
        raise ValidationFailure(f"Message text must be at most {MESSAGE_TEXT_MAX_LENGTH} characters")


class MessageService:
    """Business rules for messages. Every write is a single validate-then-write pass."""

    def __init__(self, message_repo: MessageRepository, account_repo: AccountRepository) -> None:
        self._message_repo = message_repo
        self._account_repo = account_repo

    def post(self, candidate: MessageCreate) -> Message:
        """Validate text and author, then insert. time_posted_epoch is stored as given."""
        try:
            _check_text(candidate.message_text)
        except ValidationFailure as e:
            logger.info("Post rejected for account %s: %s", candidate.posted_by, e.message)
            raise
        if self._account_repo.find_by_id(candidate.posted_by) is None:
            logger.info("Post rejected: account %s does not exist", candidate.posted_by)
            raise ValidationFailure("posted_by does not reference an existing account")
        return self._message_repo.create(
            candidate.posted_by,
            candidate.message_text,
            candidate.time_posted_epoch,
        )

    def get_all(self) -> List[Message]:
        return self._message_repo.find_all()

    def get_by_id(self, message_id: int) -> Message:
        message = self._message_repo.find_by_id(message_id)
        if message is None:
            raise NotFound(f"Message {message_id} not found")
        return message

    def delete_by_id(self, message_id: int) -> Message:
        """Return the message as it was before deletion. Raises NotFound if nothing was removed."""
        message = self.get_by_id(message_id)
        if self._message_repo.delete_by_id(message_id) != 1:
            raise NotFound(f"Message {message_id} not found")
        return message

    def update_text_by_id(self, message_id: int, message_text: str) -> Message:
        """
        Replace message_text only; posted_by and time_posted_epoch are kept.
        Rules in order: message exists, text not blank, text within MESSAGE_TEXT_MAX_LENGTH.
        """
        if self._message_repo.find_by_id(message_id) is None:
            raise ValidationFailure(f"Message {message_id} does not exist")
        _check_text(message_text)
        # Row may vanish between the check and the write; zero rows is reported as failure.
        if self._message_repo.update_text_by_id(message_id, message_text) == 0:
            raise ValidationFailure(f"Message {message_id} was not updated")
        updated = self._message_repo.find_by_id(message_id)
        if updated is None:
            raise ValidationFailure(f"Message {message_id} was not updated")
        return updated

    def get_by_account(self, account_id: int) -> List[Message]:
        return self._message_repo.find_by_account(account_id)
