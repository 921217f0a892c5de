from .account_service import AccountService
from .message_service import MessageService

__all__ = ["AccountService", "MessageService"]
