from .account import AccountRepo
from .facebook import FacebookCommentRepo, FacebookPostRepo
from .integration import IntegrationRepo
from .mirror import ConversationMessageRepo, ConversationRepo, CustomerRepo

__all__ = [
    "AccountRepo",
    "ConversationMessageRepo",
    "ConversationRepo",
    "CustomerRepo",
    "FacebookCommentRepo",
    "FacebookPostRepo",
    "IntegrationRepo",
]
