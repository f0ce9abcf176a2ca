from .account import Account
from .base import Base
from .callpro import CallProConversation, CallProConversationMessage, CallProCustomer
from .facebook import (
    FacebookComment,
    FacebookConversation,
    FacebookConversationMessage,
    FacebookCustomer,
    FacebookPost,
)
from .gmail import GmailConversation, GmailConversationMessage, GmailCustomer
from .integration import Integration, IntegrationStatus
from .nylas import (
    NylasGmailConversation,
    NylasGmailConversationMessage,
    NylasGmailCustomer,
    NylasOffice365Conversation,
    NylasOffice365ConversationMessage,
    NylasOffice365Customer,
)

__all__ = [
    "Base",
    "Account",
    "CallProConversation",
    "CallProConversationMessage",
    "CallProCustomer",
    "FacebookComment",
    "FacebookConversation",
    "FacebookConversationMessage",
    "FacebookCustomer",
    "FacebookPost",
    "GmailConversation",
    "GmailConversationMessage",
    "GmailCustomer",
    "Integration",
    "IntegrationStatus",
    "NylasGmailConversation",
    "NylasGmailConversationMessage",
    "NylasGmailCustomer",
    "NylasOffice365Conversation",
    "NylasOffice365ConversationMessage",
    "NylasOffice365Customer",
]
