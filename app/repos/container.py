from dependency_injector import containers, providers

from app.models import (
    CallProConversation,
    CallProConversationMessage,
    CallProCustomer,
    FacebookConversation,
    FacebookConversationMessage,
    FacebookCustomer,
    GmailConversation,
    GmailConversationMessage,
    GmailCustomer,
    NylasGmailConversation,
    NylasGmailConversationMessage,
    NylasGmailCustomer,
    NylasOffice365Conversation,
    NylasOffice365ConversationMessage,
    NylasOffice365Customer,
)
from app.repos.account import AccountRepo
from app.repos.facebook import FacebookCommentRepo, FacebookPostRepo
from app.repos.integration import IntegrationRepo
from app.repos.mirror import ConversationMessageRepo, ConversationRepo, CustomerRepo


class RepoContainer(containers.DeclarativeContainer):
    account = providers.Singleton(AccountRepo)
    integration = providers.Singleton(IntegrationRepo)

    facebook_customer = providers.Singleton(CustomerRepo, FacebookCustomer)
    facebook_conversation = providers.Singleton(ConversationRepo, FacebookConversation)
    facebook_conversation_message = providers.Singleton(ConversationMessageRepo, FacebookConversationMessage)
    facebook_post = providers.Singleton(FacebookPostRepo)
    facebook_comment = providers.Singleton(FacebookCommentRepo)

    gmail_customer = providers.Singleton(CustomerRepo, GmailCustomer)
    gmail_conversation = providers.Singleton(ConversationRepo, GmailConversation)
    gmail_conversation_message = providers.Singleton(ConversationMessageRepo, GmailConversationMessage)

    nylas_gmail_customer = providers.Singleton(CustomerRepo, NylasGmailCustomer)
    nylas_gmail_conversation = providers.Singleton(ConversationRepo, NylasGmailConversation)
    nylas_gmail_conversation_message = providers.Singleton(ConversationMessageRepo, NylasGmailConversationMessage)

    nylas_office365_customer = providers.Singleton(CustomerRepo, NylasOffice365Customer)
    nylas_office365_conversation = providers.Singleton(ConversationRepo, NylasOffice365Conversation)
    nylas_office365_conversation_message = providers.Singleton(
        ConversationMessageRepo, NylasOffice365ConversationMessage
    )

    callpro_customer = providers.Singleton(CustomerRepo, CallProCustomer)
    callpro_conversation = providers.Singleton(ConversationRepo, CallProConversation)
    callpro_conversation_message = providers.Singleton(ConversationMessageRepo, CallProConversationMessage)
