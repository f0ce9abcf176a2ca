from typing import cast

from dependency_injector import containers, providers

from app.clients.facebook import FacebookGraphClient
from app.clients.gmail import GmailClient
from app.clients.nylas import NylasClient, nylas_config
from app.clients.session import http_session_manager
from app.controllers.integration.integration_controller import IntegrationController
from app.controllers.integration.registry import Adapter, AdapterRegistry
from app.controllers.integration.revokers import FacebookRevoker, GmailPushRevoker, NoopRevoker, NylasRevoker
from app.controllers.integration.teardown_controller import TeardownController
from app.controllers.nylas.delta_dispatcher import DeltaDispatcher
from app.controllers.nylas.message_sync import MessageSyncController
from app.controllers.nylas.nylas_controller import NylasController
from app.repos.container import RepoContainer


class ControllerContainer(containers.DeclarativeContainer):
    repos: RepoContainer = cast(RepoContainer, providers.DependenciesContainer())

    session_manager = providers.Object(http_session_manager)
    nylas_configuration = providers.Object(nylas_config)

    facebook_client = providers.Singleton(FacebookGraphClient, session_manager=session_manager)
    gmail_client = providers.Singleton(GmailClient, session_manager=session_manager)
    nylas_client = providers.Singleton(NylasClient, session_manager=session_manager, config=nylas_configuration)

    facebook_revoker = providers.Singleton(FacebookRevoker, graph_client=facebook_client)
    gmail_revoker = providers.Singleton(GmailPushRevoker, gmail_client=gmail_client)
    nylas_revoker = providers.Singleton(NylasRevoker, nylas_client=nylas_client)
    noop_revoker = providers.Singleton(NoopRevoker)

    facebook_adapter = providers.Singleton(
        Adapter,
        key="facebook",
        customers=repos.facebook_customer,
        conversations=repos.facebook_conversation,
        messages=repos.facebook_conversation_message,
        revoker=facebook_revoker,
        posts=repos.facebook_post,
        comments=repos.facebook_comment,
    )
    gmail_adapter = providers.Singleton(
        Adapter,
        key="gmail",
        customers=repos.gmail_customer,
        conversations=repos.gmail_conversation,
        messages=repos.gmail_conversation_message,
        revoker=gmail_revoker,
    )
    nylas_gmail_adapter = providers.Singleton(
        Adapter,
        key="nylas-gmail",
        customers=repos.nylas_gmail_customer,
        conversations=repos.nylas_gmail_conversation,
        messages=repos.nylas_gmail_conversation_message,
        revoker=nylas_revoker,
    )
    nylas_office365_adapter = providers.Singleton(
        Adapter,
        key="nylas-office365",
        customers=repos.nylas_office365_customer,
        conversations=repos.nylas_office365_conversation,
        messages=repos.nylas_office365_conversation_message,
        revoker=nylas_revoker,
    )
    callpro_adapter = providers.Singleton(
        Adapter,
        key="callpro",
        customers=repos.callpro_customer,
        conversations=repos.callpro_conversation,
        messages=repos.callpro_conversation_message,
        revoker=noop_revoker,
    )

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.Dict(
            {
                "facebook": facebook_adapter,
                "gmail": gmail_adapter,
                "nylas-gmail": nylas_gmail_adapter,
                "nylas-office365": nylas_office365_adapter,
                "callpro": callpro_adapter,
            }
        ),
    )

    teardown_controller = providers.Singleton(
        TeardownController,
        integration_repo=repos.integration,
        account_repo=repos.account,
        adapter_registry=adapter_registry,
    )
    integration_controller = providers.Singleton(
        IntegrationController,
        account_repo=repos.account,
        integration_repo=repos.integration,
        nylas_client=nylas_client,
    )
    message_sync_controller = providers.Singleton(
        MessageSyncController,
        account_repo=repos.account,
        integration_repo=repos.integration,
        adapter_registry=adapter_registry,
        nylas_client=nylas_client,
    )
    delta_dispatcher = providers.Singleton(
        DeltaDispatcher,
        message_sync=message_sync_controller,
        integration_repo=repos.integration,
        config=nylas_configuration,
    )
    nylas_controller = providers.Singleton(
        NylasController,
        account_repo=repos.account,
        integration_repo=repos.integration,
        adapter_registry=adapter_registry,
        nylas_client=nylas_client,
    )
