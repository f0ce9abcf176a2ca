import pytest

from app.container import ApplicationContainer
from app.controllers.integration.registry import ProviderFamily, ProviderKind
from app.controllers.integration.revokers import FacebookRevoker, GmailPushRevoker, NoopRevoker, NylasRevoker
from app.exceptions import UnsupportedProviderError
from app.models import FacebookConversationMessage, NylasGmailCustomer, NylasOffice365Conversation


@pytest.mark.parametrize(
    "kind,family,provider,adapter_key",
    [
        ("facebook", ProviderFamily.FACEBOOK, "", "facebook"),
        ("facebook-messenger", ProviderFamily.FACEBOOK, "messenger", "facebook"),
        ("facebook-post", ProviderFamily.FACEBOOK, "post", "facebook"),
        ("gmail", ProviderFamily.GMAIL, "", "gmail"),
        ("nylas-gmail", ProviderFamily.NYLAS, "gmail", "nylas-gmail"),
        ("nylas-office365", ProviderFamily.NYLAS, "office365", "nylas-office365"),
        ("callpro", ProviderFamily.CALLPRO, "", "callpro"),
    ],
)
def test_parse_supported_kinds(kind: str, family: ProviderFamily, provider: str, adapter_key: str) -> None:
    parsed = ProviderKind.parse(kind)

    assert parsed.family is family
    assert parsed.provider == provider
    assert parsed.adapter_key == adapter_key


@pytest.mark.parametrize(
    "kind",
    ["", "nylas", "nylas-", "nylas-yahoo", "nylas-gmail-extra", "my-facebook", "facebook-", "gmail-nylas", "Gmail"],
)
def test_parse_rejects_unknown_kinds(kind: str) -> None:
    with pytest.raises(UnsupportedProviderError):
        ProviderKind.parse(kind)


def test_only_nylas_kinds_are_hosted_auth() -> None:
    assert ProviderKind.parse("nylas-office365").is_hosted_auth
    assert not ProviderKind.parse("gmail").is_hosted_auth
    assert not ProviderKind.parse("facebook-post").is_hosted_auth


def test_resolve_adapter_selects_collections_and_revoker(container: ApplicationContainer) -> None:
    registry = container.controllers.adapter_registry()

    facebook = registry.resolve_adapter("facebook-messenger")
    assert facebook.messages.model is FacebookConversationMessage
    assert facebook.posts is not None and facebook.comments is not None
    assert isinstance(facebook.revoker, FacebookRevoker)

    nylas_gmail = registry.resolve_adapter("nylas-gmail")
    assert nylas_gmail.customers.model is NylasGmailCustomer
    assert nylas_gmail.posts is None
    assert isinstance(nylas_gmail.revoker, NylasRevoker)

    office365 = registry.resolve_adapter("nylas-office365")
    assert office365.conversations.model is NylasOffice365Conversation

    assert isinstance(registry.resolve_adapter("gmail").revoker, GmailPushRevoker)
    assert isinstance(registry.resolve_adapter("callpro").revoker, NoopRevoker)


def test_resolve_adapter_unknown_kind(container: ApplicationContainer) -> None:
    registry = container.controllers.adapter_registry()

    with pytest.raises(UnsupportedProviderError) as exc_info:
        registry.resolve_adapter("nylas-yahoo")
    assert exc_info.value.extra["kind"] == "nylas-yahoo"
