"""
Static OAuth configuration per hosted-auth provider.

Everything here is a pure lookup: client credentials come from settings, the rest are
constants. Composite kinds such as "nylas-gmail" resolve to their provider part.
"""

from dataclasses import dataclass, field
from typing import Any

from app.exceptions import UnsupportedProviderError
from settings import settings

GOOGLE_OAUTH_AUTH_URL = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_OAUTH_ACCESS_TOKEN_URL = "https://www.googleapis.com/oauth2/v4/token"
GOOGLE_SCOPES = " ".join(
    [
        "email",
        "profile",
        "https://mail.google.com/",
        "https://www.googleapis.com/auth/gmail.modify",
        "https://www.googleapis.com/auth/gmail.compose",
        "https://www.googleapis.com/auth/gmail.send",
    ]
)

MICROSOFT_OAUTH_AUTH_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/authorize"
MICROSOFT_OAUTH_ACCESS_TOKEN_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/token"
MICROSOFT_SCOPES = " ".join(
    [
        "https://outlook.office.com/IMAP.AccessAsUser.All",
        "https://outlook.office.com/SMTP.Send",
        "offline_access",
        "openid",
        "profile",
        "User.Read",
    ]
)

GMAIL = "gmail"
OFFICE365 = "office365"


@dataclass(frozen=True)
class ClientConfig:
    client_id: str | None
    client_secret: str | None


@dataclass(frozen=True)
class ProviderSettings:
    auth_url: str
    token_url: str
    params: dict[str, str]
    request_params: dict[str, str] = field(default_factory=dict)


def _provider_name(kind: str) -> str:
    # "nylas-gmail" -> "gmail"
    head, _, tail = kind.partition("-")
    provider = tail if head == "nylas" else kind
    if provider not in (GMAIL, OFFICE365):
        raise UnsupportedProviderError(f"Unsupported provider kind: {kind}", kind=kind)
    return provider


def get_client_config(kind: str) -> ClientConfig:
    """OAuth client id/secret for the provider."""
    provider = _provider_name(kind)
    if provider == GMAIL:
        return ClientConfig(settings.google.client_id, settings.google.client_secret)
    return ClientConfig(settings.microsoft.client_id, settings.microsoft.client_secret)


def get_provider_settings(kind: str) -> ProviderSettings:
    """Authorization/token endpoints, scopes and request encoding for the provider."""
    provider = _provider_name(kind)
    if provider == GMAIL:
        return ProviderSettings(
            auth_url=GOOGLE_OAUTH_AUTH_URL,
            token_url=GOOGLE_OAUTH_ACCESS_TOKEN_URL,
            params={"access_type": "offline", "scope": GOOGLE_SCOPES},
        )
    return ProviderSettings(
        auth_url=MICROSOFT_OAUTH_AUTH_URL,
        token_url=MICROSOFT_OAUTH_ACCESS_TOKEN_URL,
        params={"scope": MICROSOFT_SCOPES},
        request_params={"header_type": "application/x-www-form-urlencoded", "data_type": "form-url-encoded"},
    )


def get_provider_config(kind: str, client_id: str, client_secret: str, token_secret: str) -> dict[str, Any]:
    """Credential record expected by the Nylas hosted-auth connect call."""
    provider = _provider_name(kind)
    if provider == GMAIL:
        return {
            "google_client_id": client_id,
            "google_client_secret": client_secret,
            "google_refresh_token": token_secret,
        }
    return {
        "microsoft_client_id": client_id,
        "microsoft_client_secret": client_secret,
        "microsoft_refresh_token": token_secret,
        "redirect_uri": f"{settings.domain}/create-integration",
    }
