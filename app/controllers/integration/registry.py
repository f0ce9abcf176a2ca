"""
Provider kind parsing and adapter lookup.

A kind is ``<family>[-<provider>]``: the string is split once on ``-`` and both parts are
checked against closed sets, so "nylas-gmail" resolves while "nylas-gmail-x" or
"my-facebook" do not.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.exceptions import UnsupportedProviderError
from app.models.account import Account
from app.models.integration import Integration
from app.repos.facebook import FacebookCommentRepo, FacebookPostRepo
from app.repos.mirror import ConversationMessageRepo, ConversationRepo, CustomerRepo

KIND_DELIMITER = "-"


class ProviderFamily(str, enum.Enum):
    FACEBOOK = "facebook"
    GMAIL = "gmail"
    NYLAS = "nylas"
    CALLPRO = "callpro"


_FAMILY_PROVIDERS: dict[ProviderFamily, frozenset[str]] = {
    ProviderFamily.FACEBOOK: frozenset({"", "messenger", "post"}),
    ProviderFamily.GMAIL: frozenset({""}),
    ProviderFamily.NYLAS: frozenset({"gmail", "office365"}),
    ProviderFamily.CALLPRO: frozenset({""}),
}


@dataclass(frozen=True)
class ProviderKind:
    family: ProviderFamily
    provider: str = ""

    @classmethod
    def parse(cls, kind: str) -> "ProviderKind":
        head, delimiter, tail = kind.partition(KIND_DELIMITER)
        try:
            family = ProviderFamily(head)
        except ValueError:
            raise UnsupportedProviderError(f"Unsupported provider kind: {kind}", kind=kind) from None

        if (delimiter and not tail) or tail not in _FAMILY_PROVIDERS[family]:
            raise UnsupportedProviderError(f"Unsupported provider kind: {kind}", kind=kind)
        return cls(family=family, provider=tail)

    @property
    def is_hosted_auth(self) -> bool:
        return self.family is ProviderFamily.NYLAS

    @property
    def adapter_key(self) -> str:
        """Key of the collection set; only hosted-auth providers have their own tables."""
        if self.family is ProviderFamily.NYLAS:
            return f"{self.family.value}{KIND_DELIMITER}{self.provider}"
        return self.family.value


@dataclass
class RevokeResult:
    revoked: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class Revoker(Protocol):
    async def revoke(self, account: Account, integration: Integration) -> RevokeResult: ...


@dataclass(frozen=True)
class Adapter:
    """Collection set and external revoke routine of one provider."""

    key: str
    customers: CustomerRepo[Any]
    conversations: ConversationRepo[Any]
    messages: ConversationMessageRepo[Any]
    revoker: Revoker
    posts: FacebookPostRepo | None = None
    comments: FacebookCommentRepo | None = None

    async def revoke_external(self, account: Account, integration: Integration) -> RevokeResult:
        return await self.revoker.revoke(account, integration)


class AdapterRegistry:
    """Maps provider kinds to their adapters. Pure lookup, no I/O."""

    def __init__(self, adapters: dict[str, Adapter]) -> None:
        self._adapters = adapters

    def resolve_adapter(self, kind: str) -> Adapter:
        provider_kind = ProviderKind.parse(kind)
        adapter = self._adapters.get(provider_kind.adapter_key)
        if adapter is None:
            raise UnsupportedProviderError(f"No adapter registered for kind: {kind}", kind=kind)
        return adapter
