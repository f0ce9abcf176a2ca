"""
Inbound Nylas webhook handling.

Deliveries are authenticated with an HMAC-SHA256 of the raw body keyed with the Nylas
client secret. Each ``message.created`` delta is then synced in delivery order, every one
in its own savepoint so a failing delta is rolled back alone.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass, field
from typing import Any, cast

from app.clients.nylas import UNCONFIGURED, NylasConfig, NylasCredentials
from app.controllers.nylas.message_sync import MessageSyncController
from app.repos.integration import IntegrationRepo

logger = logging.getLogger(__name__)

MESSAGE_CREATED = "message.created"


@dataclass
class DeltaBatchResult:
    synced: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    ignored: int = 0


class DeltaDispatcher:
    def __init__(
        self, message_sync: MessageSyncController, integration_repo: IntegrationRepo, config: NylasConfig
    ) -> None:
        self.message_sync = message_sync
        self.integration_repo = integration_repo
        self.config = config

    def verify_signature(self, raw_body: bytes, signature: str | None) -> bool:
        """Compare the hex HMAC-SHA256 of the raw body with the delivered signature."""
        credentials = self.config.credentials()
        if credentials is UNCONFIGURED or not signature:
            return False

        secret = cast(NylasCredentials, credentials).client_secret
        digest = hmac.new(secret.encode(), raw_body, hashlib.sha256).hexdigest()
        # Header values arrive latin-1 decoded, so compare bytes.
        return hmac.compare_digest(digest.encode(), signature.encode("latin-1", errors="replace"))

    async def dispatch(self, payload: dict[str, Any]) -> DeltaBatchResult:
        """Sync every ``message.created`` delta; other delta types are ignored."""
        result = DeltaBatchResult()

        deltas = payload.get("deltas")
        if not isinstance(deltas, list):
            if deltas is not None:
                logger.warning(f"Webhook deltas is not a list, nothing to process; type: {type(deltas).__name__}")
            deltas = []

        for delta in deltas:
            if not isinstance(delta, dict) or delta.get("type") != MESSAGE_CREATED:
                result.ignored += 1
                continue

            data = delta.get("object_data")
            if not isinstance(data, dict):
                logger.warning(f"Skipping message delta without object data; object_data: {data!r}")
                result.ignored += 1
                continue

            account_id = data.get("account_id")
            message_id = data.get("id")
            try:
                async with self.integration_repo.savepoint():
                    await self.message_sync.sync_message(account_id, message_id)
                result.synced.append(message_id)
            except Exception as e:
                logger.exception(f"Failed to sync message; account_id: {account_id}, message_id: {message_id}")
                result.failures.append(f"{message_id}: {e}")

        logger.info(
            f"Webhook deltas processed; synced: {len(result.synced)}, failed: {len(result.failures)}, "
            f"ignored: {result.ignored}"
        )
        return result
