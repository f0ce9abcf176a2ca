#!/usr/bin/env python3
"""
Integrations maintenance commands.

Usage:
    python manage.py list                             # List integrations
    python manage.py remove-integration IDENTIFIER    # Revoke and delete an integration

IDENTIFIER is the CRM-side integration id or the public id of the integration's account.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv(override=True)
from app.clients.nylas import nylas_config  # noqa: E402
from app.clients.session import http_session_manager  # noqa: E402
from app.container import ApplicationContainer  # noqa: E402
from app.db import fastapi_sqlalchemy_context  # noqa: E402
from logging_config import setup_logging  # noqa: E402
from settings import settings  # noqa: E402

setup_logging()

logger = logging.getLogger(__name__)

# Global container instance
container = ApplicationContainer()


async def list_integrations() -> None:
    """List all integrations in the database."""
    async with fastapi_sqlalchemy_context():
        integration_repo = container.repos.integration()
        integrations = (await integration_repo.get_all()).all()

        if not integrations:
            logger.info("No integrations found in database.")
            return

        logger.info(f"Found {len(integrations)} integrations:")
        logger.info("-" * 80)
        for i, integration in enumerate(integrations, 1):
            logger.info(
                f"{i:2d}. {integration.erxes_api_id:30} {integration.kind:20} {integration.status.value:10} "
                f"{integration.email or ''}"
            )
        logger.info("-" * 80)


async def remove_integration(identifier: str) -> None:
    """Revoke external subscriptions and delete the integration with its mirrored data."""
    nylas_config.configure(settings.nylas.client_id, settings.nylas.client_secret)
    try:
        async with fastapi_sqlalchemy_context():
            teardown_controller = container.controllers.teardown_controller()
            summary = await teardown_controller.remove_integration(identifier)
            logger.info(f"Integration {identifier} removed: {summary.to_dict()}")
    finally:
        await http_session_manager.close()
        nylas_config.reset()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Integrations maintenance commands")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List integrations")
    remove_parser = subparsers.add_parser("remove-integration", help="Revoke and delete an integration")
    remove_parser.add_argument("identifier", help="CRM-side integration id or account public id")

    args = parser.parse_args()

    try:
        if args.command == "list":
            asyncio.run(list_integrations())
        elif args.command == "remove-integration":
            asyncio.run(remove_integration(args.identifier))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception:
        logger.exception("Command failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
