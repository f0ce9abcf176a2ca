import logging
from unittest.mock import Mock

from cryptography.fernet import Fernet

from app.environment import EnvironmentName


class TestSettings(Mock):
    environment = EnvironmentName.TESTING
    token_encryption_key = Fernet.generate_key().decode()
    domain = "http://localhost:3400"
    external_call_timeout = 5
    logging = Mock(level=logging.INFO, use_config=False, use_pretty_json=False)
    sentry = Mock(dsn=None, is_enabled=False)
    nylas = Mock(client_id="nylas-client-id", client_secret="nylas-client-secret", api_url="https://api.nylas.com")
    google = Mock(client_id="google-client-id", client_secret="google-client-secret")
    microsoft = Mock(client_id="microsoft-client-id", client_secret="microsoft-client-secret")
    facebook = Mock(graph_url="https://graph.facebook.com", api_version="v18.0")
