from cryptography.fernet import Fernet

from settings import settings

cipher_suite = Fernet(settings.token_encryption_key.encode())


class SecretUtils:
    """Encrypts provider tokens before they are stored on an account."""

    @staticmethod
    def encrypt(value: str) -> str:
        return cipher_suite.encrypt(value.encode()).decode()

    @staticmethod
    def decrypt(value: str) -> str:
        return cipher_suite.decrypt(value.encode()).decode()

    @staticmethod
    def decrypt_optional(value: str | None) -> str | None:
        """Decrypt a nullable column, e.g. a refresh token that was never issued."""
        if not value:
            return None
        return cipher_suite.decrypt(value.encode()).decode()
