import logging

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

from app.environment import EnvironmentName
from settings.log import LoggingSettings


class DatabaseSettings(BaseSettings):
    host: str = Field(alias="DATABASE_HOST", default="postgresql://localhost:5432")
    name: str = Field(alias="DATABASE_NAME", default="integrations")
    min_pool_size: int = Field(alias="DATABASE_MIN_POOL_SIZE", default=5)
    max_pool_size: int = Field(alias="DATABASE_MAX_POOL_SIZE", default=20)

    @property
    def async_host(self) -> str:
        """Return the host URL with async driver for SQLAlchemy async engine."""
        return self.host.replace("postgresql://", "postgresql+asyncpg://", 1)


class SentrySettings(BaseSettings):
    dsn: str | None = Field(alias="SENTRY_DSN", default=None)

    @property
    def is_enabled(self) -> bool:
        return bool(self.dsn)


class NylasSettings(BaseSettings):
    client_id: str | None = Field(alias="NYLAS_CLIENT_ID", default=None)
    client_secret: str | None = Field(alias="NYLAS_CLIENT_SECRET", default=None)
    api_url: str = Field(alias="NYLAS_API_URL", default="https://api.nylas.com")


class GoogleSettings(BaseSettings):
    client_id: str | None = Field(alias="GOOGLE_CLIENT_ID", default=None)
    client_secret: str | None = Field(alias="GOOGLE_CLIENT_SECRET", default=None)


class MicrosoftSettings(BaseSettings):
    client_id: str | None = Field(alias="MICROSOFT_CLIENT_ID", default=None)
    client_secret: str | None = Field(alias="MICROSOFT_CLIENT_SECRET", default=None)


class FacebookSettings(BaseSettings):
    graph_url: str = Field(alias="FACEBOOK_GRAPH_URL", default="https://graph.facebook.com")
    api_version: str = Field(alias="FACEBOOK_API_VERSION", default="v18.0")


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "allow"}

    environment: EnvironmentName = Field(alias="ENVIRONMENT")
    token_encryption_key: str = Field(alias="TOKEN_ENCRYPTION_KEY")
    domain: str = Field(alias="DOMAIN", default="http://localhost:3400")
    external_call_timeout: int = Field(alias="EXTERNAL_CALL_TIMEOUT", default=10)

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)
    nylas: NylasSettings = Field(default_factory=NylasSettings)
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    microsoft: MicrosoftSettings = Field(default_factory=MicrosoftSettings)
    facebook: FacebookSettings = Field(default_factory=FacebookSettings)

    @field_validator("environment", mode="before")
    def set_environment(cls, name: str, info: ValidationInfo) -> EnvironmentName:
        try:
            return EnvironmentName(name)
        except ValueError:
            logging.getLogger(__name__).warning(f"Invalid environment: {name}")
            return EnvironmentName.DEVELOPMENT
