from enum import Enum


class EnvironmentName(Enum):
    TESTING = "test"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def serves_docs(self) -> bool:
        """OpenAPI docs are exposed everywhere except production."""
        return self is not EnvironmentName.PRODUCTION
