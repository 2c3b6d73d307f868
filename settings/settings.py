import logging

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

from app.environment import EnvironmentName
from settings.log import LoggingSettings


class DatabaseSettings(BaseSettings):
    host: str = Field(alias="DATABASE_HOST", default="postgresql://localhost:5432")
    name: str = Field(alias="DATABASE_NAME", default="app_directory")
    min_pool_size: int = Field(alias="DATABASE_MIN_POOL_SIZE", default=5)
    max_pool_size: int = Field(alias="DATABASE_MAX_POOL_SIZE", default=20)
    echo: bool = Field(alias="DATABASE_ECHO", default=False)

    @property
    def async_host(self) -> str:
        """Return the host URL with async driver for SQLAlchemy async engine."""
        return self.host.replace("postgresql://", "postgresql+asyncpg://", 1)

    @property
    def url(self) -> str:
        return f"{self.async_host}/{self.name}"


class CorsSettings(BaseSettings):
    frontend_url: str = Field(alias="FRONTEND_URL", default="*")

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.frontend_url.split(",") if origin.strip()]


class AdminSettings(BaseSettings):
    password: str | None = Field(alias="ADMIN_PASSWORD", default=None)
    api_token: str | None = Field(alias="ADMIN_API_TOKEN", default=None)


class ClientSettings(BaseSettings):
    api_url: str = Field(alias="DIRECTORY_API_URL", default="http://localhost:8001")
    timeout: float = Field(alias="DIRECTORY_API_TIMEOUT", default=30.0)


class SentrySettings(BaseSettings):
    dsn: str | None = Field(alias="SENTRY_DSN", default=None)

    @property
    def is_enabled(self) -> bool:
        return bool(self.dsn)


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "allow"}

    environment: EnvironmentName = Field(alias="ENVIRONMENT")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    @field_validator("environment", mode="before")
    def set_environment(cls, value: str, info: ValidationInfo) -> EnvironmentName:
        try:
            return EnvironmentName(value)
        except ValueError:
            logging.getLogger(__name__).warning(f"Invalid environment: {value}")
            return EnvironmentName.DEVELOPMENT
