"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///./balance.db"
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    statement_timeout: float = 10.0
    read_retries: int = 2
    retry_delay: float = 0.05


class SecuritySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    # Either a duration such as "7d" / "12h" or a number of seconds.
    access_token_expires_in: Union[int, str] = "7d"
    admin_access_token_expires_in: Union[int, str] = "1d"
    bcrypt_rounds: int = 12


class LedgerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_page_size: int = 10


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Balance Server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    ledger: LedgerSettings = LedgerSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port


@lru_cache()
def get_settings() -> Settings:
    return Settings()
