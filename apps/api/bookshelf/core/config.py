"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    api_prefix: str = "/api"
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    token_bytes: int = Field(default=32, ge=16)
    expose_error_stack: bool = True

    model_config = SettingsConfigDict(env_prefix="BOOKSHELF_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
