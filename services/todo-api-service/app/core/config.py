from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Todo API Service"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    seed: bool = True
    cors_origins: List[str] = ["*"]

    login_username: str = "testuser"
    login_password: str = "testpass"


@lru_cache
def get_settings() -> Settings:
    return Settings()
