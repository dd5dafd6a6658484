from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # DB
    DATABASE_URL: str = "sqlite:///./b2b.db"

    # Shopify app credentials; the secret signs App Bridge session tokens
    SHOPIFY_API_KEY: str = ""
    SHOPIFY_API_SECRET: str
    ALGORITHM: str = "HS256"
    SESSION_TOKEN_LEEWAY_SECONDS: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"

    # price calculations slower than this get a warning in the log
    SLOW_CALCULATION_MS: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper


settings = Settings()
