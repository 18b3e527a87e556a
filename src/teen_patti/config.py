"""Configuration management for Teen Patti Table."""

import os

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM API Keys
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    anthropic_api_key: str = Field(default="", alias="ANTHROPIC_API_KEY")
    google_api_key: str = Field(default="", alias="GOOGLE_API_KEY")

    # Table Settings
    boot_amount: int = Field(default=100, alias="BOOT_AMOUNT")
    initial_coins: int = Field(default=10_000, alias="INITIAL_COINS")
    bot_starting_coins: int = Field(default=5_000, alias="BOT_STARTING_COINS")
    bot_turn_delay: float = Field(default=1.0, alias="BOT_TURN_DELAY")
    message_log_size: int = Field(default=10, alias="MESSAGE_LOG_SIZE")

    # Commentary Settings
    commentary_enabled: bool = Field(default=True, alias="COMMENTARY_ENABLED")
    commentary_model: str = Field(default="gemini/gemini-1.5-flash", alias="COMMENTARY_MODEL")
    llm_timeout: int = Field(default=30, alias="LLM_TIMEOUT")
    llm_retries: int = Field(default=2, alias="LLM_RETRIES")
    llm_temperature: float = Field(default=0.8, alias="LLM_TEMPERATURE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Seats at the default table: (id, name, avatar seed, is_bot)
DEFAULT_SEATS = [
    ("player-1", "You", "p1", False),
    ("bot-1", "Raj", "b1", True),
    ("bot-2", "Priya", "b2", True),
]


# Singleton settings instance
settings = Settings()

# Export API keys to environment for litellm compatibility
# LiteLLM reads API keys from os.environ, not from pydantic settings
if settings.openai_api_key:
    os.environ.setdefault("OPENAI_API_KEY", settings.openai_api_key)
if settings.anthropic_api_key:
    os.environ.setdefault("ANTHROPIC_API_KEY", settings.anthropic_api_key)
if settings.google_api_key:
    os.environ.setdefault("GOOGLE_API_KEY", settings.google_api_key)
    os.environ.setdefault("GEMINI_API_KEY", settings.google_api_key)
