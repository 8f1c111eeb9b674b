"""
Tribe Quest - Application Settings

Loads configuration from environment variables using Pydantic Settings.
Supabase credentials are optional so the engine can run without a store.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from tribe_quest.engine.base import EngineConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Game rules
    max_wrong_guesses: int = Field(default=4, ge=1)
    hint_reveal_cap: int = Field(default=4, ge=0)
    hint_reveal_ratio: float = Field(default=0.3, ge=0.0, lt=1.0)
    pass_bonus: int = Field(default=5, ge=0)

    # Delays (seconds)
    lockout_delay: float = Field(default=2.0, ge=0.0)
    win_delay: float = Field(default=2.0, ge=0.0)
    reveal_delay: float = Field(default=3.0, ge=0.0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    def engine_config(self) -> EngineConfig:
        """Build the engine rules from these settings."""
        return EngineConfig(
            max_wrong_guesses=self.max_wrong_guesses,
            hint_reveal_cap=self.hint_reveal_cap,
            hint_reveal_ratio=self.hint_reveal_ratio,
            pass_bonus=self.pass_bonus,
            lockout_delay=self.lockout_delay,
            win_delay=self.win_delay,
            reveal_delay=self.reveal_delay,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
