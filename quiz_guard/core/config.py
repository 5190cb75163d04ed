"""Runtime settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quiz_guard.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_guard.constants.quiz_constants import MAX_TAB_SWITCHES, SECONDS_PER_QUESTION


class Settings(BaseSettings):
    # QUIZ_GUARD_DATABASE_URL, QUIZ_GUARD_TEACHER_TOKEN, ...
    model_config = SettingsConfigDict(
        env_prefix="QUIZ_GUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = "sqlite:///quiz_guard.db"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # Unset means local classroom mode: writes are open and answers are never revealed.
    teacher_token: str | None = None

    seconds_per_question: int = SECONDS_PER_QUESTION
    max_tab_switches: int = MAX_TAB_SWITCHES
    log_level: str = "INFO"

    @field_validator("teacher_token")
    @classmethod
    def _blank_token_is_unset(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("seconds_per_question", "max_tab_switches")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
