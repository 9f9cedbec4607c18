"""Process-wide defaults for handles.

Environment Variables:
    RAWHANDLE_CLEANUP_ERRORS: "log" (default) or "raise"
    RAWHANDLE_WARN_UNCLOSED: emit ResourceWarning when a handle is finalized while owning
"""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class CleanupErrorPolicy(StrEnum):
    LOG = "log"
    RAISE = "raise"


class HandleSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RAWHANDLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cleanup_errors: CleanupErrorPolicy = CleanupErrorPolicy.LOG
    warn_unclosed: bool = True


@lru_cache(maxsize=1)
def get_settings() -> HandleSettings:
    return HandleSettings()
