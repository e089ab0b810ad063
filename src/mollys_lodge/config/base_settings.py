# src/mollys_lodge/config/base_settings.py
from functools import lru_cache
from typing import Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict


class ContainerSettings(BaseSettings):
    """
    Runtime knobs for Container teardown and logging.
    Read from LODGE_* environment variables or a local .env file.
    """

    # Probed in order on each tracked instance during dispose()
    release_methods: Tuple[str, ...] = ("close", "dispose")
    raise_on_release_error: bool = False
    log_resolutions: bool = True

    model_config = SettingsConfigDict(
        env_prefix="LODGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> ContainerSettings:
    # singleton (reads env once)
    return ContainerSettings()
