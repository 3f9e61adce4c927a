"""Runtime configuration.

Settings are read once from ``AFS_*`` environment variables and cached for
the life of the process.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

# Environment variable prefix for all settings
ENV_PREFIX = "AFS_"

DEFAULT_HASH_CHUNK_SIZE = 8192


class Settings(BaseModel):
    """Tunables shared by all afs operations."""

    model_config = ConfigDict(frozen=True)

    encoding: str = "utf-8"
    hash_chunk_size: int = Field(default=DEFAULT_HASH_CHUNK_SIZE, gt=0)
    json_indent: int = Field(default=2, ge=0)
    temp_prefix: str = "afs-"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Load settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Validated Settings.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in env:
                values[name] = env[key]
        return cls.model_validate(values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings."""
    return Settings.from_env()


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
