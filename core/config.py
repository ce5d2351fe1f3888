"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for the dataset registry happen here. No module
should call os.getenv() or os.environ.get() directly -- import get_settings()
instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. hash_implementation -> HASH_IMPLEMENTATION).

  @model_validator(mode="after"): Runs cross-field validation after all fields
      are resolved. A digest name hashlib cannot build is a configuration
      defect, so it stops startup instead of failing on the first login.

Layer rule: core/ is the kernel. This module may not import from auth/ or feeds/.
"""

import hashlib
import logging
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("datareg.config")

DEFAULT_DGA_REGISTRY_URL = "http://www.diabetesepigenome.org:8080/getAnnotationRegistry"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    # Digest used for new registrations. Existing users keep the algorithm
    # stored on their record.
    hash_implementation: str = "sha256"
    salt_bytes: int = 10

    # Seed account created on startup when both values are set.
    test_username: str = ""
    test_password: str = ""

    # ------------------------------------------------------------------
    # External feeds
    # ------------------------------------------------------------------

    dga_registry_url: str = DEFAULT_DGA_REGISTRY_URL
    dga_timeout: int = 10

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_credentials(self) -> "Settings":
        """Reject digest names hashlib cannot construct and empty salts."""
        try:
            hashlib.new(self.hash_implementation)
        except ValueError as exc:
            raise ValueError(f"HASH_IMPLEMENTATION {self.hash_implementation!r} is not supported by hashlib.") from exc
        if self.salt_bytes < 1:
            raise ValueError("SALT_BYTES must be at least 1.")
        if self.debug and self.test_username and self.test_password:
            logger.warning("WARNING: Seed account %r is configured. Do not use it in production.", self.test_username)
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
