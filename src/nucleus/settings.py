"""
nucleus.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide typed, env-driven settings for resolution, transport and retries.
- Validate every assignment so runtime setters cannot store invalid values.
- Offer a cached process-wide instance plus a reset hook for test isolation.
"""

from __future__ import annotations

from functools import lru_cache
from os import PathLike
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nucleus.observability.logging import discard_logger
from nucleus.trust import TrustStore

DEFAULT_ADDRESS = "_nucleus"
DEFAULT_USER_AGENT = "nucleus-go"


class Settings(BaseSettings):
    """
    - Constructed once and handed to `NucleusClient` (or read via `get_settings()`)
    - Mutated through plain attribute assignment, e.g. `settings.retries = 3`
    - `Settings()` always yields defaults (plus any NUCLEUS_* env overrides)
    - The default trust store is empty and trusts nothing; add the nodes' CA or
      opt into the platform roots with `trust_system_roots`
    """

    model_config = SettingsConfigDict(
        env_prefix="NUCLEUS_",
        case_sensitive=False,
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    # Addresses starting with "_" are resolved as DNS SRV records.
    address: str = Field(default=DEFAULT_ADDRESS, min_length=1)
    # Seconds, one deadline per attempt including the body read; 0 means no timeout.
    timeout: float = Field(default=0.0, ge=0)
    retries: int = Field(default=1, ge=1)
    user_agent: str = DEFAULT_USER_AGENT

    log_level: str = "INFO"
    service_name: str = "nucleus"

    trust_system_roots: bool = False
    trust_store: TrustStore = Field(default_factory=TrustStore, repr=False, exclude=True)
    # Any structlog-style logger; the default discards everything.
    logger: Any = Field(default_factory=discard_logger, repr=False, exclude=True)

    @property
    def http_timeout(self) -> float | None:
        return self.timeout or None

    def add_certificate(self, pem: bytes | str) -> None:
        self.trust_store.add_certificate(pem)

    def add_certificate_file(self, path: str | PathLike[str]) -> None:
        self.trust_store.add_certificate_file(path)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings() -> None:
    # Next `get_settings()` call rebuilds defaults (fresh trust store, silent logger).
    get_settings.cache_clear()


# --- Module Notes -----------------------------------------------------------
# No locking: concurrent mutation of a shared Settings instance must be serialized
# by the caller. Reads from many threads are fine.
