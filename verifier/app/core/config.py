"""
Centralized configuration for the signature verifier.

Pydantic v2 settings management: values are read from the environment
(prefix ``VERIFIER_``) or a local ``.env`` file, validated once and
frozen. Command-line flags override individual values per invocation.
"""

from functools import lru_cache
import logging
from typing import Annotated, Optional

from pydantic import AnyHttpUrl, Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DSS_VALIDATION_URL = (
    "http://localhost:8080/services/rest/validation/validateSignature"
)


# -------------------------------------------------------------------------
# Settings Model
# -------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Verifier settings parsed from the environment.

    Fails fast if the endpoint URL or timeout are malformed.
    """

    # ---------------------------------------------------------------------
    # Validation service
    # ---------------------------------------------------------------------

    dss_validation_url: Annotated[
        AnyHttpUrl,
        Field(
            default=DEFAULT_DSS_VALIDATION_URL,
            description="Full URL of the remote validateSignature endpoint",
        ),
    ]

    request_timeout_seconds: Annotated[
        Optional[PositiveFloat],
        Field(
            default=None,
            description=(
                "Optional overall HTTP timeout. Unset means no client-side "
                "deadline, so that large documents are never cut off."
            ),
        ),
    ]

    # ---------------------------------------------------------------------
    # Logging
    # ---------------------------------------------------------------------

    log_level: Annotated[
        str,
        Field(
            default="WARNING",
            description="Root log level for the command-line driver",
        ),
    ]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unsupported log level '{v}'")
        return level

    model_config = SettingsConfigDict(
        env_prefix="VERIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )


# -------------------------------------------------------------------------
# Settings Provider
# -------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide settings instance.

    Parsed once per process; tests call ``get_settings.cache_clear()``.
    """
    return Settings()
