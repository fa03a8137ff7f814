import os
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain_models.constants import (
    ALLOWED_LOG_LEVELS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_DOCUMENT_BYTES,
    ENV_JSON_INDENT,
    ENV_LOG_LEVEL,
    ENV_MAX_DOCUMENT_BYTES,
)


def _safe_getenv(key: str, default: str) -> str:
    """Safely get environment variable with fallback."""
    val = os.getenv(key)
    if val is None or not val.strip():
        return default
    return val


class TopologyConfig(BaseModel):
    """
    Configuration for encoding, decoding and the command line tools.

    Defaults come from the model or, via default_factory, from environment variables.
    Factory defaults are validated like explicit values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    json_indent: Annotated[int, Field(ge=0)] | None = Field(
        default_factory=lambda: _safe_getenv(ENV_JSON_INDENT, "") or None,
        validate_default=True,
        description="Indentation of encoded documents. None produces compact output.",
    )
    max_document_bytes: int = Field(
        default_factory=lambda: _safe_getenv(ENV_MAX_DOCUMENT_BYTES, str(DEFAULT_MAX_DOCUMENT_BYTES)),
        validate_default=True,
        ge=1,
        description="Largest document accepted by the decoder, in bytes.",
    )
    log_level: str = Field(
        default_factory=lambda: _safe_getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
        validate_default=True,
        description="Logging level used by the command line tools.",
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and check it against the standard levels."""
        level = v.strip().upper()
        if level not in ALLOWED_LOG_LEVELS:
            msg = f"Log level '{v}' is not allowed. Allowed: {sorted(ALLOWED_LOG_LEVELS)}"
            raise ValueError(msg)
        return level

    @classmethod
    def default(cls) -> Self:
        """
        Returns the default configuration using Pydantic defaults.
        """
        return cls()
