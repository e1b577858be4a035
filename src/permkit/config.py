"""Engine configuration for permkit.

This module provides a Pydantic-validated configuration model holding the
switches that shape how a PermissionEngine is built (strict pattern
validation, memoization, reverse index) and how it logs.

Direct os.environ/os.getenv usage is limited to load_config_from_env();
everything else receives an EngineConfig instance.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EngineConfig(BaseModel):
    """Configuration for a PermissionEngine.

    The policy itself is not part of the configuration: it is passed to the
    engine separately and is fixed for the engine's lifetime.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level used by setup_logging()",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Policy validation
    strict: bool = Field(
        default=False,
        description=(
            "Reject literal patterns absent from the catalog and resource "
            "wildcards over undeclared resources at construction time"
        ),
    )

    # Resolution
    memoize: bool = Field(
        default=True,
        description="Cache per-role resolution results for the engine's lifetime",
    )
    reverse_index: bool = Field(
        default=False,
        description="Build a permission -> roles index for roles_with_permission()",
    )
    access_cache_size: int = Field(
        default=128,
        ge=0,
        description="Maximum number of cached role-set views (0 disables the cache)",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
        "frozen": True,
    }


_TRUTHY = ("true", "1", "yes", "on")


def load_config_from_env() -> EngineConfig:
    """Load engine configuration from environment variables.

    Environment variables:
    - PERMKIT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - PERMKIT_LOG_JSON: Use JSON log format (true/false, default: false)
    - PERMKIT_STRICT: Strict pattern validation (true/false, default: false)
    - PERMKIT_MEMOIZE: Cache per-role resolution (true/false, default: true)
    - PERMKIT_REVERSE_INDEX: Build the reverse index (true/false, default: false)
    - PERMKIT_ACCESS_CACHE_SIZE: Role-set view cache bound (default: 128)

    Returns:
        EngineConfig instance with values from environment or defaults.

    Raises:
        ConfigurationError: If a variable holds an invalid value.
    """
    import os

    cache_size_raw = os.getenv("PERMKIT_ACCESS_CACHE_SIZE", "128")
    try:
        cache_size = int(cache_size_raw)
    except ValueError:
        raise ConfigurationError(
            f"PERMKIT_ACCESS_CACHE_SIZE must be an integer, got {cache_size_raw!r}",
            variable="PERMKIT_ACCESS_CACHE_SIZE",
        ) from None

    try:
        return EngineConfig(
            log_level=os.getenv("PERMKIT_LOG_LEVEL", "INFO"),
            log_json=os.getenv("PERMKIT_LOG_JSON", "false").lower() in _TRUTHY,
            strict=os.getenv("PERMKIT_STRICT", "false").lower() in _TRUTHY,
            memoize=os.getenv("PERMKIT_MEMOIZE", "true").lower() in _TRUTHY,
            reverse_index=os.getenv("PERMKIT_REVERSE_INDEX", "false").lower() in _TRUTHY,
            access_cache_size=cache_size,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid permkit configuration: {e}") from e


__all__ = [
    "EngineConfig",
    "LogLevel",
    "load_config_from_env",
]
