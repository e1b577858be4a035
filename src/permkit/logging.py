"""Centralized logging utilities for permkit.

This module provides:
- Logging configuration from EngineConfig
- Safe, bounded previews of permission and role sets
- Structured logging with policy name propagation
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from .config import EngineConfig, LogLevel


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a length-bounded, single-line preview of a value for logging.

    Sets and frozensets are rendered sorted so that the same permission set
    always produces the same log line.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (set, frozenset)):
        s = json.dumps(sorted(value, key=str), default=str, ensure_ascii=False)
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    # Normalize whitespace
    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "policy",
    }
)


class PermkitFormatter(logging.Formatter):
    """Formatter that includes the policy name and structured JSON output.

    Extra fields passed through ``extra=`` (for example ``roles`` or
    ``permissions``) are rendered with :func:`safe_preview`.
    """

    def __init__(
        self,
        include_policy: bool = True,
        json_format: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.include_policy = include_policy
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        policy = getattr(record, "policy", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_policy and policy:
            log_data["policy"] = policy

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if self.include_policy and policy:
            parts.append(f"policy={policy}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class PolicyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds the policy name to every record.

    Usage:
        logger = get_policy_logger(__name__, policy="backoffice")
        logger.info("Resolved role", roles=["editor"])
    """

    def __init__(self, logger: logging.Logger, policy: Optional[str] = None):
        super().__init__(logger, {})
        self.policy = policy

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Move ``policy`` and ``roles`` keyword arguments into ``extra``."""
        policy = kwargs.pop("policy", self.policy)
        roles: Optional[Iterable[str]] = kwargs.pop("roles", None)

        extra = dict(kwargs.get("extra") or {})
        if policy:
            extra["policy"] = policy
        if roles is not None:
            extra["roles"] = tuple(roles)
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[EngineConfig] = None,
    json_format: Optional[bool] = None,
    logger_name: str = "permkit",
) -> logging.Logger:
    """Configure the ``permkit`` logger.

    Only the library's own logger is touched; the root logger and any
    handlers installed by the host application are left alone.

    Args:
        config: EngineConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
        logger_name: Logger to configure (default: ``"permkit"``)

    Returns:
        The configured logger.
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    target = logging.getLogger(logger_name)
    target.setLevel(log_level)

    # Remove handlers installed by a previous call to avoid duplicates
    for handler in target.handlers[:]:
        if isinstance(handler.formatter, PermkitFormatter):
            target.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        PermkitFormatter(
            include_policy=True,
            json_format=config.log_json if json_format is None else json_format,
        )
    )
    target.addHandler(console_handler)

    return target


def get_policy_logger(name: str, policy: Optional[str] = None) -> PolicyLoggerAdapter:
    """Get a logger adapter bound to a policy name.

    Args:
        name: Logger name (typically __name__)
        policy: Optional policy name included in all records

    Returns:
        PolicyLoggerAdapter instance
    """
    return PolicyLoggerAdapter(logging.getLogger(name), policy=policy)


__all__ = [
    "safe_preview",
    "PermkitFormatter",
    "PolicyLoggerAdapter",
    "setup_logging",
    "get_policy_logger",
]
