"""Unified exception hierarchy for permkit.

All errors inherit from PermkitError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to exception classes

Usage:
    from permkit.exceptions import PermkitError, PolicyError

Applications may define thin subclasses for their own errors:
    @register_error("TENANT_POLICY_ERROR")
    class TenantPolicyError(PolicyError):
        code = "TENANT_POLICY_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "PermkitError",
    "ConfigurationError",
    "PolicyError",
    "ContextError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class PermkitError(Exception):
    """Base exception for permkit.

    Attributes:
        code: Stable error code string (e.g. "POLICY_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(PermkitError):
    """Invalid engine configuration."""

    code: str = "CONFIGURATION_ERROR"
    message: str = "Invalid configuration"


class PolicyError(PermkitError):
    """The policy document cannot be turned into an engine.

    Raised at construction time only. ``details`` names the offending
    role together with the ``reference`` or ``pattern`` that was rejected.
    """

    code: str = "POLICY_ERROR"
    message: str = "Invalid permission policy"


class ContextError(PermkitError):
    """A role-access handle was required but none was supplied."""

    code: str = "CONTEXT_ERROR"
    message: str = "No role access handle available in this context"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[PermkitError])


class ErrorRegistry:
    """Registry for mapping stable error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[PermkitError]] = {}

    def register(self, code: str, error_cls: type[PermkitError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[PermkitError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[PermkitError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(PermkitError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", PermkitError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("POLICY_ERROR", PolicyError)
error_registry.register("CONTEXT_ERROR", ContextError)
