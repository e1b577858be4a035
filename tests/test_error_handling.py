"""Tests for the exception hierarchy and error registry."""

from __future__ import annotations

import pytest

from permkit import (
    ConfigurationError,
    ContextError,
    PermkitError,
    PolicyError,
    error_registry,
    register_error,
)


class TestExceptionHierarchy:
    """Tests for error codes, messages and details."""

    @pytest.mark.parametrize(
        ("error_cls", "code"),
        [
            (PermkitError, "INTERNAL_ERROR"),
            (ConfigurationError, "CONFIGURATION_ERROR"),
            (PolicyError, "POLICY_ERROR"),
            (ContextError, "CONTEXT_ERROR"),
        ],
    )
    def test_default_codes(self, error_cls: type[PermkitError], code: str) -> None:
        """Each error class carries its own default code."""
        err = error_cls()
        assert err.code == code
        assert isinstance(err, PermkitError)
        assert str(err) == err.message

    def test_details_and_message(self) -> None:
        """Keyword arguments become details next to the message."""
        err = PolicyError("Role 'a' inherits undeclared role 'b'", role="a", reference="b")
        assert err.message == "Role 'a' inherits undeclared role 'b'"
        assert err.details == {"role": "a", "reference": "b"}

    def test_code_override(self) -> None:
        """An explicit code replaces the default."""
        assert PolicyError(code="CUSTOM").code == "CUSTOM"


class TestErrorRegistry:
    """Tests for ErrorRegistry."""

    def test_base_errors_registered(self) -> None:
        """Built-in errors are registered under their codes."""
        assert error_registry.get("POLICY_ERROR") is PolicyError
        assert error_registry.get("CONTEXT_ERROR") is ContextError
        assert error_registry.get("CONFIGURATION_ERROR") is ConfigurationError
        assert error_registry.get("INTERNAL_ERROR") is PermkitError

    def test_unknown_code(self) -> None:
        """Unregistered codes look up to None."""
        assert error_registry.get("NOPE") is None

    def test_register_error_decorator(self) -> None:
        """The decorator registers a custom error class."""

        @register_error("TENANT_POLICY_ERROR")
        class TenantPolicyError(PolicyError):
            code = "TENANT_POLICY_ERROR"

        assert error_registry.get("TENANT_POLICY_ERROR") is TenantPolicyError
        assert "TENANT_POLICY_ERROR" in error_registry.all()
