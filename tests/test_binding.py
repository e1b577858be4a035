"""Tests for the explicit access handle helpers."""

from __future__ import annotations

from typing import Any

import pytest

from permkit import ContextError, create_permissions, render_if, require_access


class TestRequireAccess:
    """Tests for require_access."""

    def test_returns_handle(self, blog: dict[str, Any]) -> None:
        """A present handle is returned unchanged."""
        access = create_permissions(blog).access(["viewer"])
        assert require_access(access) is access

    def test_missing_handle_raises(self) -> None:
        """A missing handle raises ContextError naming the consumer."""
        with pytest.raises(ContextError) as exc_info:
            require_access(None, consumer="toolbar")
        assert exc_info.value.code == "CONTEXT_ERROR"
        assert exc_info.value.details == {"consumer": "toolbar"}


class TestRenderIf:
    """Tests for render_if."""

    def test_renders_content_when_granted(self, blog: dict[str, Any]) -> None:
        """Granted content is returned as is."""
        access = create_permissions(blog).access(["viewer"])
        assert render_if(access, "posts:read", "content") == "content"

    def test_default_fallback_is_none(self, blog: dict[str, Any]) -> None:
        """Denied content renders nothing by default."""
        access = create_permissions(blog).access(["viewer"])
        assert render_if(access, "posts:delete", "content") is None

    def test_fallback_when_denied(self, blog: dict[str, Any]) -> None:
        """Denied content renders the fallback."""
        access = create_permissions(blog).access(["viewer"])
        assert render_if(access, "posts:delete", "content", fallback="denied") == "denied"

    def test_fallback_not_used_when_granted(self, blog: dict[str, Any]) -> None:
        """The fallback is ignored when access is granted."""
        access = create_permissions(blog).access(["admin"])
        assert render_if(access, "posts:delete", "content", fallback="denied") == "content"

    def test_all_mode_requires_every_permission(self, blog: dict[str, Any]) -> None:
        """The default mode needs every listed permission."""
        access = create_permissions(blog).access(["viewer"])
        assert render_if(access, ["posts:read", "users:read"], "ok") == "ok"
        assert render_if(access, ["posts:read", "posts:update"], "ok") is None

    def test_any_mode(self, blog: dict[str, Any]) -> None:
        """mode="any" needs one listed permission."""
        access = create_permissions(blog).access(["viewer"])
        assert render_if(access, ["posts:update", "users:read"], "ok", mode="any") == "ok"
        assert render_if(access, ["posts:update", "posts:delete"], "ok", mode="any") is None

    def test_inherited_permission(self, blog: dict[str, Any]) -> None:
        """Inherited permissions count as granted."""
        access = create_permissions(blog).access(["editor"])
        assert render_if(access, "users:read", "ok") == "ok"

    def test_missing_handle_raises(self) -> None:
        """The default consumer name appears in the error."""
        with pytest.raises(ContextError, match="render_if"):
            render_if(None, "posts:read", "content")
