"""Shared policy fixtures."""

from __future__ import annotations

from typing import Any

import pytest


def blog_policy() -> dict[str, Any]:
    """admin / editor / viewer over posts and users (catalog size 5)."""
    return {
        "roles": ["admin", "editor", "viewer"],
        "resources": {
            "posts": ["create", "read", "update", "delete"],
            "users": ["read"],
        },
        "permissions": {
            "admin": {"can": ["*"]},
            "editor": {"can": ["posts:*"], "inherits": ["viewer"]},
            "viewer": {"can": ["posts:read", "users:read"]},
        },
    }


def cms_policy() -> dict[str, Any]:
    """Four roles over posts, users and comments (catalog size 11)."""
    return {
        "roles": ["admin", "editor", "viewer", "guest"],
        "resources": {
            "posts": ["create", "read", "update", "delete"],
            "users": ["create", "read", "update", "delete"],
            "comments": ["create", "read", "delete"],
        },
        "permissions": {
            "admin": {"can": ["*"]},
            "editor": {
                "can": ["posts:*", "comments:create", "comments:read"],
                "inherits": ["viewer"],
            },
            "viewer": {"can": ["posts:read", "users:read", "comments:read"]},
            "guest": {"can": ["posts:read"]},
        },
    }


def cycle_policy() -> dict[str, Any]:
    return {
        "roles": ["roleA", "roleB"],
        "resources": {"x": ["y"]},
        "permissions": {
            "roleA": {"can": ["x:y"], "inherits": ["roleB"]},
            "roleB": {"can": [], "inherits": ["roleA"]},
        },
    }


@pytest.fixture
def blog() -> dict[str, Any]:
    return blog_policy()


@pytest.fixture
def cms() -> dict[str, Any]:
    return cms_policy()


@pytest.fixture
def cycle() -> dict[str, Any]:
    return cycle_policy()
