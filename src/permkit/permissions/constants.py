"""Permission string constants and builders.

Provides:
- ``WILDCARD`` / ``SEPARATOR``: the pattern grammar.
- ``Permissions``: builders and parsers for ``resource:action`` strings.
"""

from __future__ import annotations

from typing import Iterable, Union

WILDCARD = "*"
SEPARATOR = ":"
RESOURCE_WILDCARD_SUFFIX = f"{SEPARATOR}{WILDCARD}"


class PatternKind:
    """Classification of a role's direct grant expression."""

    GLOBAL = "global"  # "*"
    RESOURCE = "resource"  # "posts:*"
    LITERAL = "literal"  # "posts:read"


class Permissions:
    """Builders for permission strings.

    Format: ``{resource}:{action}``

    Example::

        Permissions.of("posts", "read")       → "posts:read"
        Permissions.resource_wildcard("posts") → "posts:*"
        Permissions.split("posts:read")       → ("posts", "read")
        Permissions.kind("posts:*")           → PatternKind.RESOURCE
    """

    @staticmethod
    def of(resource: str, action: str) -> str:
        """Build the canonical permission string for a resource/action pair."""
        return f"{resource}{SEPARATOR}{action}"

    @staticmethod
    def resource_wildcard(resource: str) -> str:
        """Build the pattern matching every action of ``resource``."""
        return f"{resource}{RESOURCE_WILDCARD_SUFFIX}"

    @staticmethod
    def split(permission: str) -> tuple[str, str]:
        """Split a permission into ``(resource, action)``.

        Only the first separator splits, so actions may contain ``:``.
        A string without a separator is returned as ``(permission, "")``.
        """
        resource, _, action = permission.partition(SEPARATOR)
        return resource, action

    @staticmethod
    def kind(pattern: str) -> str:
        """Classify a grant pattern as global, resource wildcard or literal."""
        if pattern == WILDCARD:
            return PatternKind.GLOBAL
        if pattern.endswith(RESOURCE_WILDCARD_SUFFIX):
            return PatternKind.RESOURCE
        return PatternKind.LITERAL

    @staticmethod
    def wildcard_resource(pattern: str) -> str:
        """Return the resource named by a ``resource:*`` pattern."""
        return pattern[: -len(RESOURCE_WILDCARD_SUFFIX)]


def as_names(values: Union[str, Iterable[str]]) -> tuple[str, ...]:
    """Normalize a role or permission argument to a tuple of names.

    A bare string is one name, not a sequence of characters.

    Example::

        as_names("admin")              → ("admin",)
        as_names(["admin", "editor"])  → ("admin", "editor")
    """
    if isinstance(values, str):
        return (values,)
    return tuple(values)


__all__ = [
    "RESOURCE_WILDCARD_SUFFIX",
    "SEPARATOR",
    "WILDCARD",
    "PatternKind",
    "Permissions",
    "as_names",
]
