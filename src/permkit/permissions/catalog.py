"""Permission catalog and wildcard expansion.

The catalog is every ``resource:action`` pair derivable from the policy's
resource declarations. It is built once and never mutated.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Sequence

from .constants import PatternKind, Permissions


class PermissionCatalog:
    """Immutable set of declarable permissions.

    Args:
        resources: Mapping of resource name to its declared actions.

    Example::

        catalog = PermissionCatalog({"posts": ["read", "update"], "users": ["read"]})
        catalog.expand("*")          # all three permissions
        catalog.expand("posts:*")    # {"posts:read", "posts:update"}
        catalog.expand("ghost:*")    # frozenset(), unknown resource
        catalog.expand("x:y")        # {"x:y"}, literals are not validated
    """

    __slots__ = ("_by_resource", "_permissions")

    def __init__(self, resources: Mapping[str, Sequence[str]]) -> None:
        self._by_resource: dict[str, frozenset[str]] = {
            resource: frozenset(Permissions.of(resource, action) for action in actions)
            for resource, actions in resources.items()
        }
        self._permissions: frozenset[str] = frozenset().union(*self._by_resource.values())

    @property
    def permissions(self) -> frozenset[str]:
        """Every permission in the catalog."""
        return self._permissions

    @property
    def resources(self) -> frozenset[str]:
        return frozenset(self._by_resource)

    def for_resource(self, resource: str) -> frozenset[str]:
        """Catalog entries for ``resource``; empty when it is not declared."""
        return self._by_resource.get(resource, frozenset())

    def actions_for(self, resource: str) -> frozenset[str]:
        return frozenset(Permissions.split(p)[1] for p in self.for_resource(resource))

    def has_resource(self, resource: str) -> bool:
        return resource in self._by_resource

    def expand(self, pattern: str) -> frozenset[str]:
        """Expand a grant pattern into concrete permissions.

        - ``"*"`` → the entire catalog.
        - ``"resource:*"`` → all entries for that resource, or the empty set
          if the resource is not declared.
        - anything else → a singleton of the literal, without checking that
          it is in the catalog.
        """
        kind = Permissions.kind(pattern)
        if kind == PatternKind.GLOBAL:
            return self._permissions
        if kind == PatternKind.RESOURCE:
            return self.for_resource(Permissions.wildcard_resource(pattern))
        return frozenset((pattern,))

    def __contains__(self, permission: object) -> bool:
        return permission in self._permissions

    def __iter__(self) -> Iterator[str]:
        return iter(self._permissions)

    def __len__(self) -> int:
        return len(self._permissions)

    def __repr__(self) -> str:
        return f"PermissionCatalog(resources={sorted(self._by_resource)!r}, size={len(self)})"


__all__ = ["PermissionCatalog"]
