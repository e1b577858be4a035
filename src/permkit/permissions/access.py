"""Access checks over an active-role set.

``RoleAccess`` is the query object handed to whatever needs to answer
"may the current caller do X". It is built once per active-role set by
:meth:`permkit.engine.PermissionEngine.access` and never changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Literal, Union

from .constants import as_names

if TYPE_CHECKING:
    from ..engine import PermissionEngine

Mode = Literal["all", "any"]


class AccessMode:
    """How a list of permissions is combined by :meth:`RoleAccess.allows`."""

    ALL = "all"  # every permission required; empty list → allowed
    ANY = "any"  # one permission suffices; empty list → denied


class RoleAccess:
    """Predicates over the permissions granted to a set of active roles.

    Boundary semantics for the list predicates are fixed: "all of nothing"
    is true and "any of nothing" is false.

    Example::

        access = engine.access(["editor"])
        access.can("posts:update")                     # True
        access.can_all([])                             # True
        access.can_any([])                             # False
        access.allows(["posts:read", "users:ban"], mode="any")
    """

    __slots__ = ("_engine", "_roles", "_role_set", "_permissions")

    def __init__(
        self,
        engine: PermissionEngine,
        roles: tuple[str, ...],
        permissions: frozenset[str],
    ) -> None:
        self._engine = engine
        self._roles = roles
        self._role_set = frozenset(roles)
        self._permissions = permissions

    @property
    def roles(self) -> tuple[str, ...]:
        """Active roles, in policy declaration order."""
        return self._roles

    @property
    def permissions(self) -> frozenset[str]:
        """Effective permissions of the active roles."""
        return self._permissions

    def can(self, permission: str) -> bool:
        return permission in self._permissions

    def can_all(self, permissions: Union[str, Iterable[str]]) -> bool:
        """True when every permission is granted; an empty input is allowed."""
        return all(p in self._permissions for p in as_names(permissions))

    def can_any(self, permissions: Union[str, Iterable[str]]) -> bool:
        """True when at least one permission is granted; an empty input is denied."""
        return any(p in self._permissions for p in as_names(permissions))

    def has_role(self, role: str) -> bool:
        return role in self._role_set

    def has_all_roles(self, roles: Union[str, Iterable[str]]) -> bool:
        return all(r in self._role_set for r in as_names(roles))

    def has_any_role(self, roles: Union[str, Iterable[str]]) -> bool:
        return any(r in self._role_set for r in as_names(roles))

    def allows(self, permissions: Union[str, Iterable[str]], mode: Mode = "all") -> bool:
        """Combine one or more permissions with ``mode``.

        Args:
            permissions: A single permission string or an iterable of them.
            mode: ``"all"`` (default) uses :meth:`can_all`, ``"any"`` uses
                :meth:`can_any`.

        Raises:
            ValueError: If ``mode`` is neither ``"all"`` nor ``"any"``.
        """
        perms = as_names(permissions)
        if mode == AccessMode.ALL:
            return self.can_all(perms)
        if mode == AccessMode.ANY:
            return self.can_any(perms)
        raise ValueError(f"Unknown access mode {mode!r}; expected 'all' or 'any'")

    def permissions_for_role(self, role: str) -> frozenset[str]:
        """Resolved permissions of any declared role, active or not."""
        return self._engine.permissions_for_role(role)

    def roles_with_permission(self, permission: str) -> frozenset[str]:
        """Every declared role granting ``permission``, active or not."""
        return self._engine.roles_with_permission(permission)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoleAccess):
            return NotImplemented
        return self._role_set == other._role_set and self._permissions == other._permissions

    def __hash__(self) -> int:
        return hash((self._role_set, self._permissions))

    def __repr__(self) -> str:
        return f"RoleAccess(roles={self._roles!r}, permissions={len(self._permissions)})"


__all__ = [
    "AccessMode",
    "Mode",
    "RoleAccess",
]
