"""Permission engine: the single entry point for building and querying a policy.

``PermissionEngine`` validates the policy eagerly, builds the catalog, role
graph and resolver once, and answers every query from those immutable
structures. ``create_permissions()`` is the functional constructor.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from .config import EngineConfig
from .permissions.access import RoleAccess
from .permissions.catalog import PermissionCatalog
from .permissions.constants import as_names
from .permissions.inheritance import Resolver, RoleGraph
from .permissions.policy import PolicyDocument, validate_policy

logger = logging.getLogger(__name__)

PolicyInput = Union[PolicyDocument, Mapping[str, Any]]


class PermissionEngine:
    """Resolves effective permissions for roles declared in a policy.

    Args:
        policy: A :class:`PolicyDocument` or a plain mapping with ``roles``,
            ``resources`` and ``permissions`` keys.
        config: Engine switches; defaults to ``EngineConfig()``.
        name: Optional policy name used in log records.

    Raises:
        PolicyError: If the policy is malformed or references undeclared
            roles (or, in strict mode, undeclared permissions). No engine
            is created in that case.

    Example::

        engine = PermissionEngine({
            "roles": ["admin", "editor", "viewer"],
            "resources": {"posts": ["create", "read", "update", "delete"], "users": ["read"]},
            "permissions": {
                "admin": {"can": ["*"]},
                "editor": {"can": ["posts:*"], "inherits": ["viewer"]},
                "viewer": {"can": ["posts:read", "users:read"]},
            },
        })
        engine.resolve_permissions("editor")        # 5 permissions
        engine.roles_with_permission("posts:read")  # {"admin", "editor", "viewer"}
        engine.access(["viewer"]).can("users:read") # True
    """

    def __init__(
        self,
        policy: PolicyInput,
        config: Optional[EngineConfig] = None,
        *,
        name: Optional[str] = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._name = name
        self._document = policy if isinstance(policy, PolicyDocument) else PolicyDocument.from_mapping(policy)

        self._catalog = PermissionCatalog(self._document.resources)
        validate_policy(self._document, self._catalog, strict=self._config.strict, name=name)

        self._graph = RoleGraph.from_policy(self._document)
        self._resolver = Resolver(
            self._document,
            self._catalog,
            self._graph,
            memoize=self._config.memoize,
            reverse_index=self._config.reverse_index,
            policy_name=name,
        )
        self._roles = frozenset(self._document.roles)
        self._role_order = {role: i for i, role in enumerate(self._document.roles)}
        self._access_for = functools.lru_cache(maxsize=self._config.access_cache_size)(self._build_access)

        extra = {"policy": name} if name else {}
        if self._graph.has_cycle():
            logger.debug("Role graph contains an inheritance cycle", extra=extra)
        logger.info(
            "Permission engine ready: %d role(s), %d resource(s), %d permission(s)",
            len(self._roles),
            len(self._catalog.resources),
            len(self._catalog),
            extra=extra,
        )

    # ── Policy-derived state ───────────────────────────

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def policy(self) -> PolicyDocument:
        return self._document

    @property
    def catalog(self) -> PermissionCatalog:
        return self._catalog

    @property
    def graph(self) -> RoleGraph:
        return self._graph

    @property
    def all_permissions(self) -> frozenset[str]:
        """Every ``resource:action`` pair declared by the policy."""
        return self._catalog.permissions

    @property
    def all_roles(self) -> frozenset[str]:
        return self._roles

    # ── Resolution ─────────────────────────────────────

    def expand(self, pattern: str) -> frozenset[str]:
        """Expand a grant pattern against the catalog."""
        return self._catalog.expand(pattern)

    def resolve_permissions(self, role: str) -> frozenset[str]:
        """Effective permissions of a single role, inheritance included."""
        return self._resolver.resolve(role)

    def resolve_multiple_roles(self, roles: Union[str, Iterable[str]]) -> frozenset[str]:
        """Union of the effective permissions of ``roles``; a bare string is one role."""
        return self._resolver.resolve_many(roles)

    def permissions_for_role(self, role: str) -> frozenset[str]:
        return self._resolver.resolve(role)

    def roles_with_permission(self, permission: str) -> frozenset[str]:
        """Every declared role whose effective permissions include ``permission``."""
        return self._resolver.roles_with_permission(permission)

    # ── Active-role views ──────────────────────────────

    def access(self, roles: Union[str, Iterable[str]]) -> RoleAccess:
        """Query object for an active-role set.

        Views are cached by the *value* of the role set, so ``["a", "b"]``
        and ``("b", "a", "a")`` share one view. A bare string is one role.
        """
        return self._access_for(frozenset(as_names(roles)))

    def _build_access(self, roles: frozenset[str]) -> RoleAccess:
        unknown = len(self._role_order)
        ordered = tuple(sorted(roles, key=lambda r: (self._role_order.get(r, unknown), r)))
        return RoleAccess(self, ordered, self._resolver.resolve_many(ordered))

    def __repr__(self) -> str:
        return (
            f"PermissionEngine(name={self._name!r}, roles={len(self._roles)}, "
            f"permissions={len(self._catalog)}, strict={self._config.strict})"
        )


def create_permissions(
    policy: PolicyInput,
    *,
    config: Optional[EngineConfig] = None,
    strict: Optional[bool] = None,
    name: Optional[str] = None,
) -> PermissionEngine:
    """Build a :class:`PermissionEngine` from a policy.

    Args:
        policy: Policy document or mapping.
        config: Engine configuration (defaults to ``EngineConfig()``).
        strict: Shortcut overriding ``config.strict``.
        name: Optional policy name for log records.
    """
    effective = config or EngineConfig()
    if strict is not None and strict != effective.strict:
        effective = effective.model_copy(update={"strict": strict})
    return PermissionEngine(policy, effective, name=name)


__all__ = [
    "PermissionEngine",
    "PolicyInput",
    "create_permissions",
]
