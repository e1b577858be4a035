"""Role inheritance graph and permission resolution.

Provides:
- ``RoleGraph``: adjacency over roles built from ``inherits`` lists.
- ``Resolver``: turns a role (or role set) into its effective permissions.

The graph may contain cycles. Traversal is an iterative depth-first search
with a visited set, so every role is expanded at most once per call and
stack depth does not grow with the length of an inheritance chain.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional, Sequence, Union

from ..logging import get_policy_logger
from .catalog import PermissionCatalog
from .constants import as_names
from .policy import PolicyDocument


class RoleGraph:
    """Directed graph where an edge ``A → B`` means A inherits B.

    Args:
        edges: Mapping of role to the roles it inherits. Roles without an
            entry are leaves. References must already be validated.
    """

    __slots__ = ("_edges",)

    def __init__(self, edges: Mapping[str, Sequence[str]]) -> None:
        self._edges: dict[str, tuple[str, ...]] = {role: tuple(parents) for role, parents in edges.items()}

    @classmethod
    def from_policy(cls, document: PolicyDocument) -> RoleGraph:
        return cls({role: document.entry(role).inherits for role in document.roles})

    @property
    def roles(self) -> tuple[str, ...]:
        return tuple(self._edges)

    def __contains__(self, role: object) -> bool:
        return role in self._edges

    def inherits(self, role: str) -> tuple[str, ...]:
        """Direct parents of ``role`` (empty for unknown roles)."""
        return self._edges.get(role, ())

    def walk(self, role: str) -> Iterator[str]:
        """Yield ``role`` and every role it transitively inherits, once each.

        Pre-order depth-first; parents are visited in declaration order.
        """
        visited: set[str] = set()
        stack = [role]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            yield current
            # Reverse so the first declared parent is popped first
            stack.extend(reversed(self._edges.get(current, ())))

    def ancestors(self, role: str) -> frozenset[str]:
        """``role`` plus every role reachable through inheritance."""
        return frozenset(self.walk(role))

    def has_cycle(self) -> bool:
        """Whether any inheritance cycle exists (cycles are legal)."""
        # Iterative three-colour DFS
        done: set[str] = set()
        for start in self._edges:
            if start in done:
                continue
            on_path: set[str] = {start}
            stack: list[tuple[str, Iterator[str]]] = [(start, iter(self._edges.get(start, ())))]
            while stack:
                node, parents = stack[-1]
                parent = next(parents, None)
                if parent is None:
                    stack.pop()
                    on_path.discard(node)
                    done.add(node)
                    continue
                if parent in on_path:
                    return True
                if parent not in done:
                    on_path.add(parent)
                    stack.append((parent, iter(self._edges.get(parent, ()))))
        return False

    def __repr__(self) -> str:
        edges = sum(len(parents) for parents in self._edges.values())
        return f"RoleGraph(roles={len(self._edges)}, edges={edges})"


class Resolver:
    """Computes effective permission sets from a policy.

    Args:
        document: Validated policy document.
        catalog: Catalog built from the same document.
        graph: Role graph built from the same document.
        memoize: Cache per-role results. Safe because the policy never
            changes for the resolver's lifetime.
        reverse_index: Build a permission → roles index for
            :meth:`roles_with_permission` instead of scanning every role.
        policy_name: Optional policy name attached to every log record.
    """

    def __init__(
        self,
        document: PolicyDocument,
        catalog: PermissionCatalog,
        graph: RoleGraph,
        *,
        memoize: bool = True,
        reverse_index: bool = False,
        policy_name: Optional[str] = None,
    ) -> None:
        self._log = get_policy_logger(__name__, policy=policy_name)
        self._document = document
        self._catalog = catalog
        self._graph = graph
        self._memoize = memoize
        self._cache: dict[str, frozenset[str]] = {}
        self._warned: set[str] = set()
        self._index: dict[str, frozenset[str]] | None = None
        if reverse_index:
            self._index = self._build_index()

    def _expand_role(self, role: str) -> frozenset[str]:
        perms: set[str] = set()
        for current in self._graph.walk(role):
            for pattern in self._document.entry(current).can:
                perms.update(self._catalog.expand(pattern))
        return frozenset(perms)

    def resolve(self, role: str) -> frozenset[str]:
        """Own grants of ``role`` unioned with everything it inherits.

        An undeclared role resolves to the empty set; the warning about it is
        logged once per role.
        """
        if role not in self._graph:
            if role not in self._warned:
                self._warned.add(role)
                self._log.warning("Resolving undeclared role '%s'; it grants nothing", role)
            return frozenset()

        if self._memoize:
            cached = self._cache.get(role)
            if cached is not None:
                return cached

        perms = self._expand_role(role)
        self._log.debug("Resolved role '%s' to %d permission(s)", role, len(perms))

        if self._memoize:
            self._cache[role] = perms
        return perms

    def resolve_many(self, roles: Union[str, Iterable[str]]) -> frozenset[str]:
        """Union of :meth:`resolve` over ``roles``; empty input gives the empty set.

        A bare string is treated as a single role.
        """
        perms: set[str] = set()
        for role in as_names(roles):
            perms.update(self.resolve(role))
        return frozenset(perms)

    def roles_with_permission(self, permission: str) -> frozenset[str]:
        """Every declared role whose resolved set contains ``permission``."""
        if self._index is not None:
            return self._index.get(permission, frozenset())
        return frozenset(role for role in self._document.roles if permission in self.resolve(role))

    def _build_index(self) -> dict[str, frozenset[str]]:
        index: dict[str, set[str]] = {}
        for role in self._document.roles:
            for permission in self.resolve(role):
                index.setdefault(permission, set()).add(role)
        self._log.debug("Built reverse index over %d permission(s)", len(index))
        return {permission: frozenset(roles) for permission, roles in index.items()}


__all__ = [
    "Resolver",
    "RoleGraph",
]
