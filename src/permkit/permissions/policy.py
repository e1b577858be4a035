"""Policy document models and construction-time validation.

Provides:
- ``RoleEntry``: a role's direct grants and inherited roles.
- ``PolicyDocument``: roles, resources and per-role entries.
- ``validate_policy()``: reference and (optionally) strict pattern checks.

Every failure surfaces as :class:`~permkit.exceptions.PolicyError`, so an
engine is either fully built or not built at all.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import PolicyError
from ..logging import get_policy_logger
from .catalog import PermissionCatalog
from .constants import PatternKind, Permissions


def _require_non_empty(values: tuple[str, ...], what: str) -> tuple[str, ...]:
    for value in values:
        if not value:
            raise ValueError(f"{what} must be non-empty strings")
    return values


class RoleEntry(BaseModel):
    """Direct grants and inheritance for one role.

    Attributes:
        can: Grant patterns (``"*"``, ``"resource:*"`` or ``"resource:action"``).
        inherits: Roles whose permissions this role also receives.
    """

    model_config = {"extra": "forbid", "frozen": True}

    can: tuple[str, ...]
    inherits: tuple[str, ...] = ()

    @field_validator("can")
    @classmethod
    def validate_can(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _require_non_empty(v, "Permission patterns")

    @field_validator("inherits")
    @classmethod
    def validate_inherits(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _require_non_empty(v, "Inherited role names")


_EMPTY_ENTRY = RoleEntry(can=())


class PolicyDocument(BaseModel):
    """Declarative permission policy.

    Example::

        PolicyDocument.from_mapping({
            "roles": ["admin", "editor", "viewer"],
            "resources": {"posts": ["create", "read"], "users": ["read"]},
            "permissions": {
                "admin": {"can": ["*"]},
                "editor": {"can": ["posts:*"], "inherits": ["viewer"]},
                "viewer": {"can": ["posts:read", "users:read"]},
            },
        })
    """

    model_config = {"extra": "forbid", "frozen": True}

    roles: tuple[str, ...]
    resources: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    permissions: dict[str, RoleEntry] = Field(default_factory=dict)

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _require_non_empty(v, "Role names")

    @field_validator("resources")
    @classmethod
    def validate_resources(cls, v: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        for resource, actions in v.items():
            if not resource:
                raise ValueError("Resource names must be non-empty strings")
            _require_non_empty(actions, f"Actions of resource '{resource}'")
        return v

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PolicyDocument:
        """Parse a plain mapping, converting validation failures to PolicyError."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise PolicyError(
                f"Malformed policy document: {e.error_count()} validation error(s)",
                errors=e.errors(include_url=False),
            ) from e

    def entry(self, role: str) -> RoleEntry:
        """The role's entry; declared roles without one grant nothing."""
        return self.permissions.get(role, _EMPTY_ENTRY)


def _check_pattern(role: str, pattern: str, catalog: PermissionCatalog) -> None:
    kind = Permissions.kind(pattern)
    if kind == PatternKind.GLOBAL:
        return
    if kind == PatternKind.RESOURCE:
        resource = Permissions.wildcard_resource(pattern)
        if not catalog.has_resource(resource):
            raise PolicyError(
                f"Role '{role}' grants '{pattern}' but resource '{resource}' is not declared",
                role=role,
                pattern=pattern,
            )
        return
    if pattern not in catalog:
        raise PolicyError(
            f"Role '{role}' grants '{pattern}' which is not in the permission catalog",
            role=role,
            pattern=pattern,
        )


def validate_policy(
    document: PolicyDocument,
    catalog: PermissionCatalog,
    *,
    strict: bool = False,
    name: Optional[str] = None,
) -> None:
    """Check cross references of a parsed policy.

    Checks, in order:
    1. Role names are unique.
    2. Every ``permissions`` key is a declared role.
    3. Every ``inherits`` reference is a declared role.
    4. (strict only) Every literal pattern is in the catalog and every
       resource wildcard names a declared resource.

    Log records carry ``name`` as their ``policy`` field.

    Raises:
        PolicyError: On the first violation found.
    """
    declared: set[str] = set()
    for role in document.roles:
        if role in declared:
            raise PolicyError(f"Role '{role}' is declared more than once", role=role)
        declared.add(role)

    for role in document.permissions:
        if role not in declared:
            raise PolicyError(
                f"Permission entry for undeclared role '{role}'",
                role=role,
            )

    for role, entry in document.permissions.items():
        for reference in entry.inherits:
            if reference not in declared:
                raise PolicyError(
                    f"Role '{role}' inherits undeclared role '{reference}'",
                    role=role,
                    reference=reference,
                )

    if not strict:
        return

    for role, entry in document.permissions.items():
        for pattern in entry.can:
            _check_pattern(role, pattern, catalog)

    logger = get_policy_logger(__name__, policy=name)
    logger.debug("Strict validation passed for %d role(s)", len(document.permissions))


__all__ = [
    "PolicyDocument",
    "RoleEntry",
    "validate_policy",
]
