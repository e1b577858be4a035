"""Permission catalog, policy, inheritance and access checks.

Defines:
- Permissions: builders for ``resource:action`` strings
- PermissionCatalog: declarable permissions and wildcard expansion
- PolicyDocument / RoleEntry: the policy shape, validate_policy()
- RoleGraph / Resolver: cycle-safe inheritance resolution
- RoleAccess: predicates over an active-role set
"""

from .access import AccessMode, Mode, RoleAccess
from .catalog import PermissionCatalog
from .constants import (
    RESOURCE_WILDCARD_SUFFIX,
    SEPARATOR,
    WILDCARD,
    PatternKind,
    Permissions,
    as_names,
)
from .inheritance import Resolver, RoleGraph
from .policy import PolicyDocument, RoleEntry, validate_policy

__all__ = [
    "RESOURCE_WILDCARD_SUFFIX",
    "SEPARATOR",
    "WILDCARD",
    "AccessMode",
    "Mode",
    "PatternKind",
    "PermissionCatalog",
    "Permissions",
    "PolicyDocument",
    "Resolver",
    "RoleAccess",
    "RoleEntry",
    "RoleGraph",
    "as_names",
    "validate_policy",
]
