"""Explicit access handle for code that renders or gates on permissions.

There is no ambient "current roles" state in permkit. Callers build one
:class:`~permkit.permissions.access.RoleAccess` per active-role set with
``engine.access(roles)`` and pass it down to whatever needs it. These
helpers are the consuming side of that handle.
"""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar, Union

from .exceptions import ContextError
from .permissions.access import Mode, RoleAccess

T = TypeVar("T")
F = TypeVar("F")


def require_access(access: Optional[RoleAccess], consumer: str = "require_access") -> RoleAccess:
    """Return ``access`` or fail when no handle was passed down.

    Raises:
        ContextError: If ``access`` is None.
    """
    if access is None:
        raise ContextError(
            f"{consumer} requires a RoleAccess handle; build one with engine.access(roles)",
            consumer=consumer,
        )
    return access


def render_if(
    access: Optional[RoleAccess],
    permissions: Union[str, Iterable[str]],
    content: T,
    *,
    mode: Mode = "all",
    fallback: Optional[F] = None,
) -> Union[T, F, None]:
    """Select ``content`` when the permission check holds, else ``fallback``.

    Args:
        access: Handle for the active roles.
        permissions: One permission or several.
        content: Returned when allowed.
        mode: ``"all"`` (default) or ``"any"``.
        fallback: Returned when denied (default: None, nothing rendered).

    Example::

        toolbar = render_if(access, ["posts:update", "posts:delete"], EditToolbar(), mode="any")
    """
    handle = require_access(access, consumer="render_if")
    return content if handle.allows(permissions, mode) else fallback


__all__ = [
    "render_if",
    "require_access",
]
