from .config import EngineConfig, LogLevel, load_config_from_env
from .exceptions import (
    ConfigurationError,
    ContextError,
    ErrorRegistry,
    PermkitError,
    PolicyError,
    error_registry,
    register_error,
)
from .logging import (
    safe_preview,
    PermkitFormatter,
    PolicyLoggerAdapter,
    setup_logging,
    get_policy_logger,
)
from .permissions import (
    WILDCARD,
    AccessMode,
    PatternKind,
    PermissionCatalog,
    Permissions,
    PolicyDocument,
    Resolver,
    RoleAccess,
    RoleEntry,
    RoleGraph,
    as_names,
    validate_policy,
)
from .engine import PermissionEngine, create_permissions
from .binding import render_if, require_access

__version__ = "0.1.0"

__all__ = [
    'EngineConfig',
    'LogLevel',
    'load_config_from_env',
    'ConfigurationError',
    'ContextError',
    'ErrorRegistry',
    'PermkitError',
    'PolicyError',
    'error_registry',
    'register_error',
    'safe_preview',
    'PermkitFormatter',
    'PolicyLoggerAdapter',
    'setup_logging',
    'get_policy_logger',
    'WILDCARD',
    'AccessMode',
    'PatternKind',
    'PermissionCatalog',
    'Permissions',
    'PolicyDocument',
    'Resolver',
    'RoleAccess',
    'RoleEntry',
    'RoleGraph',
    'as_names',
    'validate_policy',
    'PermissionEngine',
    'create_permissions',
    'render_if',
    'require_access',
]
