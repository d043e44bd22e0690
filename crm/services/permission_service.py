"""Permission service for RBAC resolution and route access.

Resolution order: super admin > admin role > explicit override > role default
Explicit overrides replace the role default entirely (no merge).
Unknown role or unknown key: defaults to False (deny)
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from crm.core.permissions import (
    PERMISSION_REGISTRY,
    ROUTE_TO_PERMISSION,
    SUPER_ADMIN_HOME,
    PermissionKey,
    get_default_permission_map,
    get_permission_for_route,
    is_valid_permission,
)
from crm.core.structured_logging import build_log_context
from crm.enums import ROLES_CAN_EDIT_PERMISSIONS, ROLES_WITH_ALL_PERMISSIONS, Role
from crm.schemas.access import AccessContext, PermissionRow, StoredPermission

logger = logging.getLogger(__name__)

_ALL_PERMISSION_ROLES = {r.value for r in ROLES_WITH_ALL_PERMISSIONS}
_EDIT_PERMISSION_ROLES = {r.value for r in ROLES_CAN_EDIT_PERMISSIONS}


# =============================================================================
# Permission Sources
# =============================================================================

@dataclass(frozen=True)
class RoleDefault:
    """No stored rows: the member gets the static defaults of their role."""
    role: str | None


@dataclass(frozen=True)
class ExplicitOverride:
    """Stored rows exist: they are the member's complete grant set."""
    grants: dict[str, bool] = field(default_factory=dict)


PermissionSource = RoleDefault | ExplicitOverride


def _key_value(key: PermissionKey | str) -> str:
    return key.value if isinstance(key, PermissionKey) else key


def build_permission_source(
    role: str | None,
    stored: Iterable[StoredPermission | Mapping] | None,
) -> PermissionSource:
    """Pick the permission source from a member's persisted permission rows."""
    rows = [
        row if isinstance(row, StoredPermission) else StoredPermission.model_validate(row)
        for row in (stored or [])
    ]
    if not rows:
        return RoleDefault(role=role)
    return ExplicitOverride(grants={row.permission_key: row.is_enabled for row in rows})


def resolve_permission_map(source: PermissionSource) -> dict[str, bool]:
    """
    Resolve a source into a map covering every known key.

    Override keys that are not in the registry are dropped; registry keys
    missing from an override are denied.
    """
    if isinstance(source, ExplicitOverride):
        return {key: bool(source.grants.get(key, False)) for key in PERMISSION_REGISTRY}
    return get_default_permission_map(source.role)


def build_access_context(
    *,
    role: str | None,
    source: PermissionSource | None = None,
    is_super_admin: bool = False,
    enabled_modules: Iterable[str] | None = None,
    org_id: str | None = None,
    user_id: str | None = None,
) -> AccessContext:
    """
    Resolve grants once and bundle them with the member's identity.

    Roles outside the known set resolve to no permissions, even when stored
    rows exist for them.
    """
    if Role.has_value(role):
        permissions = resolve_permission_map(source or RoleDefault(role=role))
    else:
        logger.debug("Unknown role resolved to no permissions: %s", role)
        permissions = get_default_permission_map(None)
    return AccessContext(
        org_id=org_id,
        user_id=user_id,
        role=role,
        is_super_admin=is_super_admin,
        permissions=permissions,
        enabled_modules=frozenset(enabled_modules) if enabled_modules is not None else None,
    )


# =============================================================================
# Permission Checks
# =============================================================================

def has_permission(ctx: AccessContext, key: PermissionKey | str) -> bool:
    """Check if the member may use a feature area."""
    if ctx.is_super_admin:
        return True
    if ctx.role in _ALL_PERMISSION_ROLES:
        return True
    value = _key_value(key)
    if not is_valid_permission(value):
        logger.debug("Unknown permission key denied: %s", value)
        return False
    return ctx.permissions.get(value, False) is True


def get_granted_permissions(ctx: AccessContext) -> set[str]:
    """All keys the member currently passes."""
    return {key for key in PERMISSION_REGISTRY if has_permission(ctx, key)}


def can_edit_permissions(ctx: AccessContext) -> bool:
    """Check if the member may edit other members' permissions."""
    return ctx.is_super_admin or ctx.role in _EDIT_PERMISSION_ROLES


def build_permission_rows(
    org_id: str,
    user_id: str,
    permission_map: Mapping[str, bool],
) -> list[PermissionRow]:
    """
    Build the complete user_permissions payload for an admin edit.

    One row per registry key, so the stored set always replaces the role
    default as a whole. Raises ValueError for keys outside the registry.
    """
    unknown = sorted(
        _key_value(k) for k in permission_map if not is_valid_permission(_key_value(k))
    )
    if unknown:
        raise ValueError(f"Invalid permission: {', '.join(unknown)}")
    normalized = {_key_value(k): bool(v) for k, v in permission_map.items()}
    return [
        PermissionRow(
            organization_id=org_id,
            user_id=user_id,
            permission_key=key,
            is_enabled=normalized.get(key, False),
        )
        for key in PERMISSION_REGISTRY
    ]


# =============================================================================
# Route Access
# =============================================================================

class RouteOutcome(str, Enum):
    """Result of checking the current route against the member's grants."""

    ALLOWED = "allowed"  # Stay on the current route
    REDIRECT = "redirect"  # Move to the first accessible route
    NO_ACCESSIBLE_ROUTES = "no_accessible_routes"  # Member can reach nothing


@dataclass(frozen=True)
class RouteDecision:
    outcome: RouteOutcome
    path: str | None


def _normalize_path(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


def first_accessible_route(ctx: AccessContext) -> str | None:
    """First route in table order the member passes (super admins: their console)."""
    if ctx.is_super_admin:
        return SUPER_ADMIN_HOME
    for path, key in ROUTE_TO_PERMISSION.items():
        if has_permission(ctx, key):
            return path
    return None


def get_route_decision(ctx: AccessContext, current_path: str) -> RouteDecision:
    """Decide whether the member may stay on `current_path` or where to go instead."""
    path = _normalize_path(current_path)
    key = get_permission_for_route(path)
    if key is None or has_permission(ctx, key):
        return RouteDecision(outcome=RouteOutcome.ALLOWED, path=path)

    target = first_accessible_route(ctx)
    if target is None:
        logger.warning(
            "No accessible routes for member",
            extra=build_log_context(
                user_id=ctx.user_id, org_id=ctx.org_id, role=ctx.role, route=path
            ),
        )
        return RouteDecision(outcome=RouteOutcome.NO_ACCESSIBLE_ROUTES, path=None)
    return RouteDecision(outcome=RouteOutcome.REDIRECT, path=target)


def resolve_accessible_route(ctx: AccessContext, current_path: str) -> str | None:
    """Path the member should be on, or None when no route is reachable."""
    return get_route_decision(ctx, current_path).path
