"""Permission registry with metadata for UI and validation.

Every sidebar feature area is gated by exactly one permission key. The same
keys drive the navigation menu, the route table and the member permission
editor, so a key added here is immediately available to all three.

Precedence: super admin > admin role > explicit override > role default
Missing permission: deny
"""

from dataclasses import dataclass
from enum import Enum


class PermissionKey(str, Enum):
    """Feature-area permission keys."""

    DASHBOARD = "dashboard"
    DAILY_MONEY_FLOW = "daily_money_flow"
    CUSTOMERS = "customers"
    CUSTOMER_INSIGHTS = "customer_insights"
    CALL_SCHEDULE = "call_schedule"
    SALES_CLOSERS = "sales_closers"
    BATCH_ICC = "batch_icc"
    BATCH_FUTURES = "batch_futures"
    BATCH_HIGH_FUTURE = "batch_high_future"
    COHORT_BATCHES = "cohort_batches"
    WORKSHOPS = "workshops"
    SALES = "sales"
    FUNNELS = "funnels"
    PRODUCTS = "products"
    USERS = "users"
    WHATSAPP = "whatsapp"
    SETTINGS = "settings"


class PermissionGroup(str, Enum):
    """Permission groups for the member permission editor."""

    MAIN_MENU = "Main Menu"
    COHORT_BATCHES = "Cohort Batches"
    OTHER = "Other"


@dataclass(frozen=True)
class PermissionDef:
    """Permission definition with metadata."""

    key: PermissionKey
    label: str
    group: PermissionGroup


P = PermissionKey
G = PermissionGroup

# =============================================================================
# Permission Registry
# =============================================================================

PERMISSION_REGISTRY: dict[str, PermissionDef] = {
    d.key.value: d
    for d in (
        # Main Menu
        PermissionDef(P.DASHBOARD, "Dashboard", G.MAIN_MENU),
        PermissionDef(P.DAILY_MONEY_FLOW, "Daily Money Flow", G.MAIN_MENU),
        PermissionDef(P.CUSTOMERS, "Customers", G.MAIN_MENU),
        PermissionDef(P.CUSTOMER_INSIGHTS, "Customer Insights", G.MAIN_MENU),
        PermissionDef(P.CALL_SCHEDULE, "1:1 Call Schedule", G.MAIN_MENU),
        PermissionDef(P.SALES_CLOSERS, "Sales Closers", G.MAIN_MENU),
        # Cohort Batches
        PermissionDef(P.BATCH_ICC, "Insider Crypto Club", G.COHORT_BATCHES),
        PermissionDef(P.BATCH_FUTURES, "Future Mentorship", G.COHORT_BATCHES),
        PermissionDef(P.BATCH_HIGH_FUTURE, "High Future", G.COHORT_BATCHES),
        PermissionDef(P.COHORT_BATCHES, "Cohorts", G.COHORT_BATCHES),
        # Other
        PermissionDef(P.WORKSHOPS, "All Workshops", G.OTHER),
        PermissionDef(P.SALES, "Sales", G.OTHER),
        PermissionDef(P.FUNNELS, "Active Funnels", G.OTHER),
        PermissionDef(P.PRODUCTS, "Products", G.OTHER),
        PermissionDef(P.USERS, "Users", G.OTHER),
        PermissionDef(P.WHATSAPP, "WhatsApp", G.OTHER),
        PermissionDef(P.SETTINGS, "Settings", G.OTHER),
    )
}


# =============================================================================
# Default Role Permissions
# =============================================================================

# Which permissions each role has when no explicit override exists
ROLE_DEFAULTS: dict[str, frozenset[str]] = {
    "admin": frozenset(PERMISSION_REGISTRY.keys()),
    "manager": frozenset({
        P.DAILY_MONEY_FLOW.value,
        P.CUSTOMERS.value,
        P.SALES_CLOSERS.value,
        P.BATCH_ICC.value,
        P.BATCH_FUTURES.value,
        P.BATCH_HIGH_FUTURE.value,
        P.COHORT_BATCHES.value,
        P.WORKSHOPS.value,
    }),
    "sales_rep": frozenset({
        P.CALL_SCHEDULE.value,
        P.SALES_CLOSERS.value,
        P.BATCH_ICC.value,
    }),
    "viewer": frozenset(),
}


# =============================================================================
# Route Table
# =============================================================================

# Route -> gating permission. Insertion order is the redirect search order.
ROUTE_TO_PERMISSION: dict[str, PermissionKey] = {
    "/": P.DASHBOARD,
    "/daily-money-flow": P.DAILY_MONEY_FLOW,
    "/leads": P.CUSTOMERS,
    "/onboarding": P.CUSTOMER_INSIGHTS,
    "/calls": P.CALL_SCHEDULE,
    "/sales-closers": P.SALES_CLOSERS,
    "/batches": P.BATCH_ICC,
    "/futures-mentorship": P.BATCH_FUTURES,
    "/high-future": P.BATCH_HIGH_FUTURE,
    "/cohorts": P.COHORT_BATCHES,
    "/workshops": P.WORKSHOPS,
    "/sales": P.SALES,
    "/funnels": P.FUNNELS,
    "/products": P.PRODUCTS,
    "/users": P.USERS,
    "/whatsapp": P.WHATSAPP,
    "/settings": P.SETTINGS,
}

SUPER_ADMIN_HOME = "/super-admin"


# =============================================================================
# Helper Functions
# =============================================================================

def get_permission(key: str) -> PermissionDef | None:
    """Get permission by key."""
    return PERMISSION_REGISTRY.get(key)


def is_valid_permission(key: str) -> bool:
    """Check if permission key exists."""
    return key in PERMISSION_REGISTRY


def get_role_default_permissions(role: str | None) -> frozenset[str]:
    """Get default permissions for a role (unknown roles get none)."""
    return ROLE_DEFAULTS.get(role or "", frozenset())


def get_default_permission_map(role: str | None) -> dict[str, bool]:
    """Every known key mapped to whether the role grants it by default."""
    enabled = get_role_default_permissions(role)
    return {key: key in enabled for key in PERMISSION_REGISTRY}


def get_permission_for_route(path: str) -> PermissionKey | None:
    """Get the permission gating a route, or None for ungated routes."""
    return ROUTE_TO_PERMISSION.get(path)


def get_permissions_by_group() -> dict[str, list[PermissionDef]]:
    """Group permissions by editor section, in registry order."""
    result: dict[str, list[PermissionDef]] = {}
    for perm in PERMISSION_REGISTRY.values():
        result.setdefault(perm.group.value, []).append(perm)
    return result
