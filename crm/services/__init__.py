"""Service layer modules."""

from crm.services.insights_service import compute_batch_insights
from crm.services.module_service import (
    get_enabled_module_slugs,
    get_module_config,
    is_module_enabled,
)
from crm.services.navigation_service import (
    build_cohort_items,
    build_menu,
    merge_cohort_entries,
)
from crm.services.permission_service import (
    ExplicitOverride,
    RoleDefault,
    RouteDecision,
    RouteOutcome,
    build_access_context,
    build_permission_rows,
    build_permission_source,
    get_route_decision,
    has_permission,
    resolve_accessible_route,
    resolve_permission_map,
)
from crm.services.roster_service import (
    compute_closer_breakdown,
    compute_global_totals,
    compute_totals,
    filter_records,
)

__all__ = [
    "compute_batch_insights",
    "get_enabled_module_slugs",
    "get_module_config",
    "is_module_enabled",
    "build_cohort_items",
    "build_menu",
    "merge_cohort_entries",
    "ExplicitOverride",
    "RoleDefault",
    "RouteDecision",
    "RouteOutcome",
    "build_access_context",
    "build_permission_rows",
    "build_permission_source",
    "get_route_decision",
    "has_permission",
    "resolve_accessible_route",
    "resolve_permission_map",
    "compute_closer_breakdown",
    "compute_global_totals",
    "compute_totals",
    "filter_records",
]
