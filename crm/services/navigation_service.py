"""Navigation service - dynamic, permission-filtered sidebar menu.

Pipeline: static definition -> merge dynamic cohort entries -> filter.
Module gating is evaluated before permission gating for every entry, and
the definition passed in is never modified.
"""

from collections.abc import Iterable

from crm.core.navigation import COHORT_SECTION_TITLE, CREATE_COHORT_PATH
from crm.core.permissions import PermissionKey
from crm.enums import ROLES_CAN_MANAGE_COHORTS
from crm.schemas.access import AccessContext
from crm.schemas.navigation import CohortType, MenuEntry, MenuItem
from crm.services.module_service import is_module_enabled
from crm.services.permission_service import has_permission

_COHORT_MANAGER_ROLES = {r.value for r in ROLES_CAN_MANAGE_COHORTS}


def can_create_cohorts(role: str | None, is_super_admin: bool = False) -> bool:
    """Check if a member may create cohort types from the menu."""
    return is_super_admin or role in _COHORT_MANAGER_ROLES


def build_cohort_items(
    cohort_types: Iterable[CohortType],
    role: str | None,
    is_super_admin: bool = False,
) -> list[MenuItem]:
    """
    Menu children for an organization's cohort types.

    Inactive types are skipped; the rest are ordered by display_order. When
    none remain, members who can create cohorts get a single "Create Cohort"
    entry instead.
    """
    active = [ct for ct in cohort_types if ct.is_active is not False]
    active.sort(key=lambda ct: (ct.display_order is None, ct.display_order or 0, ct.name))
    if active:
        return [
            MenuItem(
                title=ct.name,
                icon=ct.icon or "cohorts",
                path=ct.route,
                permission=PermissionKey.COHORT_BATCHES,
            )
            for ct in active
        ]
    if can_create_cohorts(role, is_super_admin):
        return [
            MenuItem(
                title="Create Cohort",
                icon="plus",
                path=CREATE_COHORT_PATH,
                permission=PermissionKey.COHORT_BATCHES,
            )
        ]
    return []


def merge_cohort_entries(
    definition: list[MenuEntry],
    cohort_types: Iterable[CohortType],
    role: str | None,
    is_super_admin: bool = False,
) -> list[MenuEntry]:
    """Append dynamic cohort children to the cohort section of a definition."""
    dynamic = build_cohort_items(cohort_types, role, is_super_admin)
    merged: list[MenuEntry] = []
    for entry in definition:
        if entry.is_parent and entry.title == COHORT_SECTION_TITLE:
            entry = entry.model_copy(update={"children": (*entry.children, *dynamic)})
        merged.append(entry)
    return merged


def _item_visible(ctx: AccessContext, module_slug: str | None, permission: PermissionKey | None) -> bool:
    if module_slug is not None and not is_module_enabled(ctx, module_slug):
        return False
    return permission is None or has_permission(ctx, permission)


def build_menu(definition: list[MenuEntry], ctx: AccessContext) -> list[MenuEntry]:
    """Filter a menu definition down to what the member can see."""
    visible: list[MenuEntry] = []
    for entry in definition:
        if entry.module_slug is not None and not is_module_enabled(ctx, entry.module_slug):
            continue

        if entry.is_parent:
            children = tuple(
                child
                for child in entry.children
                if _item_visible(ctx, child.module_slug, child.permission)
            )
            if not children:
                continue
            visible.append(entry.model_copy(update={"children": children}))
            continue

        if entry.permission is None or has_permission(ctx, entry.permission):
            visible.append(entry)
    return visible


def get_visible_paths(menu: list[MenuEntry]) -> list[str]:
    """Flatten a filtered menu into its navigable paths, in display order."""
    paths: list[str] = []
    for entry in menu:
        if entry.path is not None:
            paths.append(entry.path)
        paths.extend(child.path for child in entry.children)
    return paths
