"""
Sidebar menu tests.

Tests cover:
- Module gate evaluated before the permission gate
- Parents pruned when no child survives
- Dynamic cohort entries (ordering, inactive types, create fallback)
- Icon resolution
"""

from crm.core.navigation import (
    COHORT_SECTION_TITLE,
    CREATE_COHORT_PATH,
    DEFAULT_ICON,
    MODULE_COHORTS,
    MODULE_ONE_TO_ONE,
    get_default_menu,
    resolve_icon,
)
from crm.core.permissions import ROUTE_TO_PERMISSION, PermissionKey
from crm.schemas.navigation import CohortType, MenuEntry, MenuItem
from crm.services.navigation_service import (
    build_cohort_items,
    build_menu,
    can_create_cohorts,
    get_visible_paths,
    merge_cohort_entries,
)
from crm.services.permission_service import build_access_context


def _titles(menu):
    return [entry.title for entry in menu]


def _cohort_type(name, order=None, active=True, icon=None):
    slug = name.lower().replace(" ", "-")
    return CohortType(
        id=f"ct-{slug}",
        name=name,
        slug=slug,
        route=f"/cohort/{slug}",
        icon=icon,
        display_order=order,
        is_active=active,
    )


# =============================================================================
# Static definition
# =============================================================================


def test_default_menu_paths_are_routed():
    paths = get_visible_paths(get_default_menu())
    assert paths
    for path in paths:
        assert path in ROUTE_TO_PERMISSION


def test_default_menu_icons_resolve():
    for entry in get_default_menu():
        assert resolve_icon(entry.icon) != DEFAULT_ICON
        for child in entry.children:
            assert resolve_icon(child.icon) != DEFAULT_ICON


def test_resolve_icon_fallbacks():
    assert resolve_icon("dashboard") == "LayoutDashboard"
    assert resolve_icon("GraduationCap") == "GraduationCap"
    assert resolve_icon("no-such-icon") == DEFAULT_ICON
    assert resolve_icon(None) == DEFAULT_ICON


# =============================================================================
# Filtering
# =============================================================================


def test_admin_sees_full_menu(admin_ctx):
    menu = build_menu(get_default_menu(), admin_ctx)
    assert _titles(menu) == _titles(get_default_menu())


def test_viewer_sees_nothing(viewer_ctx):
    assert build_menu(get_default_menu(), viewer_ctx) == []


def test_manager_menu(manager_ctx):
    menu = build_menu(get_default_menu(), manager_ctx)

    assert _titles(menu) == [
        "Daily Money Flow",
        "Customers",
        "Sales Closers",
        COHORT_SECTION_TITLE,
        "All Workshops",
    ]


def test_disabled_module_hides_whole_section(override_ctx):
    ctx = override_ctx(
        "viewer",
        {"batch_icc": True, "batch_futures": True, "dashboard": True},
        modules=frozenset({MODULE_ONE_TO_ONE}),
    )

    menu = build_menu(get_default_menu(), ctx)

    assert COHORT_SECTION_TITLE not in _titles(menu)
    assert _titles(menu) == ["Dashboard"]


def test_module_gate_applies_even_with_admin_role():
    ctx = build_access_context(role="admin", org_id="org-1", enabled_modules=frozenset())

    titles = _titles(build_menu(get_default_menu(), ctx))

    assert "1:1 Call Schedule" not in titles
    assert COHORT_SECTION_TITLE not in titles
    assert "WhatsApp" not in titles
    assert "Dashboard" in titles


def test_modules_still_loading_hide_gated_entries():
    ctx = build_access_context(role="admin", org_id="org-1", enabled_modules=None)

    titles = _titles(build_menu(get_default_menu(), ctx))

    assert "All Workshops" not in titles
    assert "Settings" in titles


def test_super_admin_bypasses_modules(super_admin_ctx):
    menu = build_menu(get_default_menu(), super_admin_ctx)
    assert _titles(menu) == _titles(get_default_menu())


def test_parent_children_filtered_by_permission(override_ctx):
    ctx = override_ctx("viewer", {"batch_futures": True})

    menu = build_menu(get_default_menu(), ctx)

    assert len(menu) == 1
    assert menu[0].title == COHORT_SECTION_TITLE
    assert [c.path for c in menu[0].children] == ["/futures-mentorship"]


def test_parent_pruned_when_no_child_passes(override_ctx):
    ctx = override_ctx("viewer", {"sales": True})

    menu = build_menu(get_default_menu(), ctx)

    assert _titles(menu) == ["Sales"]


def test_child_module_gate():
    definition = [
        MenuEntry(
            title="Section",
            icon="cohorts",
            children=(
                MenuItem(title="Open", icon="plus", path="/open"),
                MenuItem(title="Gated", icon="plus", path="/gated", module_slug="workshops"),
            ),
        )
    ]
    ctx = build_access_context(role="viewer", enabled_modules=frozenset())

    menu = build_menu(definition, ctx)

    assert [c.title for c in menu[0].children] == ["Open"]


def test_build_menu_does_not_mutate_definition(manager_ctx):
    definition = get_default_menu()
    before = [entry.model_copy() for entry in definition]

    build_menu(definition, manager_ctx)

    assert definition == before


# =============================================================================
# Dynamic cohorts
# =============================================================================


def test_cohort_items_sorted_and_inactive_skipped():
    items = build_cohort_items(
        [
            _cohort_type("Zeta", order=2),
            _cohort_type("Retired", order=0, active=False),
            _cohort_type("Alpha", order=1, icon="GraduationCap"),
            _cohort_type("Unordered"),
        ],
        role="manager",
    )

    assert [i.title for i in items] == ["Alpha", "Zeta", "Unordered"]
    assert items[0].icon == "GraduationCap"
    assert items[1].icon == "cohorts"
    assert items[0].path == "/cohort/alpha"


def test_create_cohort_fallback_for_admin():
    items = build_cohort_items([], role="admin")

    assert len(items) == 1
    assert items[0].title == "Create Cohort"
    assert items[0].path == CREATE_COHORT_PATH
    assert items[0].permission == PermissionKey.COHORT_BATCHES


def test_no_fallback_for_other_roles():
    assert build_cohort_items([], role="manager") == []
    assert build_cohort_items([_cohort_type("Old", active=False)], role="sales_rep") == []


def test_can_create_cohorts():
    assert can_create_cohorts("admin") is True
    assert can_create_cohorts("viewer", is_super_admin=True) is True
    assert can_create_cohorts("manager") is False
    assert can_create_cohorts(None) is False


def test_merge_appends_to_cohort_section(manager_ctx):
    definition = get_default_menu()

    merged = merge_cohort_entries(definition, [_cohort_type("Options Club", order=1)], "manager")
    menu = build_menu(merged, manager_ctx)

    section = next(e for e in menu if e.title == COHORT_SECTION_TITLE)
    assert [c.title for c in section.children][-1] == "Options Club"
    # input definition untouched
    source_entry = next(e for e in definition if e.title == COHORT_SECTION_TITLE)
    assert len(source_entry.children) == 3


def test_dynamic_cohorts_need_cohort_permission(override_ctx):
    ctx = override_ctx("viewer", {"batch_icc": True})
    merged = merge_cohort_entries(get_default_menu(), [_cohort_type("Options Club")], "viewer")

    section = build_menu(merged, ctx)[0]

    assert [c.path for c in section.children] == ["/batches"]


def test_create_cohort_entry_visible_to_admin(admin_ctx):
    merged = merge_cohort_entries(get_default_menu(), [], "admin")

    paths = get_visible_paths(build_menu(merged, admin_ctx))

    assert CREATE_COHORT_PATH in paths


def test_cohort_section_gated_by_module_slug():
    section = next(e for e in get_default_menu() if e.title == COHORT_SECTION_TITLE)
    assert section.is_parent
    assert section.module_slug == MODULE_COHORTS


def test_create_cohort_entry_gated_by_cohort_permission(override_ctx):
    merged = merge_cohort_entries(get_default_menu(), [], "admin")
    ctx = override_ctx("viewer", {"batch_icc": True})

    paths = get_visible_paths(build_menu(merged, ctx))

    assert paths == ["/batches"]
