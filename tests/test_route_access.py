"""Route access decisions: stay, redirect, or nothing reachable."""

import logging

from crm.core.permissions import ROUTE_TO_PERMISSION, SUPER_ADMIN_HOME
from crm.services.permission_service import (
    RouteOutcome,
    first_accessible_route,
    get_route_decision,
    resolve_accessible_route,
)


def test_granted_route_is_allowed(manager_ctx):
    decision = get_route_decision(manager_ctx, "/leads")

    assert decision.outcome == RouteOutcome.ALLOWED
    assert decision.path == "/leads"


def test_denied_route_redirects_to_first_route_in_table_order(manager_ctx):
    # manager lacks dashboard; daily_money_flow is next in the table
    decision = get_route_decision(manager_ctx, "/")

    assert decision.outcome == RouteOutcome.REDIRECT
    assert decision.path == "/daily-money-flow"


def test_closer_redirects_to_call_schedule(closer_ctx):
    assert resolve_accessible_route(closer_ctx, "/settings") == "/calls"


def test_redirect_target_is_deterministic(override_ctx):
    ctx = override_ctx("viewer", {"settings": True, "sales": True, "batch_icc": True})

    targets = {resolve_accessible_route(ctx, "/users") for _ in range(5)}

    assert targets == {"/batches"}


def test_redirect_ignores_current_path(override_ctx):
    ctx = override_ctx("viewer", {"products": True, "whatsapp": True})

    assert resolve_accessible_route(ctx, "/") == "/products"
    assert resolve_accessible_route(ctx, "/settings") == "/products"


def test_first_accessible_route_is_first_table_match(override_ctx):
    ctx = override_ctx("viewer", {"settings": True, "workshops": True})
    assert first_accessible_route(ctx) == "/workshops"


def test_no_grants_yields_no_route(viewer_ctx, caplog):
    with caplog.at_level(logging.WARNING, logger="crm.services.permission_service"):
        decision = get_route_decision(viewer_ctx, "/")

    assert decision.outcome == RouteOutcome.NO_ACCESSIBLE_ROUTES
    assert decision.path is None
    assert first_accessible_route(viewer_ctx) is None

    record = next(r for r in caplog.records if r.getMessage() == "No accessible routes for member")
    assert record.user_id == "user-viewer"
    assert record.org_id == "org-1"
    assert record.route == "/"


def test_unmapped_route_is_allowed(viewer_ctx):
    decision = get_route_decision(viewer_ctx, "/profile")

    assert decision.outcome == RouteOutcome.ALLOWED
    assert decision.path == "/profile"


def test_trailing_slash_is_normalized(manager_ctx):
    assert resolve_accessible_route(manager_ctx, "/leads/") == "/leads"
    assert get_route_decision(manager_ctx, "/users/").outcome == RouteOutcome.REDIRECT


def test_admin_is_allowed_everywhere(admin_ctx):
    for path in ROUTE_TO_PERMISSION:
        assert get_route_decision(admin_ctx, path).outcome == RouteOutcome.ALLOWED


def test_super_admin_home(super_admin_ctx):
    assert first_accessible_route(super_admin_ctx) == SUPER_ADMIN_HOME
    assert resolve_accessible_route(super_admin_ctx, "/users") == "/users"
