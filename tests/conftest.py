"""
Test configuration and fixtures.

Provides:
- A pinned "today" so follow-up and aging checks do not depend on the clock
- A record factory with sensible money defaults
- Access contexts for each role
"""
from datetime import date
from typing import Any, Callable

import pytest

from crm.schemas.roster import RosterRecord
from crm.services.permission_service import ExplicitOverride, build_access_context


TODAY = date(2026, 10, 19)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_record() -> Callable[..., RosterRecord]:
    """Build a RosterRecord; unspecified fields get roster-like defaults."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> RosterRecord:
        counter["n"] += 1
        n = counter["n"]
        data: dict[str, Any] = {
            "id": f"rec-{n}",
            "contact_name": f"Student {n}",
            "email": f"student{n}@example.com",
            "phone": None,
            "status": "active",
            "offer_amount": 1000,
            "cash_received": 1000,
            "due_amount": 0,
            "pay_after_earning": False,
        }
        data.update(overrides)
        return RosterRecord.model_validate(data)

    return _make


# =============================================================================
# Access Contexts
# =============================================================================

ALL_MODULES = frozenset({"cohort-management", "workshops", "one-to-one-funnel", "whatsapp"})


@pytest.fixture
def admin_ctx():
    return build_access_context(
        role="admin", org_id="org-1", user_id="user-admin", enabled_modules=ALL_MODULES
    )


@pytest.fixture
def manager_ctx():
    return build_access_context(
        role="manager", org_id="org-1", user_id="user-manager", enabled_modules=ALL_MODULES
    )


@pytest.fixture
def closer_ctx():
    return build_access_context(
        role="sales_rep", org_id="org-1", user_id="user-closer", enabled_modules=ALL_MODULES
    )


@pytest.fixture
def viewer_ctx():
    return build_access_context(
        role="viewer", org_id="org-1", user_id="user-viewer", enabled_modules=ALL_MODULES
    )


@pytest.fixture
def super_admin_ctx():
    return build_access_context(
        role=None, is_super_admin=True, user_id="user-super", enabled_modules=frozenset()
    )


@pytest.fixture
def override_ctx() -> Callable[..., Any]:
    """Context for a member with explicit permission rows."""

    def _make(role: str, grants: dict[str, bool], modules=ALL_MODULES):
        return build_access_context(
            role=role,
            source=ExplicitOverride(grants=grants),
            org_id="org-1",
            user_id=f"user-{role}",
            enabled_modules=modules,
        )

    return _make
