"""Module service - organization feature toggles."""

from collections.abc import Iterable
from typing import Any

from crm.schemas.access import AccessContext
from crm.schemas.modules import OrganizationModule


def get_enabled_module_slugs(org_modules: Iterable[OrganizationModule]) -> frozenset[str]:
    """Slugs of the modules an organization has switched on."""
    return frozenset(
        om.modules.slug for om in org_modules if om.is_enabled and om.modules is not None
    )


def get_module_config(org_modules: Iterable[OrganizationModule], slug: str) -> dict[str, Any] | None:
    """Stored configuration for a module, enabled or not."""
    for om in org_modules:
        if om.modules is not None and om.modules.slug == slug:
            return om.config or None
    return None


def is_module_enabled(ctx: AccessContext, slug: str) -> bool:
    """
    Check if a module is enabled for the member's organization.

    Super admins bypass module checks. While the organization's modules are
    still loading (enabled_modules is None), nothing is enabled.
    """
    if ctx.is_super_admin:
        return True
    if ctx.enabled_modules is None:
        return False
    return slug in ctx.enabled_modules
