"""Pydantic schemas for resolver and aggregator inputs/outputs."""

from crm.schemas.access import AccessContext, PermissionRow, StoredPermission
from crm.schemas.insights import AgingBracket, BatchInsights, UpcomingPaymentDay
from crm.schemas.modules import Module, OrganizationModule
from crm.schemas.navigation import CohortType, MenuEntry, MenuItem
from crm.schemas.roster import (
    Batch,
    BreakdownTotals,
    CloserBucket,
    CloserOption,
    EmiPayment,
    GlobalTotals,
    RosterFilters,
    RosterRecord,
    RosterToggle,
    RosterTotals,
    compute_due_amount,
)

__all__ = [
    "AccessContext",
    "PermissionRow",
    "StoredPermission",
    "AgingBracket",
    "BatchInsights",
    "UpcomingPaymentDay",
    "Module",
    "OrganizationModule",
    "CohortType",
    "MenuEntry",
    "MenuItem",
    "Batch",
    "BreakdownTotals",
    "CloserBucket",
    "CloserOption",
    "EmiPayment",
    "GlobalTotals",
    "RosterFilters",
    "RosterRecord",
    "RosterToggle",
    "RosterTotals",
    "compute_due_amount",
]
