"""Enum definitions for application constants."""

from crm.enums.appointments import (
    ALL_STATUSES,
    CONVERTED_FILTER,
    CONVERTED_PREFIX,
    INACTIVE_STATUSES,
    CallStatus,
    PaymentType,
)
from crm.enums.auth import Role
from crm.enums.permissions import (
    ROLES_CAN_EDIT_PERMISSIONS,
    ROLES_CAN_MANAGE_COHORTS,
    ROLES_WITH_ALL_PERMISSIONS,
)

__all__ = [
    "ALL_STATUSES",
    "CONVERTED_FILTER",
    "CONVERTED_PREFIX",
    "INACTIVE_STATUSES",
    "CallStatus",
    "PaymentType",
    "Role",
    "ROLES_CAN_EDIT_PERMISSIONS",
    "ROLES_CAN_MANAGE_COHORTS",
    "ROLES_WITH_ALL_PERMISSIONS",
]
