"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    Organization member roles.

    - ADMIN: Business owner (every feature area, member permissions, modules)
    - MANAGER: Operations (money flow, customers, cohort batches, workshops)
    - SALES_REP: Closer (call schedule, own conversions)
    - VIEWER: Read-only seat, nothing granted until an admin opts in

    Super admin is a platform flag, not an organization role.
    """

    ADMIN = "admin"
    MANAGER = "manager"
    SALES_REP = "sales_rep"
    VIEWER = "viewer"

    @classmethod
    def has_value(cls, value: str | None) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_
