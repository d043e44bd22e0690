"""Role permission helper sets."""

from crm.enums.auth import Role

# Roles that can create cohort types from the navigation menu
ROLES_CAN_MANAGE_COHORTS = {Role.ADMIN}

# Roles that can edit member permission overrides
ROLES_CAN_EDIT_PERMISSIONS = {Role.ADMIN}

# Roles that bypass the permission table inside their organization
ROLES_WITH_ALL_PERMISSIONS = {Role.ADMIN}
