"""Access-control Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AccessContext(BaseModel):
    """
    Everything the access resolver needs about the current member.

    Built once per organization switch and passed explicitly to every
    resolver call. `permissions` is the resolved key -> enabled map (see
    permission_service.resolve_permission_map). `enabled_modules` is None
    while the organization's modules are still loading.
    """
    model_config = ConfigDict(frozen=True)

    org_id: str | None = None
    user_id: str | None = None
    role: str | None = None
    is_super_admin: bool = False
    permissions: dict[str, bool] = Field(default_factory=dict)
    enabled_modules: frozenset[str] | None = None


class StoredPermission(BaseModel):
    """One persisted user_permissions row."""
    permission_key: str
    is_enabled: bool = False


class PermissionRow(BaseModel):
    """user_permissions row payload written by the member permission editor."""
    organization_id: str
    user_id: str
    permission_key: str
    is_enabled: bool
