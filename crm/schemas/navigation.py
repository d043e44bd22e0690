"""Navigation menu schemas."""

from pydantic import BaseModel, ConfigDict, Field

from crm.core.permissions import PermissionKey


class MenuItem(BaseModel):
    """A navigable leaf (standalone entry or child of a parent)."""
    model_config = ConfigDict(frozen=True)

    title: str
    icon: str
    path: str
    permission: PermissionKey | None = None
    module_slug: str | None = None


class MenuEntry(BaseModel):
    """Top-level menu node: a leaf when `path` is set, otherwise a parent."""
    model_config = ConfigDict(frozen=True)

    title: str
    icon: str
    path: str | None = None
    permission: PermissionKey | None = None
    module_slug: str | None = None
    children: tuple[MenuItem, ...] = Field(default_factory=tuple)

    @property
    def is_parent(self) -> bool:
        return self.path is None


class CohortType(BaseModel):
    """Organization-defined cohort program rendered as a menu child."""
    id: str
    name: str
    slug: str
    route: str
    icon: str | None = None
    display_order: int | None = None
    is_active: bool | None = True
