"""Organization module schemas."""

from typing import Any

from pydantic import BaseModel, Field


class Module(BaseModel):
    """Platform-wide module reference row."""
    id: str
    slug: str
    name: str
    description: str | None = None
    icon: str | None = None
    is_premium: bool = False
    display_order: int = 0


class OrganizationModule(BaseModel):
    """Per-organization module toggle, joined with its module row."""
    id: str
    organization_id: str
    module_id: str
    is_enabled: bool | None = False
    config: dict[str, Any] | None = Field(default=None)
    modules: Module | None = None
