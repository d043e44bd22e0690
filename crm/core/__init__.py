"""Core configuration, permission registry and static definitions."""
