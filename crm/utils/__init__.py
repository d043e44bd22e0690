"""Utility modules."""

from crm.utils.timezone import org_today, parse_date_only, resolve_timezone, to_org_date

__all__ = [
    "org_today",
    "parse_date_only",
    "resolve_timezone",
    "to_org_date",
]
