"""Organization-calendar date helpers.

Roster dates are compared as calendar days in the organization's timezone,
not the server's, so "today" and conversion dates line up with what the
organization sees on its wall clock.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from crm.core.config import settings

logger = logging.getLogger(__name__)


def resolve_timezone(org_timezone: str | None) -> ZoneInfo:
    """Org timezone, falling back to the configured default when unknown."""
    tz_name = org_timezone or settings.DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "Unknown timezone '%s', defaulting to %s", tz_name, settings.DEFAULT_TIMEZONE
        )
        return ZoneInfo(settings.DEFAULT_TIMEZONE)


def org_today(org_timezone: str | None = None, now: datetime | None = None) -> date:
    """Today's calendar date in the organization's timezone."""
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(resolve_timezone(org_timezone)).date()


def parse_date_only(value: Any) -> Any:
    """Turn a plain YYYY-MM-DD string into a date; other values pass through."""
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return value
    return value


def to_org_date(value: datetime | date | str | None, org_timezone: str | None = None) -> date | None:
    """
    Normalize a stored timestamp to an org-local calendar day.

    Plain dates pass through unchanged. Naive datetimes are treated as UTC,
    matching how the backend serializes timestamps. Unparseable strings
    yield None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if len(raw) == 10:
            try:
                return date.fromisoformat(raw)
            except ValueError:
                return None
        try:
            value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable date value: %s", raw)
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(resolve_timezone(org_timezone)).date()
    return value
