"""Roster schemas - enrolled students / converted call appointments."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from crm.enums import ALL_STATUSES, PaymentType
from crm.utils.timezone import parse_date_only


def compute_due_amount(offer_amount: float | None, cash_received: float | None) -> float:
    """Outstanding balance for a record: never negative."""
    return max(0.0, (offer_amount or 0) - (cash_received or 0))


# =============================================================================
# Input rows
# =============================================================================

class RosterRecord(BaseModel):
    """
    One student's financial and status state within a batch.

    Rows come straight from the backend, so nullable text and money columns
    are normalized here: missing money is 0, missing name/email is "".
    A null due_amount is derived from offer and cash received.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    contact_name: str = ""
    email: str = ""
    phone: str | None = None
    status: str = ""
    offer_amount: float = 0
    cash_received: float = 0
    due_amount: float = 0
    pay_after_earning: bool = False
    next_follow_up_date: date | None = None
    conversion_date: datetime | date | None = None
    scheduled_date: datetime | date | None = None
    closer_id: str | None = None
    closer_name: str | None = None
    classes_access: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_due(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("due_amount") is None:
            data = dict(data)
            data["due_amount"] = compute_due_amount(
                data.get("offer_amount"), data.get("cash_received")
            )
        return data

    @field_validator("offer_amount", "cash_received", mode="before")
    @classmethod
    def _money_or_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("contact_name", "email", "status", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("pay_after_earning", mode="before")
    @classmethod
    def _flag_or_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("conversion_date", "scheduled_date", mode="before")
    @classmethod
    def _keep_calendar_days(cls, value: Any) -> Any:
        # Date-only columns are calendar days, not UTC midnights
        return parse_date_only(value)

    @property
    def record_date(self) -> datetime | date | None:
        """Conversion date, falling back to the scheduled call date."""
        return self.conversion_date or self.scheduled_date


class EmiPayment(BaseModel):
    """Installment recorded against a record."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    appointment_id: str
    amount: float
    payment_date: datetime | date

    @field_validator("payment_date", mode="before")
    @classmethod
    def _keep_calendar_days(cls, value: Any) -> Any:
        return parse_date_only(value)


class Batch(BaseModel):
    """A cohort batch (named group of students)."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    status: str | None = None
    start_date: date | None = None


# =============================================================================
# Filters
# =============================================================================

class RosterToggle(str, Enum):
    """Status cards on the roster screen. At most one is active."""

    REFUNDED = "refunded"
    DISCONTINUED = "discontinued"
    FULL_PAYMENT = "full_payment"
    REMAINING_DUE = "remaining_due"
    TODAY_FOLLOW_UP = "today_follow_up"
    PAY_AFTER_EARNING = "pay_after_earning"


class RosterFilters(BaseModel):
    """
    UI filter state for a roster.

    Toggles are stored as a single `active_toggle` so activating one card
    replaces whichever was active before. Use `with_toggle` to change it.
    """
    model_config = ConfigDict(frozen=True)

    search_query: str = ""
    status_filter: str = ALL_STATUSES
    date_from: date | None = None
    date_to: date | None = None
    active_toggle: RosterToggle | None = None
    closer_ids: frozenset[str] = Field(default_factory=frozenset)
    classes: frozenset[int] = Field(default_factory=frozenset)
    payment_type: PaymentType = PaymentType.ALL

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _day_granularity(cls, value: Any) -> Any:
        """Date pickers may send a datetime; only its calendar day counts."""
        if isinstance(value, str) and len(value.strip()) > 10:
            try:
                value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                return value
        if isinstance(value, datetime):
            return value.date()
        return value

    def with_toggle(self, toggle: RosterToggle, enabled: bool = True) -> "RosterFilters":
        """Activate `toggle` (clearing any other) or deactivate it."""
        if enabled:
            return self.model_copy(update={"active_toggle": toggle})
        if self.active_toggle == toggle:
            return self.model_copy(update={"active_toggle": None})
        return self

    def is_active(self, toggle: RosterToggle) -> bool:
        return self.active_toggle == toggle

    def cleared(self) -> "RosterFilters":
        return RosterFilters()


# =============================================================================
# Aggregates
# =============================================================================

class CloserBucket(BaseModel):
    """Financial totals for one closer (or the manual bucket)."""
    closer_id: str
    closer_name: str
    offered: float = 0
    received: float = 0
    due: float = 0
    emi_collected: float = 0
    count: int = 0


class BreakdownTotals(BaseModel):
    """Sum over a list of closer buckets."""
    offered: float = 0
    received: float = 0
    due: float = 0
    emi_collected: float = 0
    count: int = 0


class GlobalTotals(BaseModel):
    """Summary cards computed over the unfiltered roster."""
    offered: float = 0
    received: float = 0
    due: float = 0
    count: int = 0
    full_payment_count: int = 0
    due_payment_count: int = 0
    refunded_count: int = 0
    refunded_received: float = 0
    discontinued_count: int = 0
    discontinued_received: float = 0
    emi_collected: float = 0
    pae_amount: float = 0
    pae_count: int = 0
    today_follow_up_count: int = 0


class RosterTotals(BaseModel):
    """Everything the roster screen renders besides the table itself."""
    closer_breakdown: list[CloserBucket] = Field(default_factory=list)
    totals: BreakdownTotals = Field(default_factory=BreakdownTotals)
    refunded_breakdown: list[CloserBucket] = Field(default_factory=list)
    refunded_totals: BreakdownTotals = Field(default_factory=BreakdownTotals)
    discontinued_breakdown: list[CloserBucket] = Field(default_factory=list)
    discontinued_totals: BreakdownTotals = Field(default_factory=BreakdownTotals)
    all_students_totals: GlobalTotals = Field(default_factory=GlobalTotals)


class CloserOption(BaseModel):
    """Closer choice for the roster filter sheet."""
    id: str
    name: str
