"""Batch insights schemas."""

from datetime import date

from pydantic import BaseModel, Field

from crm.schemas.roster import RosterRecord


class UpcomingPaymentDay(BaseModel):
    """Students whose follow-up falls on one calendar day."""
    day: date
    students: list[RosterRecord] = Field(default_factory=list)
    total_amount: float = 0
    is_today: bool = False


class AgingBracket(BaseModel):
    """Receivables bucketed by days since conversion."""
    bracket: str
    students: list[RosterRecord] = Field(default_factory=list)
    amount: float = 0
    percentage: float = 0


class BatchInsights(BaseModel):
    """Collections view over a batch's outstanding (non-PAE) balances."""
    upcoming_payments: list[UpcomingPaymentDay] = Field(default_factory=list)
    this_week_total: float = 0
    this_week_student_count: int = 0
    students_without_follow_up: list[RosterRecord] = Field(default_factory=list)
    students_without_follow_up_amount: float = 0
    overdue_follow_ups: list[RosterRecord] = Field(default_factory=list)
    overdue_follow_ups_amount: float = 0
    receivables_aging: list[AgingBracket] = Field(default_factory=list)
    total_receivables: float = 0
    collection_rate: float = 0
    this_month_collected: float = 0
    last_month_collected: float = 0
