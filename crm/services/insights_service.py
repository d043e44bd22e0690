"""Batch insights service - collections view over outstanding balances."""

from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from crm.core.config import settings
from crm.schemas.insights import AgingBracket, BatchInsights, UpcomingPaymentDay
from crm.schemas.roster import EmiPayment, RosterRecord
from crm.services.roster_service import has_remaining_due, is_active
from crm.utils.timezone import org_today, to_org_date


def _due_sum(records: Iterable[RosterRecord]) -> float:
    return sum(r.due_amount for r in records)


def _age_in_days(record: RosterRecord, today: date, org_timezone: str | None) -> int:
    converted_on = to_org_date(record.record_date, org_timezone)
    if converted_on is None:
        return 0
    return (today - converted_on).days


def _month_start(day: date) -> date:
    return day.replace(day=1)


def build_aging_brackets(
    records: Sequence[RosterRecord],
    today: date,
    org_timezone: str | None = None,
) -> list[AgingBracket]:
    """Split receivables into 0-30 / 31-60 / 60+ day brackets."""
    width = settings.AGING_BRACKET_DAYS
    total = _due_sum(records)
    ranges = [
        (f"0-{width} days", lambda age: 0 <= age <= width),
        (f"{width + 1}-{2 * width} days", lambda age: width < age <= 2 * width),
        (f"{2 * width}+ days", lambda age: age > 2 * width),
    ]
    brackets = []
    for label, contains in ranges:
        members = [r for r in records if contains(_age_in_days(r, today, org_timezone))]
        amount = _due_sum(members)
        brackets.append(
            AgingBracket(
                bracket=label,
                students=members,
                amount=amount,
                percentage=(amount / total) * 100 if total > 0 else 0,
            )
        )
    return brackets


def compute_batch_insights(
    records: Sequence[RosterRecord],
    *,
    today: date | None = None,
    org_timezone: str | None = None,
    emi_payments: Iterable[EmiPayment] | None = None,
) -> BatchInsights:
    """
    Follow-up calendar, receivables aging and collection rates for a batch.

    Only active, non-PAE records with a balance count as receivables. The
    collection rate covers every active record.
    """
    if not records:
        return BatchInsights()

    today = today or org_today(org_timezone)
    receivables = [r for r in records if has_remaining_due(r)]

    upcoming: list[UpcomingPaymentDay] = []
    for offset in range(settings.UPCOMING_PAYMENTS_DAYS):
        day = today + timedelta(days=offset)
        due_that_day = [r for r in receivables if r.next_follow_up_date == day]
        upcoming.append(
            UpcomingPaymentDay(
                day=day,
                students=due_that_day,
                total_amount=_due_sum(due_that_day),
                is_today=offset == 0,
            )
        )
    this_week = upcoming[: settings.THIS_WEEK_DAYS]

    without_follow_up = [r for r in receivables if r.next_follow_up_date is None]
    overdue = [
        r for r in receivables
        if r.next_follow_up_date is not None and r.next_follow_up_date < today
    ]

    active = [r for r in records if is_active(r)]
    total_offered = sum(r.offer_amount for r in active)
    total_received = sum(r.cash_received for r in active)

    this_month_start = _month_start(today)
    last_month_start = _month_start(this_month_start - timedelta(days=1))
    this_month_collected = 0.0
    last_month_collected = 0.0
    for emi in emi_payments or []:
        paid_on = to_org_date(emi.payment_date, org_timezone)
        if paid_on is None:
            continue
        if paid_on >= this_month_start:
            this_month_collected += emi.amount
        elif last_month_start <= paid_on < this_month_start:
            last_month_collected += emi.amount

    return BatchInsights(
        upcoming_payments=upcoming,
        this_week_total=sum(d.total_amount for d in this_week),
        this_week_student_count=sum(len(d.students) for d in this_week),
        students_without_follow_up=without_follow_up,
        students_without_follow_up_amount=_due_sum(without_follow_up),
        overdue_follow_ups=overdue,
        overdue_follow_ups_amount=_due_sum(overdue),
        receivables_aging=build_aging_brackets(receivables, today, org_timezone),
        total_receivables=_due_sum(receivables),
        collection_rate=(total_received / total_offered) * 100 if total_offered > 0 else 0,
        this_month_collected=this_month_collected,
        last_month_collected=last_month_collected,
    )
