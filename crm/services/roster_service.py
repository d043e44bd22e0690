"""Roster service - filtering and financial totals for batch students.

Pure functions over already-fetched rows: nothing here queries, sorts or
mutates. Filtered lists keep the caller's order (usually conversion date
descending).

Status buckets:
- active: anything except refunded / discontinued
- PAE (pay after earning): balance deferred until the student earns, kept
  out of due totals so near-term receivables are not overstated
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from crm.enums import (
    ALL_STATUSES,
    CONVERTED_FILTER,
    CONVERTED_PREFIX,
    INACTIVE_STATUSES,
    CallStatus,
    PaymentType,
)
from crm.schemas.roster import (
    Batch,
    BreakdownTotals,
    CloserBucket,
    CloserOption,
    EmiPayment,
    GlobalTotals,
    RosterFilters,
    RosterRecord,
    RosterToggle,
    RosterTotals,
)
from crm.utils.timezone import org_today, to_org_date

MANUAL_CLOSER_ID = "manual"
MANUAL_CLOSER_LABEL = "Added Manually"


# =============================================================================
# Predicates
# =============================================================================

def is_active(record: RosterRecord) -> bool:
    return record.status not in INACTIVE_STATUSES


def is_full_payment(record: RosterRecord) -> bool:
    return record.due_amount == 0 and record.cash_received > 0 and is_active(record)


def has_remaining_due(record: RosterRecord) -> bool:
    """Outstanding balance expected in the near term (non-PAE)."""
    return record.due_amount > 0 and not record.pay_after_earning and is_active(record)


def is_pae_with_due(record: RosterRecord) -> bool:
    return record.due_amount > 0 and record.pay_after_earning and is_active(record)


def is_follow_up_today(record: RosterRecord, today: date) -> bool:
    return record.next_follow_up_date is not None and record.next_follow_up_date == today


def matches_status(record: RosterRecord, status_filter: str) -> bool:
    if not status_filter or status_filter == ALL_STATUSES:
        return True
    if status_filter == CONVERTED_FILTER:
        return record.status == CONVERTED_FILTER or record.status.startswith(CONVERTED_PREFIX)
    return record.status == status_filter


def matches_search(record: RosterRecord, query: str) -> bool:
    """Case-insensitive name/email match; phone is matched on the raw query."""
    if not query:
        return True
    needle = query.lower()
    return (
        needle in record.contact_name.lower()
        or needle in record.email.lower()
        or (record.phone is not None and query in record.phone)
    )


def _within(day: date | None, date_from: date | None, date_to: date | None) -> bool:
    if day is None:
        return False
    if date_from is not None and day < date_from:
        return False
    if date_to is not None and day > date_to:
        return False
    return True


def _matches_toggle(record: RosterRecord, toggle: RosterToggle | None, today: date) -> bool:
    if toggle is None:
        return True
    if toggle == RosterToggle.REFUNDED:
        return record.status == CallStatus.REFUNDED.value
    if toggle == RosterToggle.DISCONTINUED:
        return record.status == CallStatus.DISCONTINUED.value
    if toggle == RosterToggle.FULL_PAYMENT:
        return is_full_payment(record)
    if toggle == RosterToggle.REMAINING_DUE:
        return has_remaining_due(record)
    if toggle == RosterToggle.PAY_AFTER_EARNING:
        return is_pae_with_due(record)
    if toggle == RosterToggle.TODAY_FOLLOW_UP:
        return is_follow_up_today(record, today)
    return True


def _group_emis(emi_payments: Iterable[EmiPayment] | None) -> dict[str, list[EmiPayment]]:
    grouped: dict[str, list[EmiPayment]] = defaultdict(list)
    for emi in emi_payments or []:
        grouped[emi.appointment_id].append(emi)
    return grouped


# =============================================================================
# Filtering
# =============================================================================

def filter_records(
    records: Sequence[RosterRecord],
    filters: RosterFilters,
    *,
    today: date | None = None,
    org_timezone: str | None = None,
    emi_payments: Iterable[EmiPayment] | None = None,
) -> list[RosterRecord]:
    """
    Apply search, status, date range, closer/class, payment type and the
    active status card. Date bounds are inclusive calendar days in the
    organization's timezone; with the EMI payment type they apply to the
    record's installment dates instead of its conversion date.
    """
    today = today or org_today(org_timezone)
    emis = _group_emis(emi_payments)
    has_date_range = filters.date_from is not None or filters.date_to is not None

    def keep(record: RosterRecord) -> bool:
        if not matches_search(record, filters.search_query):
            return False
        if not matches_status(record, filters.status_filter):
            return False
        if filters.closer_ids and record.closer_id not in filters.closer_ids:
            return False
        if filters.classes and record.classes_access not in filters.classes:
            return False

        record_emis = emis.get(record.id, [])
        if filters.payment_type == PaymentType.EMI and not record_emis:
            return False
        if filters.payment_type == PaymentType.INITIAL and record.cash_received <= 0:
            return False

        if has_date_range:
            if filters.payment_type == PaymentType.EMI:
                if not any(
                    _within(to_org_date(emi.payment_date, org_timezone), filters.date_from, filters.date_to)
                    for emi in record_emis
                ):
                    return False
            elif not _within(
                to_org_date(record.record_date, org_timezone), filters.date_from, filters.date_to
            ):
                return False

        return _matches_toggle(record, filters.active_toggle, today)

    return [record for record in records if keep(record)]


def filter_batches(batches: Sequence[Batch], query: str) -> list[Batch]:
    """Batch list search by name."""
    needle = query.strip().lower()
    if not needle:
        return list(batches)
    return [batch for batch in batches if needle in batch.name.lower()]


def count_active_filters(filters: RosterFilters, *, include_payment_type: bool = True) -> int:
    """Badge count for the filter sheet (search is not counted)."""
    count = 0
    if filters.closer_ids:
        count += 1
    if filters.classes:
        count += 1
    if filters.date_from is not None or filters.date_to is not None:
        count += 1
    if filters.status_filter != ALL_STATUSES:
        count += 1
    if include_payment_type and filters.payment_type != PaymentType.ALL:
        count += 1
    if filters.active_toggle is not None:
        count += 1
    return count


def unique_closers(records: Iterable[RosterRecord]) -> list[CloserOption]:
    """Closers attached to at least one record, in first-seen order."""
    seen: dict[str, str] = {}
    for record in records:
        if record.closer_id and record.closer_name:
            seen[record.closer_id] = record.closer_name
    return [CloserOption(id=closer_id, name=name) for closer_id, name in seen.items()]


def unique_classes(records: Iterable[RosterRecord]) -> list[int]:
    return sorted({r.classes_access for r in records if r.classes_access})


# =============================================================================
# Aggregation
# =============================================================================

def _emi_total(record: RosterRecord, emis: dict[str, list[EmiPayment]]) -> float:
    return sum(emi.amount for emi in emis.get(record.id, []))


def compute_closer_breakdown(
    records: Iterable[RosterRecord],
    emi_payments: Iterable[EmiPayment] | None = None,
) -> list[CloserBucket]:
    """
    Group records by closer, sorted by cash received (highest first).

    Records without a closer land in the manual bucket. PAE balances are
    left out of each bucket's due.
    """
    emis = _group_emis(emi_payments)
    buckets: dict[str, CloserBucket] = {}
    for record in records:
        closer_id = record.closer_id or MANUAL_CLOSER_ID
        bucket = buckets.get(closer_id)
        if bucket is None:
            bucket = CloserBucket(
                closer_id=closer_id,
                closer_name=record.closer_name or MANUAL_CLOSER_LABEL,
            )
            buckets[closer_id] = bucket
        bucket.offered += record.offer_amount
        bucket.received += record.cash_received
        if not record.pay_after_earning:
            bucket.due += record.due_amount
        bucket.emi_collected += _emi_total(record, emis)
        bucket.count += 1
    return sorted(buckets.values(), key=lambda b: b.received, reverse=True)


def sum_breakdown(breakdown: Iterable[CloserBucket]) -> BreakdownTotals:
    totals = BreakdownTotals()
    for bucket in breakdown:
        totals.offered += bucket.offered
        totals.received += bucket.received
        totals.due += bucket.due
        totals.emi_collected += bucket.emi_collected
        totals.count += bucket.count
    return totals


def compute_global_totals(
    records: Sequence[RosterRecord],
    *,
    today: date,
    emi_payments: Iterable[EmiPayment] | None = None,
) -> GlobalTotals:
    """Summary cards over the full roster."""
    emis = _group_emis(emi_payments)
    active = [r for r in records if is_active(r)]
    refunded = [r for r in records if r.status == CallStatus.REFUNDED.value]
    discontinued = [r for r in records if r.status == CallStatus.DISCONTINUED.value]
    with_due = [r for r in active if has_remaining_due(r)]
    pae = [r for r in active if is_pae_with_due(r)]

    return GlobalTotals(
        offered=sum(r.offer_amount for r in active),
        received=sum(r.cash_received for r in active),
        due=sum(r.due_amount for r in with_due),
        count=len(active),
        full_payment_count=sum(1 for r in active if is_full_payment(r)),
        due_payment_count=len(with_due),
        refunded_count=len(refunded),
        refunded_received=sum(r.cash_received for r in refunded),
        discontinued_count=len(discontinued),
        discontinued_received=sum(r.cash_received for r in discontinued),
        emi_collected=sum(_emi_total(r, emis) for r in active),
        pae_amount=sum(r.due_amount for r in pae),
        pae_count=len(pae),
        # Reminders matter for every record, refunded or not
        today_follow_up_count=sum(1 for r in records if is_follow_up_today(r, today)),
    )


def compute_totals(
    records: Sequence[RosterRecord],
    *,
    today: date | None = None,
    org_timezone: str | None = None,
    emi_payments: Iterable[EmiPayment] | None = None,
    breakdown_records: Sequence[RosterRecord] | None = None,
) -> RosterTotals:
    """
    Closer breakdowns and summary totals for a roster.

    Global totals always cover `records`. Breakdowns cover
    `breakdown_records` when given (e.g. the filtered list), otherwise
    `records` as well.
    """
    today = today or org_today(org_timezone)
    emi_list = list(emi_payments or [])
    scoped = records if breakdown_records is None else breakdown_records

    active = [r for r in scoped if is_active(r)]
    refunded = [r for r in scoped if r.status == CallStatus.REFUNDED.value]
    discontinued = [r for r in scoped if r.status == CallStatus.DISCONTINUED.value]

    closer_breakdown = compute_closer_breakdown(active, emi_list)
    refunded_breakdown = compute_closer_breakdown(refunded, emi_list)
    discontinued_breakdown = compute_closer_breakdown(discontinued, emi_list)

    return RosterTotals(
        closer_breakdown=closer_breakdown,
        totals=sum_breakdown(closer_breakdown),
        refunded_breakdown=refunded_breakdown,
        refunded_totals=sum_breakdown(refunded_breakdown),
        discontinued_breakdown=discontinued_breakdown,
        discontinued_totals=sum_breakdown(discontinued_breakdown),
        all_students_totals=compute_global_totals(records, today=today, emi_payments=emi_list),
    )
