"""Call appointment and enrollment status enums."""

from enum import Enum


class CallStatus(str, Enum):
    """Status of a call appointment / enrolled student."""

    SCHEDULED = "scheduled"
    CONVERTED = "converted"
    CONVERTED_BEGINNER = "converted_beginner"
    CONVERTED_INTERMEDIATE = "converted_intermediate"
    CONVERTED_ADVANCE = "converted_advance"
    BOOKING_AMOUNT = "booking_amount"
    NOT_CONVERTED = "not_converted"
    NOT_DECIDED = "not_decided"
    SO_SO = "so_so"
    RESCHEDULE = "reschedule"
    PENDING = "pending"
    NO_SHOW = "no_show"
    ACTIVE = "active"
    REFUNDED = "refunded"
    DISCONTINUED = "discontinued"


# Statuses that take a record out of the active receivables book
INACTIVE_STATUSES = frozenset({CallStatus.REFUNDED.value, CallStatus.DISCONTINUED.value})

# Status filter value matching "converted" and every "converted_*" tier
CONVERTED_FILTER = CallStatus.CONVERTED.value
CONVERTED_PREFIX = "converted_"

# Status filter value that disables status filtering
ALL_STATUSES = "all"


class PaymentType(str, Enum):
    """Payment type filter on the cohort batch screen."""

    ALL = "all"
    INITIAL = "initial"  # Initial cash received
    EMI = "emi"  # At least one installment recorded
