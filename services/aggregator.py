"""Filtering, grouping and summary figures over already-fetched records.

Every function here is pure: it reads the records it is given and returns new
values, never mutating its input and never touching the network. Money is
accumulated as Decimal so totals are exact to the cent; conversion to display
strings happens in utils.currency.

Records are the dataclasses from models/. Functions only rely on the attributes
they name (``amount``, ``date``, ``category``, ``payment_method`` ...), so any
object exposing those attributes works.
"""
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal

from models.category import Category, PaymentMethod, SavingsType
from models.emi import EMI, EMIInstallment, EMISummary
from models.expense import PaymentMethodTotal
from models.lending import LendingSummary, lending_status
from models.savings import MonthlySavings, SavingsSummary
from utils.constants import ALL
from utils.currency import ZERO, to_money
from utils.date_helpers import add_months, month_key, parse_date, parse_datetime

__all__ = [
    "filter_by_category",
    "filter_by_period",
    "filter_by_payment_method",
    "filter_by_status",
    "filter_by_type",
    "filter_by_month_key",
    "current_month_records",
    "previous_month_records",
    "current_year_records",
    "sum_amounts",
    "group_by_category",
    "group_by_payment_method",
    "group_by_month",
    "lending_status",
    "compute_lending_summary",
    "compute_savings_summary",
    "compute_emi_summary",
    "is_overdue",
    "overdue_installments",
    "installments_due_in_month",
]


def _category_of(record) -> Category:
    return Category.parse(getattr(record, "category", None))


def _payment_method_of(record) -> PaymentMethod:
    return PaymentMethod.parse(getattr(record, "payment_method", None))


def _year_of(record) -> int | None:
    d = parse_date(record.date)
    return d.year if d else None


# ── Filters ───────────────────────────────────────────────────────────────────

def filter_by_category(records: Iterable, category) -> list:
    """Records in ``category``; everything when ``category`` is 'all'."""
    if category == ALL:
        return list(records)
    return [r for r in records if _category_of(r) == category]


def filter_by_period(records: Iterable, month, year) -> list:
    """Records dated in the given calendar month of ``year``.

    ``month`` is a 0-based month index (0 = January), as an int or a numeric
    string, or 'all' to match the whole year. Only the stored calendar date is
    read; no timezone conversion is applied.
    """
    year = int(year)
    if month == ALL:
        return [r for r in records if _year_of(r) == year]
    month = int(month) + 1
    result = []
    for r in records:
        d = parse_date(r.date)
        if d is not None and d.year == year and d.month == month:
            result.append(r)
    return result


def filter_by_payment_method(records: Iterable, method) -> list:
    """Records paid with ``method``; a record without one counts as 'self'."""
    if method == ALL:
        return list(records)
    return [r for r in records if _payment_method_of(r) == method]


def filter_by_status(records: Iterable, status) -> list:
    """Lending records whose derived status equals ``status`` ('all' passes through)."""
    if status == ALL:
        return list(records)
    return [r for r in records if r.status == status]


def filter_by_type(transactions: Iterable, type_) -> list:
    if type_ == ALL:
        return list(transactions)
    return [t for t in transactions if t.type == type_]


def filter_by_month_key(records: Iterable, key: str) -> list:
    """Records whose date falls in the 'YYYY-MM' month ``key`` ('all' passes through)."""
    if key == ALL:
        return list(records)
    return [r for r in records if month_key(r.date) == key]


def current_month_records(records: Iterable, today: date | None = None) -> list:
    ref = today or date.today()
    return filter_by_period(records, ref.month - 1, ref.year)


def previous_month_records(records: Iterable, today: date | None = None) -> list:
    ref = add_months((today or date.today()).replace(day=1), -1)
    return filter_by_period(records, ref.month - 1, ref.year)


def current_year_records(records: Iterable, today: date | None = None) -> list:
    ref = today or date.today()
    return filter_by_period(records, ALL, ref.year)


# ── Totals and groupings ──────────────────────────────────────────────────────

def sum_amounts(records: Iterable) -> Decimal:
    """Exact sum of ``amount``; 0.00 for an empty sequence."""
    return sum((to_money(r.amount) for r in records), ZERO)


def group_by_category(records: Iterable) -> dict[Category, Decimal]:
    """Total per category. All six categories are always present."""
    totals = {c: ZERO for c in Category}
    for r in records:
        totals[_category_of(r)] += to_money(r.amount)
    return totals


def group_by_payment_method(records: Iterable) -> dict[PaymentMethod, PaymentMethodTotal]:
    """Total and count per payment method, for all three methods."""
    totals = {m: PaymentMethodTotal() for m in PaymentMethod}
    for r in records:
        bucket = totals[_payment_method_of(r)]
        bucket.total += to_money(r.amount)
        bucket.count += 1
    return totals


def group_by_month(transactions: Iterable) -> list[MonthlySavings]:
    """Deposits/withdrawals per 'YYYY-MM', one entry per month present, oldest first."""
    months: dict[str, MonthlySavings] = {}
    for t in transactions:
        key = month_key(t.date)
        row = months.setdefault(key, MonthlySavings(month=key))
        if t.type == SavingsType.DEPOSIT:
            row.deposits += to_money(t.amount)
        else:
            row.withdrawals += to_money(t.amount)
    return [months[k] for k in sorted(months)]


# ── Summaries ─────────────────────────────────────────────────────────────────

def compute_lending_summary(records: Sequence) -> LendingSummary:
    summary = LendingSummary(total_records=len(records))
    for r in records:
        summary.total_lent += to_money(r.amount)
        summary.total_returned += to_money(r.returned_amount)
        summary.status_counts[r.status] += 1
    summary.pending_amount = summary.total_lent - summary.total_returned
    return summary


def compute_savings_summary(transactions: Sequence) -> SavingsSummary:
    deposits = sum_amounts(filter_by_type(transactions, SavingsType.DEPOSIT))
    withdrawals = sum_amounts(filter_by_type(transactions, SavingsType.WITHDRAWAL))
    return SavingsSummary(
        total_deposits=deposits,
        total_withdrawals=withdrawals,
        balance=deposits - withdrawals,
        transaction_count=len(transactions),
    )


def is_overdue(due_date: str, is_paid: bool, now: datetime | None = None) -> bool:
    """True iff unpaid and the due moment is strictly before ``now``.

    A date-only due date means local midnight of that day.
    """
    if is_paid:
        return False
    due = parse_datetime(due_date)
    if due is None:
        return False
    return due < (now or datetime.now())


def overdue_installments(
    emis: Iterable[EMI], now: datetime | None = None
) -> list[tuple[EMI, EMIInstallment]]:
    ref = now or datetime.now()
    return [
        (emi, inst)
        for emi in emis
        for inst in emi.installments
        if is_overdue(inst.due_date, inst.is_paid, ref)
    ]


def installments_due_in_month(
    emis: Iterable[EMI], year: int, month: int
) -> list[tuple[EMI, EMIInstallment]]:
    """Unpaid installments due in the given calendar month (``month`` is 1-12)."""
    result = []
    for emi in emis:
        for inst in emi.installments:
            if inst.is_paid:
                continue
            d = parse_date(inst.due_date)
            if d is not None and d.year == year and d.month == month:
                result.append((emi, inst))
    return result


def compute_emi_summary(emis: Sequence[EMI], now: datetime | None = None) -> EMISummary:
    ref = now or datetime.now()
    summary = EMISummary()
    for emi in emis:
        if emi.is_active:
            summary.total_active_loans += 1
            summary.total_monthly_emi += to_money(emi.monthly_amount)
        for inst in emi.installments:
            if inst.is_paid:
                summary.total_paid_amount += to_money(inst.paid_amount)
            else:
                summary.total_outstanding += to_money(inst.amount)
    summary.overdue_count = len(overdue_installments(emis, ref))
    summary.upcoming_this_month = len(installments_due_in_month(emis, ref.year, ref.month))
    return summary
