"""
Budget Period Bucketing

DESIGN DECISION: All planner arithmetic is DETERMINISTIC and pure.
It runs over transactions and categories already fetched from storage,
so the same inputs always give the same summary and it can be tested
without a database.

PERIOD KEYS (stored on every budget category document):
    monthly: "{year}-{month0}"   month0 is zero-based, January = 0
    weekly:  "{year}-W{week}"    Sunday-start weeks, week 1 contains Jan 1

Keys keep the format the web client already writes, so categories
created there still match here.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional

from pesa_path.models.budget import (
    BudgetCategory,
    BudgetPeriod,
    BudgetSummary,
    CategorySpend,
    TransactionAssignment,
)
from pesa_path.models.transaction import Transaction, TransactionType


def local_date(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of `moment` in `tz` (naive datetimes are taken as-is)."""
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.date()


def start_of_week(day: date) -> date:
    """The Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    """The Saturday on or after `day`."""
    return start_of_week(day) + timedelta(days=6)


def week_number(day: date) -> int:
    """
    Sunday-start week number where week 1 is the week containing Jan 1.

    The last days of December fall in week 1 once the week that contains
    the next Jan 1 has started.
    """
    week_start = start_of_week(day)
    if week_start >= start_of_week(date(day.year + 1, 1, 1)):
        return 1
    first_week_start = start_of_week(date(day.year, 1, 1))
    return (week_start - first_week_start).days // 7 + 1


def period_key(day: date, period: BudgetPeriod) -> str:
    if period == BudgetPeriod.MONTHLY:
        return f"{day.year}-{day.month - 1}"
    return f"{day.year}-W{week_number(day)}"


def period_bounds(today: date, period: BudgetPeriod) -> tuple[date, date]:
    """First and last day (inclusive) of the period containing `today`."""
    if period == BudgetPeriod.MONTHLY:
        start = today.replace(day=1)
        next_month = (start + timedelta(days=32)).replace(day=1)
        return start, next_month - timedelta(days=1)
    return start_of_week(today), end_of_week(today)


def categories_for_period(
    categories: Iterable[BudgetCategory],
    key: str,
) -> list[BudgetCategory]:
    return [c for c in categories if c.period == key]


def transactions_in_period(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
    tz: Optional[tzinfo] = None,
) -> list[Transaction]:
    """Transactions whose local date falls in [start, end]. Pending timestamps are skipped."""
    return [
        t for t in transactions
        if t.timestamp is not None and start <= local_date(t.timestamp, tz) <= end
    ]


def category_spend(
    categories: Iterable[BudgetCategory],
    transactions: Iterable[Transaction],
) -> list[CategorySpend]:
    """Per category, the sum of withdrawals tagged with its ID."""
    spent: dict[str, float] = {}
    for t in transactions:
        if t.type == TransactionType.WITHDRAWAL and t.category_id:
            spent[t.category_id] = spent.get(t.category_id, 0) + t.amount

    return [CategorySpend(category=c, spent=spent.get(c.id, 0)) for c in categories]


def summarize_budget(
    income: float,
    categories: Iterable[BudgetCategory],
    transactions: Iterable[Transaction],
    period: BudgetPeriod,
    today: date,
    tz: Optional[tzinfo] = None,
) -> BudgetSummary:
    """
    Everything the planner shows for the period containing `today`.

    Only categories created for this period count, and only transactions
    dated inside it are matched against them.
    """
    key = period_key(today, period)
    start, end = period_bounds(today, period)

    current = categories_for_period(categories, key)
    in_period = transactions_in_period(transactions, start, end, tz)

    return BudgetSummary(
        period=period,
        period_key=key,
        period_start=start,
        period_end=end,
        income=income,
        categories=category_spend(current, in_period),
    )


def unassigned_withdrawals(
    transactions: Iterable[Transaction],
    period: BudgetPeriod,
    today: date,
    tz: Optional[tzinfo] = None,
) -> list[Transaction]:
    """Withdrawals without a category whose period key is the current one."""
    key = period_key(today, period)
    return [
        t for t in transactions
        if t.type == TransactionType.WITHDRAWAL
        and not t.category_id
        and t.timestamp is not None
        and period_key(local_date(t.timestamp, tz), period) == key
    ]


def assignment_updates(
    assignments: Iterable[TransactionAssignment],
) -> dict[str, dict[str, str]]:
    """
    Firestore field updates per transaction ID.

    Rows without a category are dropped; `reason` is only written when
    the user typed one.
    """
    updates = {}
    for assignment in assignments:
        if not assignment.category_id:
            continue
        fields = {"categoryId": assignment.category_id}
        if assignment.reason:
            fields["reason"] = assignment.reason
        updates[assignment.transaction_id] = fields
    return updates
