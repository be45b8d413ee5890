"""Money planner: budget periods and spend aggregation."""

from pesa_path.planner.budgeting import (
    assignment_updates,
    categories_for_period,
    category_spend,
    end_of_week,
    local_date,
    period_bounds,
    period_key,
    start_of_week,
    summarize_budget,
    transactions_in_period,
    unassigned_withdrawals,
    week_number,
)

__all__ = [
    "assignment_updates",
    "categories_for_period",
    "category_spend",
    "end_of_week",
    "local_date",
    "period_bounds",
    "period_key",
    "start_of_week",
    "summarize_budget",
    "transactions_in_period",
    "unassigned_withdrawals",
    "week_number",
]
