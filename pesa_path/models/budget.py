"""
Budget Planner Models for Pesa Path

Budget categories are stored per period: each category document carries
the key of the week or month it was created for, and the planner only
shows categories whose key matches the current period.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BudgetPeriod(str, Enum):
    """Length of a budget period."""
    MONTHLY = "monthly"
    WEEKLY = "weekly"

    @property
    def noun(self) -> str:
        """'month' or 'week', for sentences like 'the current month'."""
        return self.value[:-2]


class BudgetCategoryCreate(BaseModel):
    """The "Add Category" form."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2)
    budgeted: float = Field(..., gt=0)


class BudgetCategory(BaseModel):
    """A stored `users/{uid}/budgetCategories/{id}` document."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(..., alias="userId")
    name: str
    budgeted: float = Field(..., ge=0)
    period: str = Field(..., description="Period key, e.g. '2025-0' or '2025-W3'")

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})


class CategorySpend(BaseModel):
    """A category together with what was spent against it this period."""

    category: BudgetCategory
    spent: float = Field(default=0, ge=0)

    @property
    def progress_percent(self) -> float:
        if self.category.budgeted <= 0:
            return 0.0
        return self.spent / self.category.budgeted * 100

    @property
    def remaining(self) -> float:
        """Negative when over budget."""
        return self.category.budgeted - self.spent

    @property
    def is_over_budget(self) -> bool:
        return self.progress_percent > 100


class BudgetSummary(BaseModel):
    """Everything the Money Planner page shows for one period."""

    period: BudgetPeriod
    period_key: str
    period_start: date
    period_end: date
    income: float = 0
    categories: list[CategorySpend] = Field(default_factory=list)

    @property
    def total_budgeted(self) -> float:
        return sum(c.category.budgeted for c in self.categories)

    @property
    def total_spent(self) -> float:
        return sum(c.spent for c in self.categories)

    @property
    def remaining(self) -> float:
        return self.total_budgeted - self.total_spent

    @property
    def overall_progress(self) -> float:
        if self.total_budgeted <= 0:
            return 0.0
        return self.total_spent / self.total_budgeted * 100


class TransactionAssignment(BaseModel):
    """One row of the "Assign Withdrawals" dialog."""
    model_config = ConfigDict(str_strip_whitespace=True)

    transaction_id: str
    category_id: Optional[str] = None
    reason: Optional[str] = None
