"""
Input and output schemas for the AI flows.

Output schemas are sent to the model as JSON Schema (camelCase keys) and
every reply is validated against them before it reaches the app.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pesa_path.models.transaction import TransactionType
from pesa_path.models.user import SavingPlan


class FlowModel(BaseModel):
    """Accepts camelCase from the model and snake_case from Python."""
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# INPUTS
# =============================================================================

class AdviceUserData(FlowModel):
    """User data used to tailor the advice."""

    age: int = Field(..., description="The user's age.")
    income: float = Field(..., description="The user's income.")
    saving_plan: str = Field(
        ...,
        alias="savingPlan",
        description="The user's saving plan type (weekly, monthly, yearly).",
    )
    total_savings: float = Field(
        ...,
        alias="totalSavings",
        description="The user's total savings.",
    )


class FinancialAdviceInput(FlowModel):
    query: str = Field(..., min_length=1, description="The user query for financial advice.")
    user_data: AdviceUserData = Field(..., alias="userData")


class InvestmentTipsInput(FlowModel):
    saving_plan: SavingPlan = Field(..., alias="savingPlan")
    age: int = Field(..., gt=0)
    income: float = Field(..., gt=0)


class FlowTransaction(FlowModel):
    """The slice of a transaction the analysis prompts get to see."""

    type: TransactionType
    amount: float
    timestamp: datetime


class BudgetWarningInput(FlowModel):
    income: float = Field(..., description="The user's monthly income.")
    transactions: list[FlowTransaction] = Field(default_factory=list)


class GoalPredictionInput(FlowModel):
    income: float = Field(..., description="The user's monthly income.")
    total_savings: float = Field(..., alias="totalSavings")
    saving_goal: float = Field(..., gt=0, alias="savingGoal")
    goal_deadline: str = Field(
        ...,
        alias="goalDeadline",
        description="Deadline for the goal in ISO 8601 date format (YYYY-MM-DD).",
    )
    transactions: list[FlowTransaction] = Field(default_factory=list)


# =============================================================================
# OUTPUTS
# =============================================================================

class FinancialAdviceOutput(FlowModel):
    advice: str = Field(..., description="The personalized financial advice.")


class InvestmentTipsOutput(FlowModel):
    tips: str = Field(
        ...,
        description=(
            "Personalized investment tips for the user. Provide at least 3 "
            "distinct tips in a markdown list format."
        ),
    )


class DailyTipOutput(FlowModel):
    tip: str = Field(
        ...,
        description=(
            "A single, concise, and actionable financial tip for the day. "
            "Make it unique and interesting."
        ),
    )


class BudgetWarningOutput(FlowModel):
    is_overspending: bool = Field(
        ...,
        alias="isOverspending",
        description="Whether the user is determined to be overspending.",
    )
    warning_message: str = Field(
        default="",
        alias="warningMessage",
        description=(
            "A concise and helpful warning message if the user is "
            "overspending. Empty string if they are not."
        ),
    )


class GoalPredictionOutput(FlowModel):
    will_meet_goal: bool = Field(
        ...,
        alias="willMeetGoal",
        description="Whether the user is predicted to meet their savings goal on time.",
    )
    prediction_message: str = Field(
        ...,
        alias="predictionMessage",
        description="A concise, encouraging or advisory message explaining the prediction.",
    )
