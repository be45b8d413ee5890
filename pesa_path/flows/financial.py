"""
Financial AI Flows

CRITICAL BOUNDARIES:
- Flows only read the data they are given; they never touch storage
- Every output is schema-validated before it is returned
- Numbers shown to the user (balances, totals) come from storage,
  never from a flow
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pesa_path.config import get_settings
from pesa_path.flows import prompts
from pesa_path.flows.llm import PromptRunner
from pesa_path.flows.schemas import (
    BudgetWarningInput,
    BudgetWarningOutput,
    DailyTipOutput,
    FinancialAdviceInput,
    FinancialAdviceOutput,
    FlowTransaction,
    GoalPredictionInput,
    GoalPredictionOutput,
    InvestmentTipsInput,
    InvestmentTipsOutput,
)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def recent_transactions(
    transactions: list[FlowTransaction],
    now: datetime,
    window_days: int,
) -> list[FlowTransaction]:
    """Transactions strictly newer than `window_days` before `now`."""
    cutoff = _as_utc(now) - timedelta(days=window_days)
    return [t for t in transactions if _as_utc(t.timestamp) > cutoff]


class FinancialFlows:
    """
    The five prompt flows behind the dashboard, assistant and
    investments pages.
    """

    def __init__(self, runner: Optional[PromptRunner] = None):
        self._runner = runner or PromptRunner()
        self._settings = get_settings().app

    async def financial_advice(self, data: FinancialAdviceInput) -> FinancialAdviceOutput:
        prompt = prompts.FINANCIAL_ADVICE_PROMPT.format(
            query=data.query,
            age=data.user_data.age,
            income=data.user_data.income,
            saving_plan=data.user_data.saving_plan,
            total_savings=data.user_data.total_savings,
        )
        return await self._runner.run("financial_advice", prompt, FinancialAdviceOutput)

    async def investment_tips(self, data: InvestmentTipsInput) -> InvestmentTipsOutput:
        prompt = prompts.INVESTMENT_TIPS_PROMPT.format(
            saving_plan=data.saving_plan.value,
            age=data.age,
            income=data.income,
        )
        return await self._runner.run("investment_tips", prompt, InvestmentTipsOutput)

    async def daily_tip(self) -> DailyTipOutput:
        return await self._runner.run("daily_tip", prompts.DAILY_TIP_PROMPT, DailyTipOutput)

    async def budget_overspending_warning(
        self,
        data: BudgetWarningInput,
        now: Optional[datetime] = None,
    ) -> BudgetWarningOutput:
        """
        Ask whether recent spending is unsustainable.

        Only transactions from the overspending window are sent. With
        none left the answer is "not overspending" and the model is not
        called.
        """
        recent = recent_transactions(
            data.transactions,
            now or datetime.now(timezone.utc),
            self._settings.overspending_window_days,
        )
        if not recent:
            return BudgetWarningOutput(is_overspending=False, warning_message="")

        prompt = prompts.BUDGET_WARNING_PROMPT.format(
            income=data.income,
            transactions=prompts.format_transactions(recent),
        )
        return await self._runner.run("budget_overspending_warning", prompt, BudgetWarningOutput)

    async def predict_goal(self, data: GoalPredictionInput) -> GoalPredictionOutput:
        prompt = prompts.GOAL_PREDICTION_PROMPT.format(
            income=data.income,
            total_savings=data.total_savings,
            saving_goal=data.saving_goal,
            goal_deadline=data.goal_deadline,
            transactions=prompts.format_transactions(data.transactions),
        )
        return await self._runner.run("predict_goal", prompt, GoalPredictionOutput)
