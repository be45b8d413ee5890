"""
AI flows package.

Schema-validated prompts sent to Gemini.
"""

from pesa_path.flows.financial import FinancialFlows, recent_transactions
from pesa_path.flows.llm import FlowError, PromptRunner, parse_structured
from pesa_path.flows.schemas import (
    AdviceUserData,
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

__all__ = [
    "FinancialFlows",
    "FlowError",
    "PromptRunner",
    "parse_structured",
    "recent_transactions",
    # Schemas
    "AdviceUserData",
    "BudgetWarningInput",
    "BudgetWarningOutput",
    "DailyTipOutput",
    "FinancialAdviceInput",
    "FinancialAdviceOutput",
    "FlowTransaction",
    "GoalPredictionInput",
    "GoalPredictionOutput",
    "InvestmentTipsInput",
    "InvestmentTipsOutput",
]
