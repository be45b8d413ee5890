"""Dashboard and investments page composition."""

from pesa_path.insights.dashboard import (
    INVESTMENT_OPTIONS,
    TIP_FALLBACK,
    ChartDay,
    DailyTipCache,
    InvestmentOption,
    OverviewCard,
    cash_flow_chart,
    chart_label,
    describe_transaction,
    format_money,
    overview_cards,
    recent_transactions,
)

__all__ = [
    "INVESTMENT_OPTIONS",
    "TIP_FALLBACK",
    "ChartDay",
    "DailyTipCache",
    "InvestmentOption",
    "OverviewCard",
    "cash_flow_chart",
    "chart_label",
    "describe_transaction",
    "format_money",
    "overview_cards",
    "recent_transactions",
]
