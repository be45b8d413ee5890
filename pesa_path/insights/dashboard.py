"""
Dashboard Composition

Pure functions that turn stored data into what the dashboard and
investments pages display. Nothing here talks to storage; the
orchestrator fetches and passes the data in.
"""

from datetime import date, timedelta, tzinfo
from typing import Awaitable, Callable, Iterable, Optional

import structlog
from pydantic import BaseModel, Field

from pesa_path.flows.llm import FlowError
from pesa_path.models.transaction import Transaction, TransactionType
from pesa_path.models.user import Streak, UserProfile
from pesa_path.planner.budgeting import local_date


logger = structlog.get_logger()

TIP_FALLBACK = "Could not load a tip right now. Please try again later."


def format_money(amount: float, currency: str = "UGX") -> str:
    """'UGX 1,250,000'. Fractions are shown only when present."""
    if float(amount).is_integer():
        return f"{currency} {amount:,.0f}"
    return f"{currency} {amount:,.2f}"


# =============================================================================
# OVERVIEW CARDS
# =============================================================================

class OverviewCard(BaseModel):
    title: str
    value: str
    caption: str = ""


def overview_cards(
    profile: Optional[UserProfile],
    streak: Optional[Streak],
    currency: str = "UGX",
) -> list[OverviewCard]:
    """
    The four cards at the top of the dashboard.

    Current Balance and Total Savings both show `totalSavings`: there is
    no separate spending account.
    """
    savings = format_money(profile.total_savings if profile else 0, currency)
    xp = streak.xp if streak else 0
    streak_days = streak.streak_length if streak else 0

    return [
        OverviewCard(title="Current Balance", value=savings),
        OverviewCard(title="Total Savings", value=savings),
        OverviewCard(title="XP Points", value=str(xp), caption="Keep saving!"),
        OverviewCard(title="Saving Streak", value=f"{streak_days} days", caption="On fire!"),
    ]


# =============================================================================
# CASH FLOW CHART
# =============================================================================

class ChartDay(BaseModel):
    day: date
    label: str
    deposits: float = 0
    withdrawals: float = 0


def chart_label(day: date) -> str:
    """'Jan 23'."""
    return f"{day:%b} {day.day}"


def cash_flow_chart(
    transactions: Iterable[Transaction],
    today: date,
    days: int = 7,
    tz: Optional[tzinfo] = None,
) -> list[ChartDay]:
    """
    Deposits and withdrawals summed per day for the last `days` days,
    today included, oldest first.
    """
    rows = [
        ChartDay(day=d, label=chart_label(d))
        for d in (today - timedelta(days=offset) for offset in range(days - 1, -1, -1))
    ]
    by_day = {row.day: row for row in rows}

    for t in transactions:
        if t.timestamp is None:
            continue
        row = by_day.get(local_date(t.timestamp, tz))
        if row is None:
            continue
        if t.type == TransactionType.DEPOSIT:
            row.deposits += t.amount
        else:
            row.withdrawals += t.amount

    return rows


# =============================================================================
# RECENT TRANSACTIONS
# =============================================================================

def recent_transactions(
    transactions: Iterable[Transaction],
    limit: int = 5,
) -> list[Transaction]:
    """Newest first. Transactions still waiting for a server timestamp count as newest."""
    transactions = list(transactions)
    pending = [t for t in transactions if t.timestamp is None]
    stamped = sorted(
        (t for t in transactions if t.timestamp is not None),
        key=lambda t: t.timestamp,
        reverse=True,
    )
    return (pending + stamped)[:limit]


def describe_transaction(transaction: Transaction) -> tuple[str, str]:
    """(headline, subtitle): the reason if given, with the method underneath."""
    method = transaction.method or ""
    if transaction.reason:
        return transaction.reason, method
    return method, ""


# =============================================================================
# DAILY TIP
# =============================================================================

class DailyTipCache:
    """
    One tip per calendar day.

    A cached tip for today is reused. A failed fetch returns the fallback
    text and is not cached, so the next call tries again.
    """

    def __init__(self):
        self._day: Optional[date] = None
        self._tip: Optional[str] = None

    def cached(self, today: date) -> Optional[str]:
        return self._tip if self._day == today else None

    async def get(self, today: date, fetch: Callable[[], Awaitable[str]]) -> str:
        tip = self.cached(today)
        if tip is not None:
            return tip

        try:
            tip = await fetch()
        except FlowError as e:
            logger.warning("daily_tip_failed", error=str(e))
            return TIP_FALLBACK

        self._day, self._tip = today, tip
        return tip


# =============================================================================
# INVESTMENTS
# =============================================================================

class InvestmentOption(BaseModel):
    title: str
    description: str
    risk_level: str
    avg_return: str
    link: str = Field(..., description="External URL, or an in-app page path")

    @property
    def is_internal(self) -> bool:
        return self.link.startswith("/")


INVESTMENT_OPTIONS: tuple[InvestmentOption, ...] = (
    InvestmentOption(
        title="Government Treasury Bonds",
        description=(
            "Low-risk investments backed by the government, offering fixed interest "
            "payments. Ideal for capital preservation."
        ),
        risk_level="Low",
        avg_return="8-12% p.a.",
        link="https://www.bou.or.ug/bou/bou-downloads/financial_markets/T-Bills-Bonds/FAQs-on-Govt-Securities.html",
    ),
    InvestmentOption(
        title="Real Estate Investment Trusts (REITs)",
        description=(
            "Invest in a portfolio of income-generating properties without buying "
            "physical real estate. Offers high dividends."
        ),
        risk_level="Medium",
        avg_return="5-15% p.a.",
        link="https://www.investopedia.com/terms/r/reit.asp",
    ),
    InvestmentOption(
        title="Stock Market (Index Funds)",
        description=(
            "Diversify your investment across the top companies in the market via "
            "the Uganda Securities Exchange."
        ),
        risk_level="Medium",
        avg_return="10-18% p.a.",
        link="https://www.use.or.ug/",
    ),
    InvestmentOption(
        title="SACCO Memberships",
        description=(
            "Join a Savings and Credit Cooperative Organization to access loans, "
            "earn dividends, and build a community."
        ),
        risk_level="Low to Medium",
        avg_return="Varies (Dividends)",
        link="/saccos",
    ),
    InvestmentOption(
        title="High-Growth Tech Stocks",
        description=(
            "Invest in individual technology companies with high growth potential. "
            "Higher risk, but potential for high rewards."
        ),
        risk_level="High",
        avg_return="20%+ p.a. (Volatile)",
        link="https://www.nasdaq.com/market-activity/stocks/screener",
    ),
    InvestmentOption(
        title="Agricultural Investments (Agri-tech)",
        description=(
            "Fund modern farming projects through agri-tech platforms. A growing "
            "sector with sustainable returns."
        ),
        risk_level="Medium to High",
        avg_return="15-25% p.a.",
        link="https://www.investopedia.com/articles/investing/090815/top-agriculture-stocks-etfs.asp",
    ),
)
