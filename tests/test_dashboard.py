"""
Tests for dashboard composition.
"""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock

from pesa_path.flows import FlowError
from pesa_path.insights import (
    INVESTMENT_OPTIONS,
    TIP_FALLBACK,
    DailyTipCache,
    cash_flow_chart,
    chart_label,
    describe_transaction,
    format_money,
    overview_cards,
    recent_transactions,
)
from pesa_path.models.transaction import Transaction, TransactionType
from pesa_path.models.user import Streak, UserProfile


def _txn(txn_id, amount, when, kind=TransactionType.DEPOSIT, **extra):
    return Transaction(
        id=txn_id,
        user_id="u1",
        amount=amount,
        type=kind,
        timestamp=when,
        **extra,
    )


def _utc(year, month, day, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


class TestFormatMoney:
    """Tests for money formatting."""

    def test_whole_amount(self):
        """Test thousands separators without decimals."""
        assert format_money(1250000) == "UGX 1,250,000"

    def test_fractional_amount(self):
        """Test decimals are shown when present."""
        assert format_money(1250.5) == "UGX 1,250.50"

    def test_other_currency(self):
        """Test the currency prefix is configurable."""
        assert format_money(10, "KES") == "KES 10"


class TestOverviewCards:
    """Tests for the four overview cards."""

    def test_cards_from_profile_and_streak(self):
        """Test both balance cards show total savings."""
        profile = UserProfile(id="u1", total_savings=25000)
        cards = overview_cards(profile, Streak(xp=40, streak_length=3))

        assert [c.title for c in cards] == [
            "Current Balance", "Total Savings", "XP Points", "Saving Streak",
        ]
        assert cards[0].value == cards[1].value == "UGX 25,000"
        assert cards[2].value == "40"
        assert cards[3].value == "3 days"

    def test_cards_without_data(self):
        """Test missing profile and streak show zeros."""
        cards = overview_cards(None, None)
        assert cards[0].value == "UGX 0"
        assert cards[3].value == "0 days"


class TestCashFlowChart:
    """Tests for the deposits vs. withdrawals chart."""

    def test_seven_days_oldest_first(self):
        """Test one row per day ending today."""
        rows = cash_flow_chart([], today=date(2025, 1, 15))
        assert len(rows) == 7
        assert rows[0].day == date(2025, 1, 9)
        assert rows[-1].day == date(2025, 1, 15)
        assert rows[0].label == "Jan 9"

    def test_sums_per_day(self):
        """Test deposits and withdrawals are summed by date."""
        transactions = [
            _txn("t1", 100, _utc(2025, 1, 15)),
            _txn("t2", 50, _utc(2025, 1, 15), kind=TransactionType.WITHDRAWAL),
            _txn("t3", 25, _utc(2025, 1, 15, hour=8)),
            _txn("t4", 30, _utc(2025, 1, 9)),
        ]
        rows = cash_flow_chart(transactions, today=date(2025, 1, 15))

        assert rows[-1].deposits == 125
        assert rows[-1].withdrawals == 50
        assert rows[0].deposits == 30

    def test_ignores_outside_window(self):
        """Test older days, pending rows and last year's same day are ignored."""
        transactions = [
            _txn("old", 999, _utc(2025, 1, 8)),
            _txn("pending", 999, None),
            _txn("last_year", 999, _utc(2024, 1, 15)),
        ]
        rows = cash_flow_chart(transactions, today=date(2025, 1, 15))
        assert sum(r.deposits for r in rows) == 0

    def test_chart_label(self):
        """Test labels have no leading zero."""
        assert chart_label(date(2025, 3, 5)) == "Mar 5"


class TestRecentTransactions:
    """Tests for the recent transactions card."""

    def test_newest_first_with_pending_on_top(self):
        """Test pending timestamps count as newest."""
        transactions = [
            _txn("old", 10, _utc(2025, 1, 1)),
            _txn("new", 10, _utc(2025, 1, 10)),
            _txn("pending", 10, None),
        ]
        assert [t.id for t in recent_transactions(transactions)] == ["pending", "new", "old"]

    def test_limit(self):
        """Test at most five rows by default."""
        transactions = [_txn(f"t{i}", 10, _utc(2025, 1, i + 1)) for i in range(8)]
        assert len(recent_transactions(transactions)) == 5

    def test_generator_input(self):
        """Test a one-shot iterable keeps its timestamped rows."""
        transactions = (
            _txn(name, 10, when)
            for name, when in [("old", _utc(2025, 1, 1)), ("pending", None), ("new", _utc(2025, 1, 10))]
        )
        assert [t.id for t in recent_transactions(transactions)] == ["pending", "new", "old"]

    def test_describe_with_reason(self):
        """Test the reason is the headline when present."""
        txn = _txn("t1", 10, None, method="MTN MoMo", reason="School fees")
        assert describe_transaction(txn) == ("School fees", "MTN MoMo")

    def test_describe_without_reason(self):
        """Test the method is the headline otherwise."""
        txn = _txn("t1", 10, None, method="Airtel Money")
        assert describe_transaction(txn) == ("Airtel Money", "")


class TestDailyTipCache:
    """Tests for the once-a-day tip."""

    @pytest.mark.asyncio
    async def test_tip_is_cached_for_the_day(self):
        """Test the second call on the same day does not fetch."""
        cache = DailyTipCache()
        fetch = AsyncMock(return_value="Save 10% of every payment.")

        first = await cache.get(date(2025, 1, 15), fetch)
        second = await cache.get(date(2025, 1, 15), fetch)

        assert first == second == "Save 10% of every payment."
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_new_day_fetches_again(self):
        """Test a new date gets a new tip."""
        cache = DailyTipCache()
        fetch = AsyncMock(side_effect=["Tip one", "Tip two"])

        await cache.get(date(2025, 1, 15), fetch)
        assert await cache.get(date(2025, 1, 16), fetch) == "Tip two"

    @pytest.mark.asyncio
    async def test_failure_returns_fallback_and_is_not_cached(self):
        """Test a failed fetch is retried on the next call."""
        cache = DailyTipCache()
        fetch = AsyncMock(side_effect=[FlowError("daily_tip", "boom"), "Fresh tip"])

        assert await cache.get(date(2025, 1, 15), fetch) == TIP_FALLBACK
        assert cache.cached(date(2025, 1, 15)) is None
        assert await cache.get(date(2025, 1, 15), fetch) == "Fresh tip"


class TestInvestmentOptions:
    """Tests for the investment catalogue."""

    def test_catalogue(self):
        """Test six options with SACCOs linking inside the app."""
        assert len(INVESTMENT_OPTIONS) == 6
        internal = [o.title for o in INVESTMENT_OPTIONS if o.is_internal]
        assert internal == ["SACCO Memberships"]
